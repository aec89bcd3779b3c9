"""Ledger domain models."""

from bank_ledger.models.account import Account
from bank_ledger.models.customer import Customer
from bank_ledger.models.enums import AccountStatus, AccountType, TransactionKind
from bank_ledger.models.money import Money
from bank_ledger.models.transaction import Transaction

__all__ = [
    "Account",
    "AccountStatus",
    "AccountType",
    "Customer",
    "Money",
    "Transaction",
    "TransactionKind",
]
