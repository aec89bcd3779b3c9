"""Serialization and text rendering of ledger entities for the menu."""

from dataclasses import fields, is_dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any

from bank_ledger.models import Account, Customer, Money, Transaction


def to_dict(obj: Any) -> dict:
    """Convert a ledger entity to a JSON-compatible dictionary."""
    if isinstance(obj, Customer):
        return customer_to_dict(obj)
    elif isinstance(obj, Account):
        return account_to_dict(obj)
    elif is_dataclass(obj):
        return {f.name: serialize_value(getattr(obj, f.name)) for f in fields(obj)}
    elif isinstance(obj, dict):
        return obj
    else:
        return {"value": str(obj)}


def customer_to_dict(customer: Customer) -> dict:
    return {
        "customer_id": customer.customer_id,
        "name": customer.name,
        "email": customer.email,
        "created_at": serialize_value(customer.created_at),
        "accounts": [a.account_number for a in customer.accounts],
    }


def account_to_dict(account: Account) -> dict:
    return {
        "account_number": account.account_number,
        "owner_id": account.owner_id,
        "account_type": account.account_type.value,
        "status": account.status.value,
        "balance": str(account.balance),
        "created_at": serialize_value(account.created_at),
        "transactions": len(account.transactions),
    }


def serialize_value(value: Any) -> Any:
    """Serialize a value for JSON output."""
    if isinstance(value, (Money, Decimal)):
        return str(value)
    elif isinstance(value, Enum):
        return value.value
    elif isinstance(value, datetime):
        return value.isoformat()
    elif isinstance(value, date):
        return value.isoformat()
    elif isinstance(value, dict):
        return {k: serialize_value(v) for k, v in value.items()}
    elif isinstance(value, (list, tuple)):
        return [serialize_value(v) for v in value]
    return value


def format_customer(customer: Customer) -> str:
    count = len(customer.accounts)
    return (
        f"{customer.customer_id}  {customer.name} <{customer.email}>  "
        f"{count} account{'s' if count != 1 else ''}"
    )


def format_account(account: Account) -> str:
    return (
        f"{account.account_number}  {account.account_type.value:<8}  "
        f"{account.status.value:<6}  balance {account.balance}"
    )


def format_transaction(transaction: Transaction) -> str:
    line = (
        f"{transaction.timestamp:%Y-%m-%d %H:%M:%S}  {transaction.transaction_id}  "
        f"{transaction.kind.value:<12}  {str(transaction.amount):>12}  "
        f"balance {transaction.balance_after}"
    )
    if transaction.description:
        line += f"  {transaction.description}"
    return line
