"""Bank service: customer and account registries plus ledger operations."""

import threading
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Iterator

from bank_ledger.config import LedgerConfig
from bank_ledger.exceptions import (
    LedgerError,
    LedgerIntegrityError,
    SameAccountError,
    UnknownAccountError,
    UnknownCustomerError,
)
from bank_ledger.identifiers import IdGenerator
from bank_ledger.logging import get_logger
from bank_ledger.models import (
    Account,
    AccountStatus,
    AccountType,
    Customer,
    Money,
    Transaction,
)
from bank_ledger.models.money import MoneyLike

logger = get_logger(__name__)


@dataclass
class BankService:
    """In-memory ledger with referential integrity between its entities.

    Customers and accounts are registered in insertion order and never
    removed. Every mutating operation either completes or raises a
    ``LedgerError`` leaving all balances and logs untouched.
    """

    ids: IdGenerator = field(default_factory=IdGenerator)
    balance_limit: Money | None = None

    _customers: dict[str, Customer] = field(default_factory=dict, init=False, repr=False)
    _accounts: dict[str, Account] = field(default_factory=dict, init=False, repr=False)
    _lock: threading.RLock = field(default_factory=threading.RLock, init=False, repr=False)

    @classmethod
    def from_config(cls, config: LedgerConfig) -> "BankService":
        """Create a service using the identifier strategy and limit in ``config``."""
        return cls(
            ids=IdGenerator(strategy=config.id_strategy),
            balance_limit=config.balance_limit,
        )

    # Registration

    def create_customer(self, name: str, email: str) -> Customer:
        """Register a new customer."""
        with self._lock:
            customer = Customer(customer_id=self.ids.customer_id(), name=name, email=email)
            self._customers[customer.customer_id] = customer
        logger.info(
            "Customer created",
            extra={"extra": {"operation": "create_customer", "customer_id": customer.customer_id}},
        )
        return customer

    def open_account(self, customer_id: str, account_type: AccountType | str) -> Account:
        """Open an ACTIVE, zero-balance account for an existing customer."""
        account_type = AccountType(account_type)
        with self._rejections("open_account", customer_id=customer_id), self._lock:
            customer = self.get_customer(customer_id)
            account = Account(
                account_number=self.ids.account_id(),
                owner_id=customer.customer_id,
                account_type=account_type,
                balance_limit=self.balance_limit,
                next_transaction_id=self.ids.transaction_id,
            )
            customer.attach_account(account)
            self._accounts[account.account_number] = account
        logger.info(
            "Account opened",
            extra={
                "extra": {
                    "operation": "open_account",
                    "customer_id": customer_id,
                    "account_id": account.account_number,
                    "account_type": account.account_type.value,
                }
            },
        )
        return account

    # Balance mutations

    def deposit(self, account_id: str, amount: MoneyLike, description: str = "") -> Money:
        """Credit an account; returns the new balance."""
        with self._rejections("deposit", account_id=account_id, amount=amount):
            account = self.get_account(account_id)
            with account.lock:
                transaction = account.deposit(amount, description)
                balance = account.balance
        self._log_posted("deposit", account_id, transaction)
        return balance

    def withdraw(self, account_id: str, amount: MoneyLike, description: str = "") -> Money:
        """Debit an account; returns the new balance."""
        with self._rejections("withdraw", account_id=account_id, amount=amount):
            account = self.get_account(account_id)
            with account.lock:
                transaction = account.withdraw(amount, description)
                balance = account.balance
        self._log_posted("withdraw", account_id, transaction)
        return balance

    def transfer(
        self,
        from_id: str,
        to_id: str,
        amount: MoneyLike,
        description: str = "",
    ) -> tuple[Money, Money]:
        """Move ``amount`` between two accounts as one atomic pair of records.

        Both accounts are locked in account-number order before either is
        touched. Every precondition is checked up front; if the credit leg
        still fails, the debit leg is reverted before the error propagates.

        Returns
        -------
        tuple[Money, Money]
            Balances of the source and destination after the transfer.
        """
        with self._rejections("transfer", from_id=from_id, to_id=to_id, amount=amount):
            source = self.get_account(from_id)
            target = self.get_account(to_id)
            if source is target:
                raise SameAccountError(f"Cannot transfer from {from_id} to itself")

            first, second = sorted((source, target), key=lambda a: a.account_number)
            with first.lock, second.lock:
                value = source.validate_amount(amount)
                source.ensure_active()
                target.ensure_active()
                source.check_can_debit(value)
                target.check_can_credit(value)

                reference = self.ids.reference_id()
                debit = source.apply_transfer_out(
                    value, target.account_number, reference, description
                )
                try:
                    credit = target.apply_transfer_in(
                        value, source.account_number, reference, description
                    )
                except Exception:
                    source.revert_last(debit)
                    raise
                balances = (source.balance, target.balance)

        logger.info(
            "Transfer posted",
            extra={
                "extra": {
                    "operation": "transfer",
                    "reference": reference,
                    "from_id": from_id,
                    "to_id": to_id,
                    "amount": str(value),
                    "debit_id": debit.transaction_id,
                    "credit_id": credit.transaction_id,
                }
            },
        )
        return balances

    # Administrative transitions

    def set_account_status(self, account_id: str, status: AccountStatus | str) -> Account:
        """Apply an administrative status transition to an account."""
        with self._rejections("set_account_status", account_id=account_id, status=status):
            account = self.get_account(account_id)
            previous = account.set_status(status)
        logger.info(
            "Account status changed",
            extra={
                "extra": {
                    "operation": "set_account_status",
                    "account_id": account_id,
                    "old_status": previous.value,
                    "new_status": account.status.value,
                }
            },
        )
        return account

    def freeze_account(self, account_id: str) -> Account:
        return self.set_account_status(account_id, AccountStatus.FROZEN)

    def unfreeze_account(self, account_id: str) -> Account:
        return self.set_account_status(account_id, AccountStatus.ACTIVE)

    def close_account(self, account_id: str) -> Account:
        return self.set_account_status(account_id, AccountStatus.CLOSED)

    # Queries

    def get_customer(self, customer_id: str) -> Customer:
        """Resolve a customer id; raises UnknownCustomerError on a miss."""
        customer = self._customers.get(customer_id)
        if customer is None:
            raise UnknownCustomerError(f"Customer {customer_id} not found")
        return customer

    def get_account(self, account_id: str) -> Account:
        """Resolve an account number; raises UnknownAccountError on a miss."""
        account = self._accounts.get(account_id)
        if account is None:
            raise UnknownAccountError(f"Account {account_id} not found")
        return account

    def owner_of(self, account_id: str) -> Customer:
        """Customer owning the account, looked up through the registry."""
        return self.get_customer(self.get_account(account_id).owner_id)

    def get_balance(self, account_id: str) -> Money:
        return self.get_account(account_id).balance

    def view_history(self, account_id: str) -> tuple[Transaction, ...]:
        """Transaction log of an account in the order it was applied."""
        return self.get_account(account_id).view_transactions()

    def list_customers(self) -> tuple[Customer, ...]:
        return tuple(self._customers.values())

    def list_accounts(self) -> tuple[Account, ...]:
        return tuple(self._accounts.values())

    def list_accounts_of(self, customer_id: str) -> tuple[Account, ...]:
        return self.get_customer(customer_id).list_accounts()

    def summary(self) -> dict[str, int]:
        """Return summary counts of all entities."""
        return {
            "customers": len(self._customers),
            "accounts": len(self._accounts),
            "transactions": sum(len(a.transactions) for a in self._accounts.values()),
        }

    def verify_integrity(self) -> None:
        """Re-check every ledger invariant.

        Raises
        ------
        LedgerIntegrityError
            With one line per violation found.
        """
        problems: list[str] = []
        seen_transactions: set[str] = set()

        for number, account in self._accounts.items():
            running = 0
            previous = None
            for tx in account.transactions:
                running += tx.signed_minor
                if running < 0:
                    problems.append(f"{number}: balance negative after {tx.transaction_id}")
                if tx.balance_after.to_minor() != running:
                    problems.append(f"{number}: {tx.transaction_id} balance_after mismatch")
                if previous is not None and tx.timestamp < previous.timestamp:
                    problems.append(f"{number}: {tx.transaction_id} out of timestamp order")
                if tx.transaction_id in seen_transactions:
                    problems.append(f"{number}: duplicate transaction id {tx.transaction_id}")
                seen_transactions.add(tx.transaction_id)
                previous = tx
            if account.balance.to_minor() != running:
                problems.append(f"{number}: balance does not match its transaction log")

            owner = self._customers.get(account.owner_id)
            if owner is None:
                problems.append(f"{number}: owner {account.owner_id} not registered")
            elif owner.find_account(number) is not account:
                problems.append(f"{number}: missing from owner {owner.customer_id}")

        for customer_id, customer in self._customers.items():
            for account in customer.accounts:
                if account.owner_id != customer_id:
                    problems.append(f"{customer_id}: holds foreign account {account.account_number}")
                if self._accounts.get(account.account_number) is not account:
                    problems.append(f"{customer_id}: account {account.account_number} not registered")

        if problems:
            raise LedgerIntegrityError("; ".join(problems))

    # Helpers

    @contextmanager
    def _rejections(self, operation: str, **fields: Any) -> Iterator[None]:
        """Log rejected operations at WARNING and re-raise."""
        try:
            yield
        except LedgerError as e:
            logger.warning(
                "%s rejected: %s",
                operation,
                e,
                extra={
                    "extra": {
                        "operation": operation,
                        "error_kind": e.kind.value,
                        **{k: str(v) for k, v in fields.items()},
                    }
                },
            )
            raise

    def _log_posted(self, operation: str, account_id: str, transaction: Transaction) -> None:
        logger.info(
            "%s posted",
            operation.capitalize(),
            extra={
                "extra": {
                    "operation": operation,
                    "account_id": account_id,
                    "transaction_id": transaction.transaction_id,
                    "amount": str(transaction.amount),
                    "balance_after": str(transaction.balance_after),
                }
            },
        )
