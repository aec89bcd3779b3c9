"""Account aggregate: balance, lifecycle status and transaction log."""

import itertools
import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable

from bank_ledger.exceptions import (
    AccountNotActiveError,
    InsufficientFundsError,
    InvalidAmountError,
    InvalidStatusTransitionError,
    LedgerOverflowError,
    NonZeroCloseError,
)
from bank_ledger.models.enums import AccountStatus, AccountType, TransactionKind
from bank_ledger.models.money import Money, MoneyLike
from bank_ledger.models.transaction import Transaction

# CLOSED is terminal
ALLOWED_TRANSITIONS: dict[AccountStatus, frozenset[AccountStatus]] = {
    AccountStatus.ACTIVE: frozenset({AccountStatus.FROZEN, AccountStatus.CLOSED}),
    AccountStatus.FROZEN: frozenset({AccountStatus.ACTIVE, AccountStatus.CLOSED}),
    AccountStatus.CLOSED: frozenset(),
}


def _local_transaction_ids() -> Callable[[], str]:
    counter = itertools.count(1)
    return lambda: f"T-{next(counter):08d}"


@dataclass(eq=False)
class Account:
    """Bank account owning an append-only transaction log.

    The balance is only ever changed together with the append of the
    transaction that explains it, so ``balance`` always equals the signed
    sum of ``transactions``. Only ACTIVE accounts accept balance changes.

    Account types:
    - CHECKING: everyday account
    - SAVINGS: savings account (same rules in this ledger)
    """

    account_number: str
    owner_id: str
    account_type: AccountType
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    balance_limit: Money | None = None  # None means the Money maximum
    _status: AccountStatus = field(default=AccountStatus.ACTIVE, init=False)
    _balance: Money = field(default_factory=Money.zero, init=False)
    next_transaction_id: Callable[[], str] = field(
        default_factory=_local_transaction_ids, repr=False
    )
    _transactions: list[Transaction] = field(default_factory=list, init=False, repr=False)
    _lock: threading.RLock = field(default_factory=threading.RLock, init=False, repr=False)

    def __post_init__(self) -> None:
        self.account_type = AccountType(self.account_type)

    @property
    def transactions(self) -> tuple[Transaction, ...]:
        return tuple(self._transactions)

    @property
    def status(self) -> AccountStatus:
        """Lifecycle status; changed only through ``set_status``."""
        return self._status

    @property
    def balance(self) -> Money:
        """Current balance; changed only by appending a transaction."""
        return self._balance

    @property
    def lock(self) -> threading.RLock:
        """Re-entrant lock guarding this aggregate."""
        return self._lock

    @property
    def is_active(self) -> bool:
        return self._status == AccountStatus.ACTIVE

    def view_transactions(self) -> tuple[Transaction, ...]:
        """Read-only snapshot of the log in insertion order."""
        with self._lock:
            return tuple(self._transactions)

    def deposit(self, amount: MoneyLike, description: str = "") -> Transaction:
        """Credit the account and append a DEPOSIT record."""
        with self._lock:
            return self._credit(TransactionKind.DEPOSIT, amount, description)

    def withdraw(self, amount: MoneyLike, description: str = "") -> Transaction:
        """Debit the account and append a WITHDRAWAL record."""
        with self._lock:
            return self._debit(TransactionKind.WITHDRAWAL, amount, description)

    def apply_transfer_out(
        self,
        amount: MoneyLike,
        counterpart_id: str,
        reference: str | None = None,
        description: str = "",
    ) -> Transaction:
        """Debit leg of a transfer; called by the bank service only."""
        note = _transfer_note("Transfer to", counterpart_id, reference, description)
        with self._lock:
            return self._debit(
                TransactionKind.TRANSFER_OUT, amount, note, counterpart_id, reference
            )

    def apply_transfer_in(
        self,
        amount: MoneyLike,
        counterpart_id: str,
        reference: str | None = None,
        description: str = "",
    ) -> Transaction:
        """Credit leg of a transfer; called by the bank service only."""
        note = _transfer_note("Transfer from", counterpart_id, reference, description)
        with self._lock:
            return self._credit(
                TransactionKind.TRANSFER_IN, amount, note, counterpart_id, reference
            )

    def set_status(self, new_status: AccountStatus | str) -> AccountStatus:
        """Move the account through its lifecycle.

        Returns the previous status.
        """
        try:
            target = AccountStatus(new_status)
        except ValueError:
            raise InvalidStatusTransitionError(f"Unknown account status: {new_status}") from None

        with self._lock:
            if target not in ALLOWED_TRANSITIONS[self._status]:
                raise InvalidStatusTransitionError(
                    f"Account {self.account_number} cannot move from "
                    f"{self._status.value} to {target.value}"
                )
            if target == AccountStatus.CLOSED and not self._balance.is_zero():
                raise NonZeroCloseError(
                    f"Cannot close account {self.account_number} with balance {self._balance}"
                )
            previous, self._status = self._status, target
            return previous

    def check_can_credit(self, amount: MoneyLike) -> Money:
        """Validate a credit without applying it; returns the parsed amount."""
        value = self.validate_amount(amount)
        self.ensure_active()
        self._credited_balance(value)
        return value

    def check_can_debit(self, amount: MoneyLike) -> Money:
        """Validate a debit without applying it; returns the parsed amount."""
        value = self.validate_amount(amount)
        self.ensure_active()
        self._debited_balance(value)
        return value

    def replay_balance(self) -> int:
        """Signed sum of the log in cents, recomputed from scratch."""
        return sum(tx.signed_minor for tx in self._transactions)

    def revert_last(self, transaction: Transaction) -> None:
        """Undo ``transaction`` if it is the latest entry of this log.

        Only used to roll back the first leg of a failed transfer while
        both account locks are still held.
        """
        with self._lock:
            if not self._transactions or self._transactions[-1] is not transaction:
                raise ValueError(
                    f"{transaction.transaction_id} is not the last entry of {self.account_number}"
                )
            self._transactions.pop()
            if self._transactions:
                self._balance = self._transactions[-1].balance_after
            else:
                self._balance = Money.zero()

    def _credit(
        self,
        kind: TransactionKind,
        amount: MoneyLike,
        description: str,
        counterpart: str | None = None,
        reference: str | None = None,
    ) -> Transaction:
        value = self.validate_amount(amount)
        self.ensure_active()
        new_balance = self._credited_balance(value)
        return self._append(kind, value, new_balance, description, counterpart, reference)

    def _debit(
        self,
        kind: TransactionKind,
        amount: MoneyLike,
        description: str,
        counterpart: str | None = None,
        reference: str | None = None,
    ) -> Transaction:
        value = self.validate_amount(amount)
        self.ensure_active()
        new_balance = self._debited_balance(value)
        return self._append(kind, value, new_balance, description, counterpart, reference)

    def _append(
        self,
        kind: TransactionKind,
        amount: Money,
        new_balance: Money,
        description: str,
        counterpart: str | None,
        reference: str | None,
    ) -> Transaction:
        # Build the record first; nothing below the constructor can fail
        transaction = Transaction.record(
            transaction_id=self.next_transaction_id(),
            kind=kind,
            amount=amount,
            balance_after=new_balance,
            description=description,
            counterpart=counterpart,
            reference=reference,
            not_before=self._transactions[-1].timestamp if self._transactions else None,
        )
        self._transactions.append(transaction)
        self._balance = new_balance
        return transaction

    def validate_amount(self, amount: MoneyLike) -> Money:
        value = Money.of(amount)
        if not value.is_positive():
            raise InvalidAmountError(f"Amount must be greater than zero, got {value}")
        return value

    def ensure_active(self) -> None:
        if not self.is_active:
            raise AccountNotActiveError(
                f"Account {self.account_number} is {self._status.value}, not ACTIVE"
            )

    def _credited_balance(self, amount: Money) -> Money:
        new_balance = self._balance + amount
        if self.balance_limit is not None and new_balance > self.balance_limit:
            raise LedgerOverflowError(
                f"Balance of {self.account_number} would exceed {self.balance_limit}"
            )
        return new_balance

    def _debited_balance(self, amount: Money) -> Money:
        if amount > self._balance:
            raise InsufficientFundsError(
                f"Insufficient funds in {self.account_number}: "
                f"balance {self._balance}, requested {amount}"
            )
        return self._balance - amount


def _transfer_note(
    verb: str, counterpart_id: str, reference: str | None, description: str
) -> str:
    note = f"{verb} {counterpart_id}"
    if reference:
        note += f" [{reference}]"
    if description:
        note += f": {description}"
    return note
