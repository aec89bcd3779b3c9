"""Transaction model for the account ledger."""

from dataclasses import dataclass
from datetime import datetime, timezone

from bank_ledger.exceptions import InvalidAmountError
from bank_ledger.models.enums import TransactionKind
from bank_ledger.models.money import Money


@dataclass(frozen=True)
class Transaction:
    """Immutable record of one balance change on an account."""

    transaction_id: str
    timestamp: datetime
    kind: TransactionKind
    amount: Money
    balance_after: Money
    description: str = ""

    # Transfer-only fields
    counterpart: str | None = None  # account number on the other leg
    reference: str | None = None  # correlation id shared by both legs

    def __post_init__(self) -> None:
        object.__setattr__(self, "kind", TransactionKind(self.kind))
        if not isinstance(self.amount, Money) or not self.amount.is_positive():
            raise InvalidAmountError(f"Transaction amount must be positive, got {self.amount}")
        if not isinstance(self.balance_after, Money):
            raise InvalidAmountError("Balance after must be a Money value")

    @classmethod
    def record(
        cls,
        transaction_id: str,
        kind: TransactionKind | str,
        amount: Money,
        balance_after: Money,
        description: str = "",
        counterpart: str | None = None,
        reference: str | None = None,
        not_before: datetime | None = None,
    ) -> "Transaction":
        """Create a transaction stamped with the current UTC instant.

        Parameters
        ----------
        not_before : datetime | None
            Timestamp of the previous entry in the same log. The new
            timestamp is never earlier, so a log stays ordered even if the
            wall clock steps backwards.
        """
        timestamp = datetime.now(timezone.utc)
        if not_before is not None and timestamp < not_before:
            timestamp = not_before
        return cls(
            transaction_id=transaction_id,
            timestamp=timestamp,
            kind=kind,
            amount=amount,
            balance_after=balance_after,
            description=description or "",
            counterpart=counterpart,
            reference=reference,
        )

    @property
    def signed_minor(self) -> int:
        """Amount in cents, negative for debits."""
        cents = self.amount.to_minor()
        return cents if self.kind.is_credit else -cents
