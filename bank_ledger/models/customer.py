"""Customer aggregate for the account ledger."""

from dataclasses import dataclass, field
from datetime import datetime, timezone

from bank_ledger.exceptions import InvalidIdentifierError, OwnershipMismatchError
from bank_ledger.models.account import Account


@dataclass(eq=False)
class Customer:
    """Bank customer and the accounts they own."""

    customer_id: str
    name: str
    email: str
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    _accounts: dict[str, Account] = field(default_factory=dict, init=False, repr=False)

    def __post_init__(self) -> None:
        self.set_name(self.name)
        self.set_email(self.email)

    @property
    def accounts(self) -> tuple[Account, ...]:
        return tuple(self._accounts.values())

    def set_name(self, name: str) -> None:
        if name is None:
            raise ValueError("Customer name cannot be None")
        self.name = name

    def set_email(self, email: str) -> None:
        if email is None:
            raise ValueError("Customer email cannot be None")
        self.email = email

    def attach_account(self, account: Account) -> None:
        """Add ``account`` to this customer; re-attaching is a no-op."""
        if account.owner_id != self.customer_id:
            raise OwnershipMismatchError(
                f"Account {account.account_number} belongs to {account.owner_id}, "
                f"not {self.customer_id}"
            )
        self._accounts.setdefault(account.account_number, account)

    def find_account(self, account_number: str) -> Account | None:
        """Return the owned account with this number, or None."""
        if not account_number or not account_number.strip():
            raise InvalidIdentifierError(f"Account number cannot be empty: {account_number!r}")
        for account in self._accounts.values():
            if account.account_number == account_number:
                return account
        return None

    def list_accounts(self) -> tuple[Account, ...]:
        """Snapshot of owned accounts in the order they were attached."""
        return tuple(self._accounts.values())
