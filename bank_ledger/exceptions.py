"""Custom exception hierarchy for bank-ledger.

Every failure of a ledger operation raises a subclass of ``LedgerError``
whose ``kind`` names the error in the closed ``ErrorKind`` taxonomy, so a
driver can translate it without parsing messages.
"""

from enum import Enum


class ErrorKind(str, Enum):
    UNKNOWN_CUSTOMER = "UNKNOWN_CUSTOMER"
    UNKNOWN_ACCOUNT = "UNKNOWN_ACCOUNT"
    INVALID_IDENTIFIER = "INVALID_IDENTIFIER"
    INVALID_AMOUNT = "INVALID_AMOUNT"
    INSUFFICIENT_FUNDS = "INSUFFICIENT_FUNDS"
    ACCOUNT_NOT_ACTIVE = "ACCOUNT_NOT_ACTIVE"
    INVALID_STATUS_TRANSITION = "INVALID_STATUS_TRANSITION"
    NONZERO_CLOSE = "NONZERO_CLOSE"
    OWNERSHIP_MISMATCH = "OWNERSHIP_MISMATCH"
    SAME_ACCOUNT = "SAME_ACCOUNT"
    OVERFLOW = "OVERFLOW"


class BankLedgerError(Exception):
    """Base exception for all bank-ledger errors."""


class LedgerError(BankLedgerError):
    """Raised when a ledger operation is rejected.

    Subclasses pin ``kind``; the instance is otherwise a plain exception
    carrying a human-readable message.
    """

    kind: ErrorKind


class EntityNotFoundError(LedgerError):
    """Raised when a referenced entity does not exist."""


class UnknownCustomerError(EntityNotFoundError):
    kind = ErrorKind.UNKNOWN_CUSTOMER


class UnknownAccountError(EntityNotFoundError):
    kind = ErrorKind.UNKNOWN_ACCOUNT


class InvalidIdentifierError(LedgerError):
    kind = ErrorKind.INVALID_IDENTIFIER


class InvalidAmountError(LedgerError):
    kind = ErrorKind.INVALID_AMOUNT


class InsufficientFundsError(LedgerError):
    kind = ErrorKind.INSUFFICIENT_FUNDS


class InvalidEntityStateError(LedgerError):
    """Raised when an entity is in an invalid state for the operation."""


class AccountNotActiveError(InvalidEntityStateError):
    kind = ErrorKind.ACCOUNT_NOT_ACTIVE


class InvalidStatusTransitionError(InvalidEntityStateError):
    kind = ErrorKind.INVALID_STATUS_TRANSITION


class NonZeroCloseError(InvalidEntityStateError):
    kind = ErrorKind.NONZERO_CLOSE


class OwnershipMismatchError(LedgerError):
    kind = ErrorKind.OWNERSHIP_MISMATCH


class SameAccountError(LedgerError):
    kind = ErrorKind.SAME_ACCOUNT


class LedgerOverflowError(LedgerError):
    """Raised when an amount or identifier space exceeds its supported range."""

    kind = ErrorKind.OVERFLOW


class LedgerIntegrityError(BankLedgerError):
    """Raised when a ledger invariant is found violated."""


class ConfigurationError(BankLedgerError):
    """Raised when configuration is invalid or missing."""
