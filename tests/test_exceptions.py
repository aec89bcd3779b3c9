"""Tests for custom exception hierarchy."""

import pytest

from bank_ledger.exceptions import (
    AccountNotActiveError,
    BankLedgerError,
    ConfigurationError,
    EntityNotFoundError,
    ErrorKind,
    InsufficientFundsError,
    InvalidAmountError,
    InvalidEntityStateError,
    InvalidIdentifierError,
    InvalidStatusTransitionError,
    LedgerError,
    LedgerIntegrityError,
    LedgerOverflowError,
    NonZeroCloseError,
    OwnershipMismatchError,
    SameAccountError,
    UnknownAccountError,
    UnknownCustomerError,
)

KIND_BY_ERROR = {
    UnknownCustomerError: ErrorKind.UNKNOWN_CUSTOMER,
    UnknownAccountError: ErrorKind.UNKNOWN_ACCOUNT,
    InvalidIdentifierError: ErrorKind.INVALID_IDENTIFIER,
    InvalidAmountError: ErrorKind.INVALID_AMOUNT,
    InsufficientFundsError: ErrorKind.INSUFFICIENT_FUNDS,
    AccountNotActiveError: ErrorKind.ACCOUNT_NOT_ACTIVE,
    InvalidStatusTransitionError: ErrorKind.INVALID_STATUS_TRANSITION,
    NonZeroCloseError: ErrorKind.NONZERO_CLOSE,
    OwnershipMismatchError: ErrorKind.OWNERSHIP_MISMATCH,
    SameAccountError: ErrorKind.SAME_ACCOUNT,
    LedgerOverflowError: ErrorKind.OVERFLOW,
}


class TestExceptionHierarchy:
    """Test exception inheritance chain."""

    def test_bank_ledger_error_is_exception(self) -> None:
        assert isinstance(BankLedgerError("test"), Exception)

    @pytest.mark.parametrize("error_class", list(KIND_BY_ERROR))
    def test_ledger_errors_carry_kind(self, error_class: type[LedgerError]) -> None:
        err = error_class("test")
        assert isinstance(err, LedgerError)
        assert isinstance(err, BankLedgerError)
        assert err.kind == KIND_BY_ERROR[error_class]

    def test_every_kind_has_an_error(self) -> None:
        assert set(KIND_BY_ERROR.values()) == set(ErrorKind)

    def test_not_found_grouping(self) -> None:
        assert issubclass(UnknownCustomerError, EntityNotFoundError)
        assert issubclass(UnknownAccountError, EntityNotFoundError)

    def test_state_grouping(self) -> None:
        for error_class in (AccountNotActiveError, InvalidStatusTransitionError, NonZeroCloseError):
            assert issubclass(error_class, InvalidEntityStateError)

    def test_non_ledger_errors(self) -> None:
        assert not issubclass(ConfigurationError, LedgerError)
        assert not issubclass(LedgerIntegrityError, LedgerError)
        assert isinstance(ConfigurationError("x"), BankLedgerError)

    def test_exception_message(self) -> None:
        err = UnknownAccountError("Account A-00000001 not found")
        assert str(err) == "Account A-00000001 not found"
