"""Pytest configuration and fixtures."""

import logging
from typing import Iterator

import pytest

from bank_ledger.identifiers import IdGenerator
from bank_ledger.models import Account, AccountType, Customer
from bank_ledger.service import BankService


@pytest.fixture
def seed() -> int:
    """Fixed seed for reproducible tests."""
    return 42


@pytest.fixture
def service() -> BankService:
    """Fresh ledger with predictable identifiers."""
    return BankService(ids=IdGenerator(strategy="sequential"))


@pytest.fixture
def customer(service: BankService) -> Customer:
    """Registered customer without accounts."""
    return service.create_customer("Ada", "a@x")


@pytest.fixture
def checking(service: BankService, customer: Customer) -> Account:
    """Empty ACTIVE checking account."""
    return service.open_account(customer.customer_id, AccountType.CHECKING)


@pytest.fixture
def savings(service: BankService, customer: Customer) -> Account:
    """Empty ACTIVE savings account."""
    return service.open_account(customer.customer_id, AccountType.SAVINGS)


@pytest.fixture
def account() -> Account:
    """Standalone account not registered with any service."""
    return Account(account_number="A-TEST0001", owner_id="C-TEST0001", account_type="CHECKING")


@pytest.fixture
def restore_root_logging() -> Iterator[None]:
    """Undo setup_logging's changes to the root logger."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    loggers = [root, logging.getLogger("bank_ledger"), logging.getLogger("faker")]
    levels = [logger.level for logger in loggers]
    yield
    root.handlers[:] = handlers
    for logger, level in zip(loggers, levels):
        logger.setLevel(level)
