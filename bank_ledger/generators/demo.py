"""Populate a ledger with synthetic customers and activity."""

from __future__ import annotations

import random
from typing import Iterator

from bank_ledger.generators.base import BaseGenerator
from bank_ledger.logging import get_logger
from bank_ledger.models import AccountType, Customer, Money
from bank_ledger.service import BankService

logger = get_logger(__name__)


class DemoLedgerGenerator(BaseGenerator):
    """Generate demo customers, accounts and transactions.

    Everything goes through the public ``BankService`` API, so a populated
    ledger satisfies the same invariants as one built by hand.
    """

    ACCOUNT_TYPES = list(AccountType)

    # Opening deposit range in cents
    OPENING_DEPOSIT_RANGE = (10_00, 5_000_00)

    def __init__(
        self,
        seed: int | None = None,
        locale: str = "en_US",
        max_accounts_per_customer: int = 2,
    ) -> None:
        super().__init__(seed, locale)
        self.max_accounts_per_customer = max(1, max_accounts_per_customer)

    def populate(self, service: BankService, count: int) -> list[Customer]:
        """Create ``count`` customers with accounts and a short history.

        Parameters
        ----------
        service : BankService
            Ledger to populate.
        count : int
            Number of customers to create.

        Returns
        -------
        list[Customer]
            Created customers, in creation order.
        """
        customers = list(self.generate_batch(service, count))
        logger.info(
            "Demo ledger populated",
            extra={"extra": {"operation": "populate", **service.summary()}},
        )
        return customers

    def generate_batch(self, service: BankService, count: int) -> Iterator[Customer]:
        for _ in range(count):
            yield self._generate_one(service)

    def _generate_one(self, service: BankService) -> Customer:
        customer = service.create_customer(self.fake.name(), self.fake.email())

        num_accounts = random.randint(1, self.max_accounts_per_customer)
        for i in range(num_accounts):
            # First account is always CHECKING
            account_type = AccountType.CHECKING if i == 0 else random.choice(self.ACCOUNT_TYPES)
            account = service.open_account(customer.customer_id, account_type)
            opening = self.random_amount(*self.OPENING_DEPOSIT_RANGE)
            service.deposit(account.account_number, opening, "Opening deposit")

            for _ in range(random.randint(0, 3)):
                balance = account.balance.to_minor()
                amount = self.random_amount(1, balance // 4)
                service.withdraw(account.account_number, amount, self.fake.company())

        accounts = customer.list_accounts()
        if len(accounts) > 1:
            source, target = accounts[0], accounts[1]
            amount = Money.from_minor(max(1, source.balance.to_minor() // 10))
            service.transfer(
                source.account_number, target.account_number, amount, "Savings top-up"
            )

        return customer
