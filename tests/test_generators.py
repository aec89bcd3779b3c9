"""Tests for the demo ledger generator."""

from bank_ledger.generators import DemoLedgerGenerator
from bank_ledger.identifiers import IdGenerator
from bank_ledger.models import AccountType, Money
from bank_ledger.service import BankService


def _fresh_service() -> BankService:
    return BankService(ids=IdGenerator(strategy="sequential"))


class TestDemoLedgerGenerator:
    """Tests for DemoLedgerGenerator."""

    def test_populate_creates_customers(self, seed: int) -> None:
        service = _fresh_service()
        customers = DemoLedgerGenerator(seed=seed).populate(service, 5)

        assert len(customers) == 5
        assert service.list_customers() == tuple(customers)
        for customer in customers:
            assert customer.name
            assert "@" in customer.email
            assert 1 <= len(customer.accounts) <= 2
            assert customer.accounts[0].account_type == AccountType.CHECKING

    def test_populated_ledger_is_consistent(self, seed: int) -> None:
        service = _fresh_service()
        DemoLedgerGenerator(seed=seed, max_accounts_per_customer=3).populate(service, 10)

        service.verify_integrity()
        for account in service.list_accounts():
            assert account.transactions
            assert account.balance >= Money.zero()

    def test_seed_is_reproducible(self, seed: int) -> None:
        first, second = _fresh_service(), _fresh_service()
        DemoLedgerGenerator(seed=seed).populate(first, 3)
        DemoLedgerGenerator(seed=seed).populate(second, 3)

        assert [c.name for c in first.list_customers()] == [c.name for c in second.list_customers()]
        assert [a.balance for a in first.list_accounts()] == [
            a.balance for a in second.list_accounts()
        ]

    def test_generate_batch_is_lazy(self, seed: int) -> None:
        service = _fresh_service()
        batch = DemoLedgerGenerator(seed=seed).generate_batch(service, 2)
        assert service.list_customers() == ()
        next(batch)
        assert len(service.list_customers()) == 1

    def test_zero_customers(self) -> None:
        service = _fresh_service()
        assert DemoLedgerGenerator().populate(service, 0) == []
        assert service.summary()["customers"] == 0
