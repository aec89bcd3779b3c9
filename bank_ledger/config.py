"""Configuration management for bank-ledger.

The ledger reads no environment variables; configuration comes from
defaults and from the command line (see ``BankConfig.from_args``).
"""

import argparse
from dataclasses import dataclass, field
from decimal import Decimal

from bank_ledger.exceptions import ConfigurationError, LedgerError
from bank_ledger.identifiers import STRATEGIES
from bank_ledger.models.money import MAX_AMOUNT, Money

LOG_FORMATS = ("standard", "json")


@dataclass
class LedgerConfig:
    """Core ledger settings."""

    id_strategy: str = "random"
    max_balance: str = str(MAX_AMOUNT)

    @property
    def balance_limit(self) -> Money:
        """Parsed ``max_balance``."""
        try:
            return Money(Decimal(self.max_balance))
        except (LedgerError, ArithmeticError) as e:
            raise ConfigurationError(f"Invalid max_balance {self.max_balance!r}: {e}") from e


@dataclass
class DemoConfig:
    """Synthetic data pre-loaded into the ledger at startup."""

    num_customers: int = 0
    seed: int | None = None
    locale: str = "en_US"
    max_accounts_per_customer: int = 2


@dataclass
class OutputConfig:
    """Menu output configuration."""

    json: bool = False


@dataclass
class BankConfig:
    """Main configuration for bank-ledger."""

    ledger: LedgerConfig = field(default_factory=LedgerConfig)
    demo: DemoConfig = field(default_factory=DemoConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    log_level: str = "WARNING"
    log_format: str = "standard"
    verify: bool = False

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> "BankConfig":
        """Create config from parsed command-line arguments."""
        config = cls(
            ledger=LedgerConfig(id_strategy=args.id_strategy),
            demo=DemoConfig(
                num_customers=args.demo_customers,
                seed=args.seed,
                locale=args.locale,
            ),
            output=OutputConfig(json=args.json),
            log_level=args.log_level,
            log_format=args.log_format,
            verify=args.verify,
        )
        config.validate()
        return config

    def validate(self) -> None:
        """Raise ConfigurationError if any setting is out of range."""
        if self.ledger.id_strategy not in STRATEGIES:
            raise ConfigurationError(f"Unknown identifier strategy: {self.ledger.id_strategy}")
        if self.log_format not in LOG_FORMATS:
            raise ConfigurationError(f"Unknown log format: {self.log_format}")
        if self.demo.num_customers < 0:
            raise ConfigurationError("Demo customer count cannot be negative")
        if self.demo.max_accounts_per_customer < 1:
            raise ConfigurationError("Demo customers need at least one account")
        if not self.ledger.balance_limit.is_positive():
            raise ConfigurationError("max_balance must be greater than zero")
