"""Synthetic data generators for demo ledgers."""

from bank_ledger.generators.base import BaseGenerator
from bank_ledger.generators.demo import DemoLedgerGenerator

__all__ = ["BaseGenerator", "DemoLedgerGenerator"]
