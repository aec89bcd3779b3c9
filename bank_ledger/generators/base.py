"""Base generator class for synthetic ledger data."""

from __future__ import annotations

import random
from abc import ABC

from faker import Faker

from bank_ledger.models import Money


class BaseGenerator(ABC):
    """Base class for ledger data generators.

    Holds a seeded Faker instance for names and notes, and seeds the
    module-level ``random`` used for amounts and account counts.

    Parameters
    ----------
    seed : int | None
        Random seed for reproducibility.
    locale : str
        Faker locale (default ``en_US``).
    """

    def __init__(self, seed: int | None = None, locale: str = "en_US") -> None:
        self.fake = Faker(locale)
        self.seed = seed
        self.locale = locale
        if seed is not None:
            self.fake.seed_instance(seed)
            random.seed(seed)

    @staticmethod
    def random_amount(low_minor: int, high_minor: int) -> Money:
        """Uniform amount between two bounds given in cents, inclusive."""
        return Money.from_minor(random.randint(low_minor, max(low_minor, high_minor)))
