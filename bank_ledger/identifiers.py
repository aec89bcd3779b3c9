"""Identifier generation for customers, accounts, transactions and transfers.

Identifiers are a kind prefix followed by an opaque alphanumeric body::

    gen = IdGenerator()
    gen.customer_id()     # "C-9F3A61B2"
    gen.account_id()      # "A-04D7E1C8"

    gen = IdGenerator(strategy="sequential")
    gen.transaction_id()  # "T-00000001"

Callers must treat the body as opaque; only the prefix is part of the
contract.
"""

from __future__ import annotations

import threading
import uuid
from typing import Callable

from bank_ledger.exceptions import ConfigurationError, LedgerOverflowError
from bank_ledger.logging import get_logger

logger = get_logger(__name__)

CUSTOMER_PREFIX = "C-"
ACCOUNT_PREFIX = "A-"
TRANSACTION_PREFIX = "T-"
REFERENCE_PREFIX = "R-"

STRATEGIES = ("random", "sequential")


def _uuid_token() -> str:
    return uuid.uuid4().hex[:8].upper()


class IdGenerator:
    """Collision-free identifier source for one process.

    Parameters
    ----------
    strategy : str
        ``"random"`` draws an 8-character hex token from a UUID and retries
        on collision with any identifier already issued; ``"sequential"``
        uses a zero-padded counter per prefix.
    body_length : int
        Width of the sequential counter (minimum 8).
    max_attempts : int
        Random draws tried before giving up with ``LedgerOverflowError``.
    token_factory : Callable[[], str] | None
        Replaces the UUID token source for the random strategy.
    """

    def __init__(
        self,
        strategy: str = "random",
        body_length: int = 8,
        max_attempts: int = 32,
        token_factory: Callable[[], str] | None = None,
    ) -> None:
        if strategy not in STRATEGIES:
            raise ConfigurationError(f"Unknown identifier strategy: {strategy}")
        if body_length < 8:
            raise ConfigurationError("Identifier body must be at least 8 characters")
        self.strategy = strategy
        self.body_length = body_length
        self.max_attempts = max_attempts
        self._token_factory = token_factory or _uuid_token
        # Issued ids are remembered only for the random strategy
        self._issued: dict[str, set[str]] = {}
        self._counters: dict[str, int] = {}
        self._counts: dict[str, int] = {}
        self._lock = threading.Lock()

    def customer_id(self) -> str:
        return self._next(CUSTOMER_PREFIX)

    def account_id(self) -> str:
        return self._next(ACCOUNT_PREFIX)

    def transaction_id(self) -> str:
        return self._next(TRANSACTION_PREFIX)

    def reference_id(self) -> str:
        """Correlation id shared by the two legs of a transfer."""
        return self._next(REFERENCE_PREFIX)

    def issued(self, prefix: str) -> int:
        """Number of identifiers issued so far for ``prefix``."""
        return self._counts.get(prefix, 0)

    def _next(self, prefix: str) -> str:
        with self._lock:
            if self.strategy == "sequential":
                identifier = self._next_sequential(prefix)
            else:
                issued = self._issued.setdefault(prefix, set())
                identifier = self._next_random(prefix, issued)
                issued.add(identifier)
            self._counts[prefix] = self._counts.get(prefix, 0) + 1
            return identifier

    def _next_sequential(self, prefix: str) -> str:
        value = self._counters.get(prefix, 0) + 1
        if value >= 10**self.body_length:
            raise LedgerOverflowError(f"Identifier space exhausted for prefix {prefix!r}")
        self._counters[prefix] = value
        return f"{prefix}{value:0{self.body_length}d}"

    def _next_random(self, prefix: str, issued: set[str]) -> str:
        for attempt in range(1, self.max_attempts + 1):
            identifier = f"{prefix}{self._token_factory()}"
            if identifier not in issued:
                return identifier
            logger.debug(
                "Identifier collision",
                extra={"extra": {"prefix": prefix, "attempt": attempt}},
            )
        raise LedgerOverflowError(
            f"No free identifier for prefix {prefix!r} after {self.max_attempts} attempts"
        )
