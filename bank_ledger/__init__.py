"""In-memory banking ledger: customers, accounts and their transaction logs."""

__version__ = "0.1.0"
