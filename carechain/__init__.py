"""In-memory ledger services for care plans, clinical guidelines, doctor profiles, emergency medical data and financial records."""

__version__ = "0.1.0"