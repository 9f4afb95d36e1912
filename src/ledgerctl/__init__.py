"""ledgerctl — in-memory bank account ledger with a line-oriented command shell."""

__version__ = "0.1.0"
