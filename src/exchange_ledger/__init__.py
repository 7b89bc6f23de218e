"""Currency-exchange reserve and profit/loss ledger."""

__version__ = "0.1.0"
