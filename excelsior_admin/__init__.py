"""Excelsior admin backend: core watchlist trend ledger."""

__version__ = "0.1.0"
