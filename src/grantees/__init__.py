"""Grantees API: grant directory, builder opportunities, and credit ledger."""

__version__ = "0.1.0"
