"""Canteiro: construction back-office records, documents and expiry alerts."""

__version__ = "1.0.0"
