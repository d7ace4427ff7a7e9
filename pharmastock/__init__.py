"""Pharmacy inventory, sales recording and sales statistics in plain text files."""

__version__ = "0.1.0"