"""Brewlog — a small coffee drink catalogue.

Users sign up, log in, post drinks, and keep a list of favorites.
Only the user who posted a drink may change or delete it.
"""

__version__ = "0.1.0"
