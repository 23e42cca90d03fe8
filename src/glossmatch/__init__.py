"""Fuzzy glossary lookup for translators."""

__version__ = "0.1.0"
