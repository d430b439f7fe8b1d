"""Notekeeper: a personal knowledge base backend."""

__version__ = "1.0.0"
