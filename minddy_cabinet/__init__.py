"""Minddy psychologist cabinet: client for the AI twin administration backend."""

__version__ = "1.0.0"
