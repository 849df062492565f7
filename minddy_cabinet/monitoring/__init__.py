"""Monitoring and observability module."""

from .logging_config import bind_command_context, build_formatter, setup_logging

__all__ = [
    "setup_logging",
    "build_formatter",
    "bind_command_context",
]
