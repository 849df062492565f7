"""External services implementations."""

from .cabinet_api_client import CabinetAPIClient

__all__ = ["CabinetAPIClient"]
