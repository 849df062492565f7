"""Publishing DTOs."""

from dataclasses import dataclass


@dataclass
class PublishResultDTO:
    """Share link issued when the AI twin is published."""
    
    share_code: str
    share_url: str
