"""Infrastructure layer: HTTP client and session persistence."""
