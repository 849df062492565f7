"""Presentation layer: cabinet shell, panels, login bridge and CLI."""
