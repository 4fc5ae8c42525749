"""Command-line interface for resumedoc."""

from .main import main

__all__ = ["main"]
