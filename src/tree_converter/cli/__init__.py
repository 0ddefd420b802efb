"""Command-line interface for Tree Converter."""

from .main import main

__all__ = ["main"]
