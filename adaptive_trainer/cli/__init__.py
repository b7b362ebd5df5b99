"""Command line interface for the adaptive decision trainer."""

from .drill_cli import app, main

__all__ = ["app", "main"]
