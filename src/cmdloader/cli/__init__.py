"""CLI module for cmdloader."""

from cmdloader.cli.app import app, main

__all__ = ["app", "main"]
