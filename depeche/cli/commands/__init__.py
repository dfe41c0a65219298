"""CLI commands module."""

from . import compose, config, send

__all__ = ["compose", "send", "config"]
