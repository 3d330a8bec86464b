"""dayglance: render a user's day of tasks and calendar events as an SVG."""

from __future__ import annotations

from .cli import main as main

__all__ = ["main"]
