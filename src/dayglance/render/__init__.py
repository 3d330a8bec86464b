"""Layout geometry and SVG output for a single day."""

from __future__ import annotations

from .layout import Layout, compute_layout
from .svg import render_schedule_svg
from .theme import SchedulePalette, palette_for

__all__ = ["Layout", "SchedulePalette", "compute_layout", "palette_for", "render_schedule_svg"]
