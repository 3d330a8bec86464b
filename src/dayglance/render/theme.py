from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

FONT_STACK = "Instrument Sans, ui-sans-serif, system-ui, -apple-system, Segoe UI, Roboto"
FONT_IMPORT_URL = (
    "https://fonts.googleapis.com/css2?family=Instrument+Sans:ital,wght@0,400..700;1,400..700&display=swap"
)


@dataclass(frozen=True)
class SchedulePalette:
    background: str = "#0a0f1a"
    text_primary: str = "#e5e7eb"
    text_secondary: str = "#64748b"
    grid: str = "#1e293b"
    needle: str = "#ef4444"
    fill_opacity: tuple[float, float] = (0.4, 0.15)
    completed_fill_opacity: tuple[float, float] = (0.15, 0.05)


DARK = SchedulePalette()

LIGHT = SchedulePalette(
    background="#f8fafc",
    text_primary="#0f172a",
    text_secondary="#475569",
    grid="#cbd5e1",
    needle="#dc2626",
    fill_opacity=(0.3, 0.1),
    completed_fill_opacity=(0.12, 0.04),
)

PALETTES = {"dark": DARK, "light": LIGHT}


def palette_for(theme: Optional[str]) -> SchedulePalette:
    """Palette for a stored theme name; unknown or missing names get the dark one."""

    if not theme:
        return DARK
    return PALETTES.get(theme.strip().lower(), DARK)
