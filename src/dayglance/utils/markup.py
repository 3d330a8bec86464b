from __future__ import annotations

_MARKUP_ESCAPES = str.maketrans(
    {
        "&": "&amp;",
        "<": "&lt;",
        ">": "&gt;",
        "'": "&apos;",
        '"': "&quot;",
    }
)


def escape_markup(text: str) -> str:
    """Escape the five XML-significant characters for SVG text and attributes."""

    return text.translate(_MARKUP_ESCAPES)
