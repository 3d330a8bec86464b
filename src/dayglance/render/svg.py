from __future__ import annotations

import logging
from typing import List, Optional

from ..domain import RenderingError
from ..utils.markup import escape_markup
from ..utils.timefmt import minutes_to_clock
from .layout import CANVAS_HEIGHT, CANVAS_WIDTH, LANE_X, PADDING, TIME_MARGIN, ItemBox, Layout
from .theme import DARK, FONT_IMPORT_URL, FONT_STACK, SchedulePalette

logger = logging.getLogger(__name__)

ACCENT_WIDTH = 4
CORNER_RADIUS = 8


def _num(value: float) -> str:
    """Stable numeric attribute text: at most two decimals, no trailing zeros."""

    text = f"{value:.2f}".rstrip("0").rstrip(".")
    return "0" if text == "-0" else text


def _hour_elements(layout: Layout, palette: SchedulePalette) -> tuple[List[str], List[str]]:
    lines: list[str] = []
    labels: list[str] = []
    for mark in layout.hours:
        y = _num(mark.y)
        lines.append(
            f'<line x1="{LANE_X}" y1="{y}" x2="{CANVAS_WIDTH - PADDING}" y2="{y}" '
            f'stroke="{palette.grid}" stroke-width="1" stroke-dasharray="4,4"/>'
        )
        labels.append(
            f'<text x="{PADDING + TIME_MARGIN - 12}" y="{_num(mark.y + 4)}" font-size="13" '
            f'fill="{palette.text_secondary}" text-anchor="end" font-family="{FONT_STACK}">'
            f"{minutes_to_clock(mark.minute)}</text>"
        )
    return lines, labels


def _gradient(gradient_id: str, color: str, opacity: tuple[float, float]) -> str:
    return (
        f'<linearGradient id="{gradient_id}" x1="0%" y1="0%" x2="100%" y2="0%">'
        f'<stop offset="0%" stop-color="{color}" stop-opacity="{opacity[0]}"/>'
        f'<stop offset="100%" stop-color="{color}" stop-opacity="{opacity[1]}"/>'
        "</linearGradient>"
    )


def _item_element(box: ItemBox, gradient_id: str, color: str, palette: SchedulePalette) -> str:
    item = box.item
    x, y, w, h = _num(box.x), _num(box.y), _num(box.width), _num(box.height)
    text_opacity = "0.5" if item.is_completed else "1"
    text_y = box.y + 22

    subtitle = f"{item.start} – {item.end}"
    if item.location:
        subtitle = f"{subtitle} · {item.location}"

    checkmark = ""
    if item.is_completed:
        checkmark = (
            f'<g transform="translate({_num(box.x + box.width - 36)}, {_num(box.y + box.height / 2 - 10)})">'
            f'<circle cx="10" cy="10" r="10" fill="{color}" fill-opacity="0.3"/>'
            f'<path d="M6 10 L9 13 L14 7" stroke="{palette.text_primary}" stroke-width="2" fill="none" '
            'stroke-linecap="round" stroke-linejoin="round"/>'
            "</g>"
        )

    return (
        "<g>"
        f'<rect x="{x}" y="{y}" rx="{CORNER_RADIUS}" ry="{CORNER_RADIUS}" width="{w}" height="{h}" '
        f'fill="url(#{gradient_id})"/>'
        f'<rect x="{x}" y="{y}" rx="{CORNER_RADIUS}" ry="{CORNER_RADIUS}" width="{ACCENT_WIDTH}" height="{h}" '
        f'fill="{color}" fill-opacity="{0.4 if item.is_completed else 0.8}"/>'
        f'<text x="{_num(box.x + 16)}" y="{_num(text_y)}" font-size="15" fill="{palette.text_primary}" '
        f'fill-opacity="{text_opacity}" font-weight="600" font-family="{FONT_STACK}">'
        f"{escape_markup(item.title)}</text>"
        f'<text x="{_num(box.x + 16)}" y="{_num(text_y + 20)}" font-size="13" fill="{palette.text_secondary}" '
        f'fill-opacity="{text_opacity}" font-family="{FONT_STACK}">{escape_markup(subtitle)}</text>'
        f"{checkmark}"
        "</g>"
    )


def _header(title: str, date_ymd: str, tz_name: str, palette: SchedulePalette) -> str:
    return (
        f'<text x="{PADDING}" y="{PADDING + 18}" font-size="20" font-weight="600" '
        f'fill="{palette.text_primary}" font-family="{FONT_STACK}">{escape_markup(title)}</text>'
        f'<text x="{CANVAS_WIDTH - PADDING}" y="{PADDING + 18}" font-size="13" text-anchor="end" '
        f'fill="{palette.text_secondary}" font-family="{FONT_STACK}">'
        f"{escape_markup(date_ymd)} · {escape_markup(tz_name)}</text>"
    )


def _needle(y: float, palette: SchedulePalette) -> str:
    cy = _num(y)
    return (
        f'<circle cx="{LANE_X}" cy="{cy}" r="5" fill="{palette.needle}"/>'
        f'<line x1="{LANE_X}" y1="{cy}" x2="{CANVAS_WIDTH - PADDING}" y2="{cy}" '
        f'stroke="{palette.needle}" stroke-width="2" stroke-opacity="0.6"/>'
    )


def _build_document(
    layout: Layout,
    *,
    user: str,
    display_name: Optional[str],
    date_ymd: str,
    tz_name: str,
    palette: SchedulePalette,
) -> str:
    hour_lines, labels = _hour_elements(layout, palette)

    gradients: list[str] = []
    item_elements: list[str] = []
    for index, box in enumerate(layout.boxes):
        gradient_id = f"grad{index}"
        color = escape_markup(box.item.display_color)
        opacity = palette.completed_fill_opacity if box.item.is_completed else palette.fill_opacity
        gradients.append(_gradient(gradient_id, color, opacity))
        item_elements.append(_item_element(box, gradient_id, color, palette))

    needle = _needle(layout.needle_y, palette) if layout.needle_y is not None else ""
    newline = "\n"

    return (
        '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>\n'
        f'<svg width="{CANVAS_WIDTH}" height="{CANVAS_HEIGHT}" viewBox="0 0 {CANVAS_WIDTH} {CANVAS_HEIGHT}" '
        'xmlns="http://www.w3.org/2000/svg">\n'
        "<defs>\n"
        f"<style>@import url('{escape_markup(FONT_IMPORT_URL)}');</style>\n"
        f"{newline.join(gradients)}\n"
        "</defs>\n"
        f'<rect width="{CANVAS_WIDTH}" height="{CANVAS_HEIGHT}" fill="{palette.background}"/>\n'
        f"<g>{_header(display_name or user, date_ymd, tz_name, palette)}</g>\n"
        f"<g>\n{newline.join(hour_lines)}\n{newline.join(labels)}\n</g>\n"
        f"<g>\n{newline.join(item_elements)}\n</g>\n"
        f"{needle}\n"
        "</svg>\n"
    )


def render_schedule_svg(
    layout: Layout,
    *,
    user: str,
    display_name: Optional[str] = None,
    date_ymd: str,
    tz_name: str,
    palette: SchedulePalette = DARK,
) -> str:
    """Build the complete SVG document for a laid-out day.

    Pure: the same arguments always yield the same bytes. Any failure is
    reported as ``RenderingError`` so a truncated document never escapes.
    """

    try:
        return _build_document(
            layout,
            user=user,
            display_name=display_name,
            date_ymd=date_ymd,
            tz_name=tz_name,
            palette=palette,
        )
    except Exception as exc:  # noqa: BLE001
        logger.exception("Failed to render SVG")
        raise RenderingError(f"Failed to render SVG: {exc}") from exc
