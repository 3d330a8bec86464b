"""Maps wall-clock intervals onto the fixed SVG canvas.

Everything here is pure geometry. Items live in one vertical lane; items
that overlap in time overlap on the canvas too.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from ..domain import ScheduleItem, VisibleWindow

CANVAS_WIDTH = 1000
CANVAS_HEIGHT = 900
PADDING = 24
HEADER_HEIGHT = 44
FOOTER_HEIGHT = 40
TIME_MARGIN = 56
MIN_ITEM_HEIGHT = 24

TRACK_TOP = PADDING + HEADER_HEIGHT
TRACK_HEIGHT = CANVAS_HEIGHT - TRACK_TOP - PADDING - FOOTER_HEIGHT
LANE_X = PADDING + TIME_MARGIN
LANE_WIDTH = CANVAS_WIDTH - LANE_X - PADDING


@dataclass(frozen=True, slots=True)
class HourMark:
    minute: int
    y: float


@dataclass(frozen=True, slots=True)
class ItemBox:
    item: ScheduleItem
    clamped_start: int
    clamped_end: int
    x: float
    y: float
    width: float
    height: float


@dataclass(frozen=True, slots=True)
class Layout:
    window: VisibleWindow
    hours: tuple[HourMark, ...]
    boxes: tuple[ItemBox, ...]
    needle_y: Optional[float] = None


def minute_to_y(minute: float, window: VisibleWindow) -> float:
    return TRACK_TOP + TRACK_HEIGHT * (minute - window.start_minute) / window.total_minutes


def hour_marks(window: VisibleWindow) -> tuple[HourMark, ...]:
    marks = []
    minute = (window.start_minute // 60) * 60
    while minute <= window.end_minute:
        marks.append(HourMark(minute=minute, y=minute_to_y(minute, window)))
        minute += 60
    return tuple(marks)


def place_item(item: ScheduleItem, window: VisibleWindow) -> Optional[ItemBox]:
    """Clamp ``item`` to the window; ``None`` when nothing of it is visible."""

    clamped_start = max(item.start_minute, window.start_minute)
    clamped_end = min(item.end_minute, window.end_minute)
    if clamped_end <= clamped_start:
        return None
    height = max(MIN_ITEM_HEIGHT, TRACK_HEIGHT * (clamped_end - clamped_start) / window.total_minutes)
    return ItemBox(
        item=item,
        clamped_start=clamped_start,
        clamped_end=clamped_end,
        x=LANE_X,
        y=minute_to_y(clamped_start, window),
        width=LANE_WIDTH,
        height=height,
    )


def compute_layout(
    items: Iterable[ScheduleItem],
    window: VisibleWindow,
    *,
    show_needle: bool = False,
    now_minute: Optional[int] = None,
) -> Layout:
    boxes = tuple(box for box in (place_item(item, window) for item in items) if box is not None)
    needle_y = None
    if show_needle and now_minute is not None and window.contains(now_minute):
        needle_y = minute_to_y(now_minute, window)
    return Layout(window=window, hours=hour_marks(window), boxes=boxes, needle_y=needle_y)
