from __future__ import annotations

from typing import Iterable, List

from ..domain import ScheduleItem


def merge_timeline(tasks: Iterable[ScheduleItem], external: Iterable[ScheduleItem]) -> List[ScheduleItem]:
    """Tasks then external events, stably ordered by start minute.

    Equal start times keep source order. Nothing is deduplicated.
    """

    combined = [*tasks, *external]
    return sorted(combined, key=lambda item: item.start_minute)
