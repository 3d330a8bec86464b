from __future__ import annotations

import unittest

from dayglance.domain import ScheduleItem
from dayglance.services import merge_timeline


def _task(title: str, start: str, end: str) -> ScheduleItem:
    return ScheduleItem(title=title, start=start, end=end)


def _event(title: str, start: str, end: str) -> ScheduleItem:
    return ScheduleItem(title=title, start=start, end=end, is_external=True)


class TestMergeTimeline(unittest.TestCase):
    def test_orders_by_start_minute(self) -> None:
        merged = merge_timeline(
            [_task("b", "10:00", "11:00"), _task("a", "08:00", "09:00")],
            [_event("c", "09:00", "09:30")],
        )
        self.assertEqual([item.title for item in merged], ["a", "c", "b"])

    def test_ties_keep_tasks_before_external_and_source_order(self) -> None:
        tasks = [_task("zeta task", "09:00", "10:00"), _task("alpha task", "09:00", "09:15")]
        external = [_event("beta event", "09:00", "12:00")]
        for _ in range(5):
            merged = merge_timeline(tasks, external)
            self.assertEqual([item.title for item in merged], ["zeta task", "alpha task", "beta event"])

    def test_single_digit_hours_sort_numerically(self) -> None:
        merged = merge_timeline([_task("late", "10:00", "11:00"), _task("early", "9:00", "9:30")], [])
        self.assertEqual([item.title for item in merged], ["early", "late"])

    def test_no_deduplication_across_sources(self) -> None:
        item = ScheduleItem(title="Sync", start="13:00", end="14:00")
        merged = merge_timeline([item], [ScheduleItem(title="Sync", start="13:00", end="14:00", is_external=True)])
        self.assertEqual(len(merged), 2)

    def test_empty_sources(self) -> None:
        self.assertEqual(merge_timeline([], []), [])


if __name__ == "__main__":
    unittest.main(verbosity=2)
