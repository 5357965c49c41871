"""
Ordering transform: sort resolved rows chronologically.

Rows are compared by their reporting-zone instant. ``sorted`` is stable,
so rows sharing an instant stay in navigation order (tab, block, row).
"""

from __future__ import annotations

from pathtopro_schedule.transforms.timezones import ResolvedRecord


def sort_by_target_time(records: list[ResolvedRecord]) -> list[ResolvedRecord]:
    """Return *records* sorted ascending by ``target_time``, ties kept in input order."""
    return sorted(records, key=lambda record: record.target_time)
