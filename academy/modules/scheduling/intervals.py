"""Minute-of-day arithmetic for weekly slots."""

from __future__ import annotations

from typing import Protocol


class SlotLike(Protocol):
    day_of_week: int
    start_time: str
    end_time: str


def to_minutes(time: str) -> int:
    """Convert ``HH:MM`` to minutes since midnight."""
    hours, minutes = time.split(":")
    return int(hours) * 60 + int(minutes)


def overlaps(slot_a: SlotLike, slot_b: SlotLike) -> bool:
    """Return True if both slots share at least one minute on the same day."""
    if slot_a.day_of_week != slot_b.day_of_week:
        return False
    start_a, end_a = to_minutes(slot_a.start_time), to_minutes(slot_a.end_time)
    start_b, end_b = to_minutes(slot_b.start_time), to_minutes(slot_b.end_time)
    return start_a < end_b and start_b < end_a
