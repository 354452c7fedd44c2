"""
Manual timetable editing.

Reordering keeps every time window where it is and exchanges what runs in it,
so a swapped timetable still respects the day's grid.
"""

from dataclasses import replace
from typing import List

from sportsday.models import TimeSlot

# Fields that travel with the content of a slot; start and end stay put
SLOT_CONTENT_FIELDS = ("type", "court_id", "match_id", "title", "description")


def swap_slots(slots: List[TimeSlot], i: int, j: int) -> List[TimeSlot]:
    """
    Exchange the content of two slots.

    Args:
        slots: Current timetable (left untouched)
        i: Index of the first slot
        j: Index of the second slot

    Returns:
        New timetable with the two slots' content swapped

    Raises:
        IndexError: If either index is out of range
    """
    for index in (i, j):
        if index < 0 or index >= len(slots):
            raise IndexError(f"Slot index {index} out of range for {len(slots)} slots")

    result = list(slots)
    first, second = slots[i], slots[j]
    result[i] = replace(first, **{name: getattr(second, name) for name in SLOT_CONTENT_FIELDS})
    result[j] = replace(second, **{name: getattr(first, name) for name in SLOT_CONTENT_FIELDS})
    return result


def move_slot_up(slots: List[TimeSlot], index: int) -> List[TimeSlot]:
    if index <= 0:
        if index < 0 or index >= len(slots):
            raise IndexError(f"Slot index {index} out of range for {len(slots)} slots")
        return list(slots)
    return swap_slots(slots, index - 1, index)


def move_slot_down(slots: List[TimeSlot], index: int) -> List[TimeSlot]:
    if index >= len(slots) - 1:
        if index < 0 or index >= len(slots):
            raise IndexError(f"Slot index {index} out of range for {len(slots)} slots")
        return list(slots)
    return swap_slots(slots, index, index + 1)
