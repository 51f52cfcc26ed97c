"""
Drag-reorder support for same-day activity lists.
"""
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, TypeVar

T = TypeVar("T")


@dataclass
class DragResult:
    """Outcome of a drag gesture; destination is None when dropped nowhere."""
    source_index: int
    destination_index: Optional[int] = None


def move_item(items: Sequence[T], source: int, destination: int) -> List[T]:
    """Remove the item at `source` and insert it at `destination`."""
    reordered = list(items)
    moved = reordered.pop(source)
    reordered.insert(destination, moved)
    return reordered


class ReorderableDay:
    """The activity list of one day."""

    def __init__(
        self,
        day_number: int,
        activities: Sequence[T],
        on_reorder: Callable[[int, List[T]], None],
    ):
        self.day_number = day_number
        self.activities = list(activities)
        self.on_reorder = on_reorder

    def drag_end(self, result: DragResult) -> Optional[List[T]]:
        if result.destination_index is None:
            return None
        new_order = move_item(self.activities, result.source_index, result.destination_index)
        self.activities = new_order
        self.on_reorder(self.day_number, new_order)
        return new_order


def merge_day(all_items: Sequence[T], day_number: int, new_order: Sequence[T],
              day_of: Callable[[T], int]) -> List[T]:
    """
    Put a reordered day back into the full list.

    Items of other days keep their positions; the slots held by the given
    day are refilled in the new order.
    """
    replacement = iter(new_order)
    merged = []
    for item in all_items:
        merged.append(next(replacement) if day_of(item) == day_number else item)
    return merged
