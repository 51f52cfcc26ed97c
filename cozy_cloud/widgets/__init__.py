"""Interaction widget state for Cozy Cloud screens."""
from .time_picker import TimePicker, PickerMode, Period
from .date_picker import DatePicker
from .reorder import DragResult, ReorderableDay, merge_day, move_item
from .alert import Alert, AlertType

__all__ = [
    "TimePicker",
    "PickerMode",
    "Period",
    "DatePicker",
    "DragResult",
    "ReorderableDay",
    "merge_day",
    "move_item",
    "Alert",
    "AlertType",
]
