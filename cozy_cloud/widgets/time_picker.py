"""
Time Picker - 12-hour clock-face editing of a canonical 24-hour value.

The caller owns the canonical "HH:mm" string. The picker shows it as
hour (01-12), minute and AM/PM, lets the user edit those pieces through
the quick-select grids or by typing, and only reports back on confirm.
"""
from typing import Callable, Optional, Tuple
from enum import Enum

from ..config import settings


HOURS_GRID = [f"{h:02d}" for h in range(1, 13)]
MINUTES_GRID = [f"{m:02d}" for m in range(0, 60, 5)]


class PickerMode(str, Enum):
    """Which half of the time the grid is editing."""
    HOUR = "hour"
    MINUTE = "minute"


class Period(str, Enum):
    AM = "AM"
    PM = "PM"


def to_twelve_hour(value: str) -> Tuple[str, str, Period]:
    """Split canonical 'HH:mm' into display hour, minute and period."""
    h, m = value.split(":")[:2]
    hour = int(h)
    period = Period.PM if hour >= 12 else Period.AM
    if hour > 12:
        hour -= 12
    if hour == 0:
        hour = 12
    return f"{hour:02d}", m, period


def to_canonical(hour: str, minute: str, period: Period) -> str:
    """Join validated 12-hour pieces back into canonical 'HH:mm'."""
    h = int(hour)
    if period == Period.PM and h != 12:
        h += 12
    if period == Period.AM and h == 12:
        h = 0
    return f"{h:02d}:{minute}"


def _digits(text: str) -> str:
    """Keep digits only, at most two of them."""
    return "".join(ch for ch in text if ch.isdigit())[:2]


def _parse_int(text: str) -> Optional[int]:
    try:
        return int(text)
    except (TypeError, ValueError):
        return None


def clamp_hour(text: str) -> str:
    hour = _parse_int(text)
    if hour is None or hour < 1 or hour > 12:
        hour = 12
    return f"{hour:02d}"


def clamp_minute(text: str) -> str:
    minute = _parse_int(text)
    if minute is None or minute < 0 or minute > 59:
        minute = 0
    return f"{minute:02d}"


class TimePicker:
    """
    State of one time picker.

    Typing is lenient: an hour of "13" or a minute of "75" is kept as typed
    until the field loses focus or the user confirms, so the user is never
    corrected mid-keystroke.
    """

    def __init__(
        self,
        value: str = "",
        on_change: Optional[Callable[[str], None]] = None,
        desktop_min_width: Optional[int] = None,
    ):
        self.on_change = on_change
        self.desktop_min_width = (
            desktop_min_width if desktop_min_width is not None else settings.desktop_min_width
        )
        self.is_open = False
        self.mode = PickerMode.HOUR
        self.hour = "12"
        self.minute = "00"
        self.period = Period.AM
        self._value = ""
        self.value = value

    @property
    def value(self) -> str:
        """The externally supplied canonical value."""
        return self._value

    @value.setter
    def value(self, value: str):
        self._value = value or ""
        self.sync()

    def sync(self) -> None:
        """Recompute hour/minute/period from the external value."""
        if self._value:
            self.hour, self.minute, self.period = to_twelve_hour(self._value)

    @property
    def display(self) -> str:
        if not self._value:
            return "-- : --"
        return f"{self.hour}:{self.minute} {self.period.value}"

    @property
    def grid(self) -> list:
        return HOURS_GRID if self.mode == PickerMode.HOUR else MINUTES_GRID

    # Popup lifecycle

    def open(self) -> None:
        self.sync()
        self.mode = PickerMode.HOUR
        self.is_open = True

    def cancel(self) -> None:
        self.is_open = False

    def click_outside(self, viewport_width: int) -> None:
        """Outside clicks only dismiss on desktop-sized viewports."""
        if viewport_width >= self.desktop_min_width:
            self.is_open = False

    def tap_backdrop(self) -> None:
        self.is_open = False

    # Manual entry

    def type_hour(self, text: str) -> None:
        self.hour = _digits(text)

    def type_minute(self, text: str) -> None:
        self.minute = _digits(text)

    def focus_hour(self) -> None:
        self.mode = PickerMode.HOUR

    def focus_minute(self) -> None:
        self.mode = PickerMode.MINUTE

    def blur(self) -> Tuple[str, str]:
        return self.validate()

    def validate(self) -> Tuple[str, str]:
        """Clamp typed values into range and zero-pad them."""
        self.hour = clamp_hour(self.hour)
        self.minute = clamp_minute(self.minute)
        return self.hour, self.minute

    # Grid selection

    def select_hour(self, hour: str) -> None:
        self.hour = hour
        self.mode = PickerMode.MINUTE

    def select_minute(self, minute: str) -> None:
        self.minute = minute

    def set_period(self, period) -> None:
        self.period = Period(period)

    def confirm(self) -> str:
        """Validate, emit the canonical value and close."""
        hour, minute = self.validate()
        canonical = to_canonical(hour, minute, self.period)
        self.is_open = False
        if self.on_change is not None:
            self.on_change(canonical)
        return canonical
