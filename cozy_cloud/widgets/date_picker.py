"""
Date Picker - month-grid calendar emitting canonical 'YYYY-MM-DD'.
"""
import calendar
from datetime import date
from typing import Callable, List, Optional


MONTH_NAMES = list(calendar.month_name)[1:]
DAYS_SHORT = ["Su", "Mo", "Tu", "We", "Th", "Fr", "Sa"]


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def first_weekday(year: int, month: int) -> int:
    """Weekday of the 1st with Sunday as 0."""
    return (calendar.monthrange(year, month)[0] + 1) % 7


class DatePicker:
    """State of one calendar date picker."""

    def __init__(
        self,
        value: Optional[str] = None,
        on_change: Optional[Callable[[str], None]] = None,
        today: Optional[date] = None,
    ):
        self.value = value or None
        self.on_change = on_change
        self.today = today or date.today()
        self.is_open = False

        initial = date.fromisoformat(self.value) if self.value else self.today
        self.view_year = initial.year
        self.view_month = initial.month

    @property
    def title(self) -> str:
        return f"{MONTH_NAMES[self.view_month - 1]} {self.view_year}"

    def toggle(self) -> None:
        self.is_open = not self.is_open

    def click_outside(self) -> None:
        self.is_open = False

    def prev_month(self) -> None:
        if self.view_month == 1:
            self.view_year, self.view_month = self.view_year - 1, 12
        else:
            self.view_month -= 1

    def next_month(self) -> None:
        if self.view_month == 12:
            self.view_year, self.view_month = self.view_year + 1, 1
        else:
            self.view_month += 1

    def grid(self) -> List[Optional[int]]:
        """Leading blanks (None) for the first week, then each day number."""
        blanks = [None] * first_weekday(self.view_year, self.view_month)
        days = list(range(1, days_in_month(self.view_year, self.view_month) + 1))
        return blanks + days

    def date_string(self, day: int) -> str:
        return f"{self.view_year:04d}-{self.view_month:02d}-{day:02d}"

    def is_selected(self, day: int) -> bool:
        return self.value == self.date_string(day)

    def is_today(self, day: int) -> bool:
        return (
            self.today.year == self.view_year
            and self.today.month == self.view_month
            and self.today.day == day
        )

    def select_day(self, day: int) -> str:
        if not 1 <= day <= days_in_month(self.view_year, self.view_month):
            raise ValueError(f"{self.title} has no day {day}")
        self.value = self.date_string(day)
        self.is_open = False
        if self.on_change is not None:
            self.on_change(self.value)
        return self.value
