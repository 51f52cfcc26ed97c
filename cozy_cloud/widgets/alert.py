"""
Alert overlay - stays mounted briefly after closing so the exit
transition can finish.
"""
import asyncio
from typing import Optional
from enum import Enum

from ..config import settings


class AlertType(str, Enum):
    SUCCESS = "success"
    ERROR = "error"
    INFO = "info"


ALERT_ICONS = {
    AlertType.ERROR: "☁️",
    AlertType.SUCCESS: "🌱",
    AlertType.INFO: "✨",
}


class Alert:
    """
    Open/close state of one alert dialog.

    `mounted` is what a renderer would keep in the tree: true as soon as the
    alert opens, and for `exit_delay` seconds after it closes.
    """

    def __init__(self, exit_delay: Optional[float] = None):
        self.exit_delay = (
            exit_delay if exit_delay is not None else settings.alert_exit_delay_ms / 1000
        )
        self.is_open = False
        self.mounted = False
        self.message = ""
        self.type = AlertType.INFO
        self._unmount: Optional[asyncio.TimerHandle] = None

    @property
    def icon(self) -> str:
        return ALERT_ICONS[self.type]

    def open(self, message: str, type=AlertType.INFO) -> None:
        if self._unmount is not None:
            self._unmount.cancel()
            self._unmount = None
        self.message = message
        self.type = AlertType(type)
        self.is_open = True
        self.mounted = True

    def close(self) -> None:
        """Close now; unmount once the exit delay has passed. Needs a running loop."""
        if not self.is_open:
            return
        self.is_open = False
        loop = asyncio.get_running_loop()
        self._unmount = loop.call_later(self.exit_delay, self._finish_exit)

    def _finish_exit(self) -> None:
        self._unmount = None
        if not self.is_open:
            self.mounted = False
