"""Tests for the alert overlay exit timing."""
import asyncio

import pytest

from cozy_cloud.widgets.alert import Alert, AlertType


class TestAlert:
    """Mount/unmount around the exit transition."""

    def test_open_mounts_immediately(self):
        alert = Alert()
        alert.open("Saved!", AlertType.SUCCESS)
        assert alert.is_open
        assert alert.mounted
        assert alert.icon == "🌱"

    @pytest.mark.asyncio
    async def test_stays_mounted_for_exit_delay(self):
        alert = Alert()
        assert alert.exit_delay == pytest.approx(0.3)
        alert.open("Oops", "error")
        alert.close()
        assert not alert.is_open
        assert alert.mounted
        await asyncio.sleep(0.1)
        assert alert.mounted
        await asyncio.sleep(0.3)
        assert not alert.mounted

    @pytest.mark.asyncio
    async def test_reopen_cancels_unmount(self):
        alert = Alert(exit_delay=0.05)
        alert.open("First")
        alert.close()
        alert.open("Second")
        await asyncio.sleep(0.1)
        assert alert.mounted
        assert alert.is_open
        assert alert.message == "Second"

    @pytest.mark.asyncio
    async def test_close_when_closed_is_noop(self):
        alert = Alert(exit_delay=0.01)
        alert.close()
        await asyncio.sleep(0.02)
        assert not alert.mounted
