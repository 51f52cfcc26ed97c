"""
Itinerary Service - the day-by-day activity timeline of one trip.
"""
import logging
from typing import Dict, List, Optional

from .base import ScreenService
from .backend import BackendClient
from .collections import Collection
from .errors import NotFoundError, ValidationFailed
from ..config import settings
from ..models.trip import Activity, ActivityCreate
from ..widgets.reorder import DragResult, ReorderableDay, merge_day

logger = logging.getLogger(__name__)

MISSING_TIME = "Please select a time!"


def group_by_day(activities: List[Activity]) -> Dict[int, List[Activity]]:
    """Group activities by day number, keeping their order within each day."""
    grouped: Dict[int, List[Activity]] = {}
    for activity in activities:
        grouped.setdefault(activity.day_number, []).append(activity)
    return dict(sorted(grouped.items()))


class ItineraryService(ScreenService):
    """Adds, edits, removes and reorders a trip's activities."""

    TABLE = "itinerary_activities"

    def __init__(
        self,
        backend: BackendClient,
        trip_id: str,
        persist_order: Optional[bool] = None,
    ):
        super().__init__(backend)
        self.trip_id = trip_id
        self.persist_order = (
            settings.persist_activity_order if persist_order is None else persist_order
        )
        self.activities: Collection[Activity] = Collection("activities", self._load)

    async def _load(self) -> List[Activity]:
        query = self.backend.table(self.TABLE).select().eq("itinerary_id", self.trip_id)
        query = query.order("day_number")
        if self.persist_order:
            query = query.order("sort_order")
        rows = await query.order("start_time").execute()
        return self.parse(Activity, rows)

    async def destination(self) -> str:
        row = await (
            self.backend.table("itineraries")
            .select("destination")
            .eq("id", self.trip_id)
            .single()
            .execute()
        )
        if row is None:
            raise NotFoundError("Trip not found!")
        return row.get("destination") or "Unknown"

    async def by_day(self) -> Dict[int, List[Activity]]:
        return group_by_day(await self.activities.get())

    async def add(self, data: ActivityCreate) -> Optional[Activity]:
        if not data.start_time:
            raise ValidationFailed(MISSING_TIME)
        user_id = await self.current_user_id()
        row = data.model_dump(mode="json")
        row.update(itinerary_id=self.trip_id, user_id=user_id)
        rows = await self.activities.mutate(
            self.backend.table(self.TABLE).insert(row).execute()
        )
        return self.first(Activity, rows)

    async def update(self, activity_id: str, data: ActivityCreate) -> Optional[Activity]:
        if not data.start_time:
            raise ValidationFailed(MISSING_TIME)
        rows = await self.activities.mutate(
            self.backend.table(self.TABLE)
            .update(data.model_dump(mode="json"))
            .eq("id", activity_id)
            .execute()
        )
        return self.first(Activity, rows)

    async def delete(self, activity_id: str) -> None:
        await self.activities.mutate(
            self.backend.table(self.TABLE).delete().eq("id", activity_id).execute()
        )

    async def reorder(self, day_number: int, source_index: int,
                      destination_index: Optional[int]) -> Dict[int, List[Activity]]:
        """Move one activity within its day. A drop with no destination changes nothing."""
        grouped = await self.by_day()
        if day_number not in grouped:
            raise NotFoundError(f"Day {day_number} has no activities!")
        day = grouped[day_number]
        if not 0 <= source_index < len(day):
            raise ValidationFailed("That activity is not on this day.")
        if destination_index is not None:
            destination_index = max(0, min(destination_index, len(day) - 1))

        moved = ReorderableDay(day_number, day, self._apply_day_order).drag_end(
            DragResult(source_index, destination_index)
        )
        if moved is not None and self.persist_order:
            try:
                await self.activities.mutate(self._save_order(moved))
            except Exception:
                # A partial write leaves the backend order as the truth
                await self.activities.reload()
                raise
        return group_by_day(self.activities.items)

    def _apply_day_order(self, day_number: int, new_order: List[Activity]) -> None:
        self.activities.replace(
            merge_day(self.activities.items, day_number, new_order, lambda a: a.day_number)
        )

    async def _save_order(self, day: List[Activity]) -> None:
        for position, activity in enumerate(day):
            await (
                self.backend.table(self.TABLE)
                .update({"sort_order": position})
                .eq("id", activity.id)
                .execute()
            )
        logger.info(f"Saved order of {len(day)} activities for trip {self.trip_id}")
