"""
Event Services - MICE events, their guest lists and run-of-show scripts.
"""
import logging
from typing import Dict, List, Optional

from pydantic import BaseModel

from .base import ScreenService
from .backend import BackendClient
from .collections import Collection
from .errors import NotFoundError
from ..models.event import (
    Event, EventCreate, EventStatus,
    Guest, GuestCreate, GuestStatus,
    Cue, CueCreate,
)

logger = logging.getLogger(__name__)


class EventService(ScreenService):
    """The events hub and the event command center."""

    TABLE = "events"

    def __init__(self, backend: BackendClient):
        super().__init__(backend)
        self.events: Collection[Event] = Collection("events", self._load)

    async def _load(self) -> List[Event]:
        rows = await self.backend.table(self.TABLE).select().order("event_date").execute()
        return self.parse(Event, rows)

    async def list(self) -> List[Event]:
        return await self.events.get()

    async def get(self, event_id: str) -> Event:
        row = await self.backend.table(self.TABLE).select().eq("id", event_id).single().execute()
        if row is None:
            raise NotFoundError("Event not found!")
        return Event(**row)

    async def create(self, data: EventCreate) -> Optional[Event]:
        user_id = await self.current_user_id()
        row = data.model_dump(mode="json")
        row.update(user_id=user_id, status=EventStatus.PLANNING.value)
        rows = await self.events.mutate(
            self.backend.table(self.TABLE).insert(row).execute()
        )
        logger.info(f"Created event {data.name}")
        return self.first(Event, rows)

    async def set_status(self, event_id: str, status: EventStatus) -> Event:
        status = EventStatus(status)
        await self.events.mutate(
            self.backend.table(self.TABLE).update({"status": status.value}).eq("id", event_id).execute()
        )
        return await self.get(event_id)

    async def delete(self, event_id: str) -> None:
        await self.events.mutate(
            self.backend.table(self.TABLE).delete().eq("id", event_id).execute()
        )
        logger.info(f"Deleted event {event_id}")


class GuestStats(BaseModel):
    """Headline numbers for a guest list."""
    total: int
    confirmed: int
    pending: int
    dietary: int


def guest_stats(guests: List[Guest]) -> GuestStats:
    return GuestStats(
        total=len(guests),
        confirmed=sum(
            1 for g in guests if g.status in (GuestStatus.CONFIRMED, GuestStatus.CHECKED_IN)
        ),
        pending=sum(1 for g in guests if g.status == GuestStatus.INVITED),
        dietary=sum(1 for g in guests if g.dietary_restrictions.strip()),
    )


class GuestService(ScreenService):
    """Guest list of one event."""

    TABLE = "event_guests"

    def __init__(self, backend: BackendClient, event_id: str):
        super().__init__(backend)
        self.event_id = event_id
        self.guests: Collection[Guest] = Collection("guests", self._load)

    async def _load(self) -> List[Guest]:
        rows = await (
            self.backend.table(self.TABLE)
            .select()
            .eq("event_id", self.event_id)
            .order("name")
            .execute()
        )
        return self.parse(Guest, rows)

    async def list(self) -> List[Guest]:
        return await self.guests.get()

    async def add(self, data: GuestCreate) -> Optional[Guest]:
        user_id = await self.current_user_id()
        row = data.model_dump(mode="json")
        row.update(event_id=self.event_id, user_id=user_id)
        rows = await self.guests.mutate(
            self.backend.table(self.TABLE).insert(row).execute()
        )
        return self.first(Guest, rows)

    async def delete(self, guest_id: str) -> None:
        await self.guests.mutate(
            self.backend.table(self.TABLE).delete().eq("id", guest_id).execute()
        )

    async def set_status(self, guest_id: str, status: GuestStatus) -> List[Guest]:
        """
        Optimistic RSVP change: the local list is patched first and the write
        follows without a reload. If the write fails the list is reloaded
        from the backend before the error propagates.
        """
        status = GuestStatus(status)
        await self.guests.get()
        changed = self.guests.patch(
            lambda g: g.id == guest_id,
            lambda g: g.model_copy(update={"status": status}),
        )
        if not changed:
            raise NotFoundError("Guest not found!")
        try:
            await (
                self.backend.table(self.TABLE)
                .update({"status": status.value})
                .eq("id", guest_id)
                .execute()
            )
        except Exception:
            await self.guests.reload()
            raise
        return self.guests.items

    async def stats(self) -> GuestStats:
        return guest_stats(await self.guests.get())


class RunOfShowService(ScreenService):
    """Cue list of one event."""

    TABLE = "run_of_show"

    def __init__(self, backend: BackendClient, event_id: str):
        super().__init__(backend)
        self.event_id = event_id
        self.cues: Collection[Cue] = Collection("run_of_show", self._load)

    async def _load(self) -> List[Cue]:
        rows = await (
            self.backend.table(self.TABLE)
            .select()
            .eq("event_id", self.event_id)
            .order("day_number")
            .order("start_time")
            .execute()
        )
        return self.parse(Cue, rows)

    async def list(self) -> List[Cue]:
        return await self.cues.get()

    async def by_day(self) -> Dict[int, List[Cue]]:
        grouped: Dict[int, List[Cue]] = {}
        for cue in await self.cues.get():
            grouped.setdefault(cue.day_number, []).append(cue)
        return dict(sorted(grouped.items()))

    async def add(self, data: CueCreate) -> Optional[Cue]:
        user_id = await self.current_user_id()
        row = data.model_dump(mode="json")
        row.update(event_id=self.event_id, user_id=user_id)
        rows = await self.cues.mutate(
            self.backend.table(self.TABLE).insert(row).execute()
        )
        return self.first(Cue, rows)

    async def delete(self, cue_id: str) -> None:
        await self.cues.mutate(
            self.backend.table(self.TABLE).delete().eq("id", cue_id).execute()
        )
