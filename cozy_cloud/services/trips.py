"""
Trip Service - the trip hub and trip detail screens.
"""
import logging
from typing import List, Optional

from .base import ScreenService
from .backend import BackendClient
from .collections import Collection
from .errors import NotFoundError
from ..models.trip import Trip, TripCreate, TripStatus

logger = logging.getLogger(__name__)


class TripService(ScreenService):
    """Lists, creates, updates and deletes trips."""

    TABLE = "itineraries"

    def __init__(self, backend: BackendClient):
        super().__init__(backend)
        self.trips: Collection[Trip] = Collection("trips", self._load)

    async def _load(self) -> List[Trip]:
        rows = await self.backend.table(self.TABLE).select().order("start_date").execute()
        return self.parse(Trip, rows)

    async def list(self) -> List[Trip]:
        return await self.trips.get()

    async def get(self, trip_id: str) -> Trip:
        row = await self.backend.table(self.TABLE).select().eq("id", trip_id).single().execute()
        if row is None:
            raise NotFoundError("Trip not found!")
        return Trip(**row)

    async def create(self, data: TripCreate) -> Optional[Trip]:
        user_id = await self.current_user_id()
        row = data.model_dump(mode="json")
        row.update(user_id=user_id, status=TripStatus.PLANNING.value)
        rows = await self.trips.mutate(
            self.backend.table(self.TABLE).insert(row).execute()
        )
        logger.info(f"Created trip to {data.destination}")
        return self.first(Trip, rows)

    async def set_status(self, trip_id: str, status: TripStatus) -> Trip:
        status = TripStatus(status)
        await self.trips.mutate(
            self.backend.table(self.TABLE).update({"status": status.value}).eq("id", trip_id).execute()
        )
        logger.info(f"Trip {trip_id} is now {status.value}")
        return await self.get(trip_id)

    async def delete(self, trip_id: str) -> None:
        # Expenses, activities and documents cascade on the backend
        await self.trips.mutate(
            self.backend.table(self.TABLE).delete().eq("id", trip_id).execute()
        )
        logger.info(f"Deleted trip {trip_id}")
