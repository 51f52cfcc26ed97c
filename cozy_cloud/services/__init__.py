"""Services for Cozy Cloud."""
from .backend import BackendClient
from .collections import Collection
from .errors import CozyError, ValidationFailed, BackendError, NotFoundError
from .trips import TripService
from .itinerary import ItineraryService
from .budget import BudgetService
from .documents import DocumentService
from .events import EventService, GuestService, RunOfShowService
from .directory import DirectoryService
from .journal import JournalService

__all__ = [
    "BackendClient",
    "Collection",
    "CozyError",
    "ValidationFailed",
    "BackendError",
    "NotFoundError",
    "TripService",
    "ItineraryService",
    "BudgetService",
    "DocumentService",
    "EventService",
    "GuestService",
    "RunOfShowService",
    "DirectoryService",
    "JournalService",
]
