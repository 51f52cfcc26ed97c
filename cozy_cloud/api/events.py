"""
API Routes for MICE events, guest lists and run-of-show.
"""
from fastapi import APIRouter, Depends
from pydantic import BaseModel

from .deps import get_backend
from ..models.event import CueCreate, EventCreate, EventStatus, GuestCreate, GuestStatus
from ..services.backend import BackendClient
from ..services.events import EventService, GuestService, RunOfShowService


router = APIRouter(prefix="/events", tags=["events"])


class EventStatusUpdate(BaseModel):
    status: EventStatus


class GuestStatusUpdate(BaseModel):
    status: GuestStatus


@router.get("")
async def list_events(backend: BackendClient = Depends(get_backend)):
    return {"events": await EventService(backend).list()}


@router.post("", status_code=201)
async def create_event(data: EventCreate, backend: BackendClient = Depends(get_backend)):
    return {"event": await EventService(backend).create(data)}


@router.get("/{event_id}")
async def get_event(event_id: str, backend: BackendClient = Depends(get_backend)):
    return {"event": await EventService(backend).get(event_id)}


@router.put("/{event_id}/status")
async def set_event_status(event_id: str, request: EventStatusUpdate,
                           backend: BackendClient = Depends(get_backend)):
    return {"event": await EventService(backend).set_status(event_id, request.status)}


@router.delete("/{event_id}")
async def delete_event(event_id: str, backend: BackendClient = Depends(get_backend)):
    await EventService(backend).delete(event_id)
    return {"success": True}


# Guests

@router.get("/{event_id}/guests")
async def list_guests(event_id: str, backend: BackendClient = Depends(get_backend)):
    service = GuestService(backend, event_id)
    return {"guests": await service.list(), "stats": await service.stats()}


@router.post("/{event_id}/guests", status_code=201)
async def add_guest(event_id: str, data: GuestCreate,
                    backend: BackendClient = Depends(get_backend)):
    return {"guest": await GuestService(backend, event_id).add(data)}


@router.put("/{event_id}/guests/{guest_id}/status")
async def set_guest_status(event_id: str, guest_id: str, request: GuestStatusUpdate,
                           backend: BackendClient = Depends(get_backend)):
    service = GuestService(backend, event_id)
    guests = await service.set_status(guest_id, request.status)
    return {"guests": guests, "stats": await service.stats()}


@router.delete("/{event_id}/guests/{guest_id}")
async def delete_guest(event_id: str, guest_id: str,
                       backend: BackendClient = Depends(get_backend)):
    await GuestService(backend, event_id).delete(guest_id)
    return {"success": True}


# Run of show

@router.get("/{event_id}/run-of-show")
async def list_cues(event_id: str, backend: BackendClient = Depends(get_backend)):
    grouped = await RunOfShowService(backend, event_id).by_day()
    return {"days": {str(day): cues for day, cues in grouped.items()}}


@router.post("/{event_id}/run-of-show", status_code=201)
async def add_cue(event_id: str, data: CueCreate,
                  backend: BackendClient = Depends(get_backend)):
    return {"cue": await RunOfShowService(backend, event_id).add(data)}


@router.delete("/{event_id}/run-of-show/{cue_id}")
async def delete_cue(event_id: str, cue_id: str,
                     backend: BackendClient = Depends(get_backend)):
    await RunOfShowService(backend, event_id).delete(cue_id)
    return {"success": True}
