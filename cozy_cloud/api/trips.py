"""
API Routes for trips: details, itinerary, budget and documents.
"""
from fastapi import APIRouter, Depends, File, UploadFile
from fastapi.responses import Response
from pydantic import BaseModel
from typing import Optional
from urllib.parse import quote

from .deps import get_backend
from ..models.trip import ActivityCreate, ExpenseCreate, TripCreate, TripStatus
from ..services.backend import BackendClient
from ..services.budget import BudgetService
from ..services.documents import DocumentService, validate_upload
from ..services.itinerary import ItineraryService
from ..services.trips import TripService


router = APIRouter(prefix="/trips", tags=["trips"])


# Request Models
class StatusUpdate(BaseModel):
    status: TripStatus


class LimitUpdate(BaseModel):
    budget_limit: float


class ReorderRequest(BaseModel):
    day_number: int
    source_index: int
    destination_index: Optional[int] = None


class RenameRequest(BaseModel):
    file_name: str


def _days(grouped: dict) -> dict:
    return {str(day): items for day, items in grouped.items()}


def content_disposition(file_name: str) -> str:
    """Attachment header with an ASCII fallback name and the UTF-8 name (RFC 6266)."""
    fallback = "".join(c for c in file_name if 32 <= ord(c) < 127 and c not in '"\\')
    return f'attachment; filename="{fallback or "download"}"; filename*=UTF-8\'\'{quote(file_name, safe="")}'


# Trips

@router.get("")
async def list_trips(backend: BackendClient = Depends(get_backend)):
    """List trips by start date."""
    return {"trips": await TripService(backend).list()}


@router.post("", status_code=201)
async def create_trip(data: TripCreate, backend: BackendClient = Depends(get_backend)):
    """Create a trip in the planning state."""
    return {"trip": await TripService(backend).create(data)}


@router.get("/{trip_id}")
async def get_trip(trip_id: str, backend: BackendClient = Depends(get_backend)):
    return {"trip": await TripService(backend).get(trip_id)}


@router.put("/{trip_id}/status")
async def set_trip_status(trip_id: str, request: StatusUpdate,
                          backend: BackendClient = Depends(get_backend)):
    return {"trip": await TripService(backend).set_status(trip_id, request.status)}


@router.delete("/{trip_id}")
async def delete_trip(trip_id: str, backend: BackendClient = Depends(get_backend)):
    await TripService(backend).delete(trip_id)
    return {"success": True}


# Itinerary

@router.get("/{trip_id}/activities")
async def list_activities(trip_id: str, backend: BackendClient = Depends(get_backend)):
    """Activities grouped by day."""
    service = ItineraryService(backend, trip_id)
    return {
        "destination": await service.destination(),
        "days": _days(await service.by_day()),
    }


@router.post("/{trip_id}/activities", status_code=201)
async def add_activity(trip_id: str, data: ActivityCreate,
                       backend: BackendClient = Depends(get_backend)):
    return {"activity": await ItineraryService(backend, trip_id).add(data)}


@router.put("/{trip_id}/activities/{activity_id}")
async def update_activity(trip_id: str, activity_id: str, data: ActivityCreate,
                          backend: BackendClient = Depends(get_backend)):
    return {"activity": await ItineraryService(backend, trip_id).update(activity_id, data)}


@router.delete("/{trip_id}/activities/{activity_id}")
async def delete_activity(trip_id: str, activity_id: str,
                          backend: BackendClient = Depends(get_backend)):
    await ItineraryService(backend, trip_id).delete(activity_id)
    return {"success": True}


@router.post("/{trip_id}/activities/reorder")
async def reorder_activities(trip_id: str, request: ReorderRequest,
                             backend: BackendClient = Depends(get_backend)):
    """Move one activity within its day."""
    service = ItineraryService(backend, trip_id)
    grouped = await service.reorder(
        request.day_number, request.source_index, request.destination_index
    )
    return {"days": _days(grouped), "persisted": service.persist_order}


# Budget

@router.get("/{trip_id}/budget")
async def get_budget(trip_id: str, backend: BackendClient = Depends(get_backend)):
    service = BudgetService(backend, trip_id)
    return {
        "expenses": await service.list(),
        "summary": await service.summary(),
    }


@router.post("/{trip_id}/expenses", status_code=201)
async def add_expense(trip_id: str, data: ExpenseCreate,
                      backend: BackendClient = Depends(get_backend)):
    return {"expense": await BudgetService(backend, trip_id).add(data)}


@router.delete("/{trip_id}/expenses/{expense_id}")
async def delete_expense(trip_id: str, expense_id: str,
                         backend: BackendClient = Depends(get_backend)):
    await BudgetService(backend, trip_id).delete(expense_id)
    return {"success": True}


@router.put("/{trip_id}/budget")
async def set_budget_limit(trip_id: str, request: LimitUpdate,
                           backend: BackendClient = Depends(get_backend)):
    service = BudgetService(backend, trip_id)
    await service.set_limit(request.budget_limit)
    return {"summary": await service.summary()}


# Documents

@router.get("/{trip_id}/documents")
async def list_documents(trip_id: str, backend: BackendClient = Depends(get_backend)):
    return {"documents": await DocumentService(backend, trip_id).list()}


@router.post("/{trip_id}/documents", status_code=201)
async def upload_document(trip_id: str, file: UploadFile = File(...),
                          backend: BackendClient = Depends(get_backend)):
    """Upload a PDF or image. Oversized or unsupported files are refused up front."""
    service = DocumentService(backend, trip_id)
    content_type = file.content_type or "application/octet-stream"
    if file.size is not None:
        validate_upload(content_type, file.size)
    data = await file.read()
    document, message = await service.upload(
        file.filename or "document", content_type, data, size=file.size
    )
    return {"document": document, "alert": {"type": "success", "message": message}}


@router.put("/{trip_id}/documents/{document_id}")
async def rename_document(trip_id: str, document_id: str, request: RenameRequest,
                          backend: BackendClient = Depends(get_backend)):
    message = await DocumentService(backend, trip_id).rename(document_id, request.file_name)
    return {"alert": {"type": "success", "message": message}}


@router.delete("/{trip_id}/documents/{document_id}")
async def delete_document(trip_id: str, document_id: str,
                          backend: BackendClient = Depends(get_backend)):
    await DocumentService(backend, trip_id).delete(document_id)
    return {"success": True}


@router.get("/{trip_id}/documents/{document_id}/download")
async def download_document(trip_id: str, document_id: str,
                            backend: BackendClient = Depends(get_backend)):
    document, data = await DocumentService(backend, trip_id).download(document_id)
    return Response(
        content=data,
        media_type=document.file_type,
        headers={"Content-Disposition": content_disposition(document.file_name)},
    )


@router.get("/{trip_id}/documents/{document_id}/preview")
async def preview_document(trip_id: str, document_id: str,
                           backend: BackendClient = Depends(get_backend)):
    """Short-lived signed URL for inline viewing."""
    service = DocumentService(backend, trip_id)
    document = await service.find(document_id)
    return {
        "url": await service.preview_url(document_id),
        "type": document.file_type,
        "name": document.file_name,
    }
