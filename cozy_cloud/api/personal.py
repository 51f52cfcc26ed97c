"""
API Routes for the supplier directory and the personal journal.
"""
from fastapi import APIRouter, Depends
from typing import Optional

from .deps import get_backend
from ..models.directory import SupplierCreate
from ..models.journal import JournalEntryCreate
from ..services.backend import BackendClient
from ..services.directory import DirectoryService
from ..services.journal import JournalService


router = APIRouter(tags=["personal"])


@router.get("/suppliers")
async def list_suppliers(q: str = "", category: Optional[str] = None,
                         backend: BackendClient = Depends(get_backend)):
    """Suppliers by name, filtered by search text and category."""
    return {"suppliers": await DirectoryService(backend).search(q, category)}


@router.post("/suppliers", status_code=201)
async def add_supplier(data: SupplierCreate, backend: BackendClient = Depends(get_backend)):
    return {"supplier": await DirectoryService(backend).add(data)}


@router.delete("/suppliers/{supplier_id}")
async def delete_supplier(supplier_id: str, backend: BackendClient = Depends(get_backend)):
    await DirectoryService(backend).delete(supplier_id)
    return {"success": True}


@router.get("/journal")
async def list_entries(backend: BackendClient = Depends(get_backend)):
    return {"entries": await JournalService(backend).list()}


@router.post("/journal", status_code=201)
async def add_entry(data: JournalEntryCreate, backend: BackendClient = Depends(get_backend)):
    return {"entry": await JournalService(backend).add(data)}


@router.get("/love-note")
async def love_note(backend: BackendClient = Depends(get_backend)):
    return await JournalService(backend).love_note()
