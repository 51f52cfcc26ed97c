"""
Directory Service - the supplier address book.
"""
import logging
from typing import List, Optional

from .base import ScreenService
from .backend import BackendClient
from .collections import Collection
from ..models.directory import Supplier, SupplierCreate

logger = logging.getLogger(__name__)


class DirectoryService(ScreenService):
    """Suppliers shared across trips and events."""

    TABLE = "suppliers"

    def __init__(self, backend: BackendClient):
        super().__init__(backend)
        self.suppliers: Collection[Supplier] = Collection("suppliers", self._load)

    async def _load(self) -> List[Supplier]:
        rows = await self.backend.table(self.TABLE).select().order("business_name").execute()
        return self.parse(Supplier, rows)

    async def list(self) -> List[Supplier]:
        return await self.suppliers.get()

    async def search(self, term: str = "", category: Optional[str] = None) -> List[Supplier]:
        """Filter by name/contact text and category ("All" keeps every category)."""
        return [s for s in await self.suppliers.get() if s.matches(term, category)]

    async def add(self, data: SupplierCreate) -> Optional[Supplier]:
        user_id = await self.current_user_id()
        row = data.model_dump(mode="json")
        row["user_id"] = user_id
        rows = await self.suppliers.mutate(
            self.backend.table(self.TABLE).insert(row).execute()
        )
        logger.info(f"Added supplier {data.business_name}")
        return self.first(Supplier, rows)

    async def delete(self, supplier_id: str) -> None:
        await self.suppliers.mutate(
            self.backend.table(self.TABLE).delete().eq("id", supplier_id).execute()
        )
