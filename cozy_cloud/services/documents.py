"""
Document Service - trip paperwork kept in object storage.
"""
import logging
import random
import time
from typing import Callable, List, Optional, Tuple

from .base import ScreenService
from .backend import BackendClient
from .collections import Collection
from .errors import NotFoundError, ValidationFailed
from ..config import settings
from ..models.trip import Document

logger = logging.getLogger(__name__)

SUCCESS_MESSAGES = [
    "All tucked away safely! 💖",
    "Organized and ready to go! ✨",
    "One less thing to worry about! 🌸",
    "Your sanctuary is growing! ☁️",
]
RENAMED_MESSAGE = "Renamed successfully! 📝"
TOO_BIG_MESSAGE = "File is too big! Max 50MB please. 🍃"
WRONG_TYPE_MESSAGE = "Oops! Only PDF, JPG, or PNG files. 📄"


def validate_upload(
    content_type: str,
    size: int,
    max_bytes: Optional[int] = None,
    allowed_types: Optional[List[str]] = None,
) -> None:
    """Reject a file locally; nothing is sent to the backend."""
    max_bytes = settings.max_upload_bytes if max_bytes is None else max_bytes
    allowed_types = settings.allowed_upload_types if allowed_types is None else allowed_types
    if size > max_bytes:
        raise ValidationFailed(TOO_BIG_MESSAGE)
    if content_type not in allowed_types:
        raise ValidationFailed(WRONG_TYPE_MESSAGE)


class DocumentService(ScreenService):
    """Uploads, lists, renames, previews and removes a trip's documents."""

    TABLE = "trip_documents"

    def __init__(
        self,
        backend: BackendClient,
        trip_id: str,
        bucket: Optional[str] = None,
        clock: Callable[[], float] = time.time,
    ):
        super().__init__(backend)
        self.trip_id = trip_id
        self.bucket = backend.storage.from_(bucket or settings.documents_bucket)
        self.clock = clock
        self.documents: Collection[Document] = Collection("documents", self._load)

    async def _load(self) -> List[Document]:
        rows = await (
            self.backend.table(self.TABLE)
            .select()
            .eq("itinerary_id", self.trip_id)
            .order("created_at", ascending=False)
            .execute()
        )
        return self.parse(Document, rows)

    async def list(self) -> List[Document]:
        return await self.documents.get()

    async def find(self, document_id: str) -> Document:
        for doc in await self.documents.get():
            if doc.id == document_id:
                return doc
        raise NotFoundError("Document not found!")

    def storage_path(self, user_id: str, file_name: str) -> str:
        ext = file_name.rsplit(".", 1)[-1] if "." in file_name else "bin"
        return f"{user_id}/{self.trip_id}/{int(self.clock() * 1000)}.{ext}"

    async def upload(self, file_name: str, content_type: str, data: bytes,
                     size: Optional[int] = None) -> Tuple[Optional[Document], str]:
        """Store the file, record it, and return the new row with a cheerful message.

        `size` is the size the client declared; it is checked before the body
        is looked at.
        """
        validate_upload(content_type, len(data) if size is None else size)
        user_id = await self.current_user_id()

        path = self.storage_path(user_id, file_name)
        await self.bucket.upload(path, data, content_type)
        logger.info(f"Uploaded {file_name} ({len(data)} bytes) to {path}")

        rows = await self.documents.mutate(
            self.backend.table(self.TABLE).insert({
                "itinerary_id": self.trip_id,
                "user_id": user_id,
                "file_name": file_name,
                "file_path": path,
                "file_type": content_type,
                "file_size": len(data),
            }).execute()
        )
        return self.first(Document, rows), random.choice(SUCCESS_MESSAGES)

    async def delete(self, document_id: str) -> None:
        doc = await self.find(document_id)
        await self.bucket.remove([doc.file_path])
        await self.documents.mutate(
            self.backend.table(self.TABLE).delete().eq("id", document_id).execute()
        )
        logger.info(f"Removed document {doc.file_name}")

    async def rename(self, document_id: str, new_name: str) -> str:
        new_name = (new_name or "").strip()
        if not new_name:
            raise ValidationFailed("Give this file a name first.")
        await self.find(document_id)
        await self.documents.mutate(
            self.backend.table(self.TABLE)
            .update({"file_name": new_name})
            .eq("id", document_id)
            .execute()
        )
        return RENAMED_MESSAGE

    async def download(self, document_id: str) -> Tuple[Document, bytes]:
        doc = await self.find(document_id)
        return doc, await self.bucket.download(doc.file_path)

    async def preview_url(self, document_id: str) -> str:
        """Short-lived signed URL for showing the file inline."""
        doc = await self.find(document_id)
        return await self.bucket.create_signed_url(doc.file_path, settings.signed_url_ttl_seconds)
