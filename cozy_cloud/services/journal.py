"""
Journal Service - the comfort corner and the love jar.
"""
import logging
import random
from typing import List, Optional

from .base import ScreenService
from .backend import BackendClient
from .collections import Collection
from .errors import BackendError, ValidationFailed
from ..models.journal import JournalEntry, JournalEntryCreate, LoveNote

logger = logging.getLogger(__name__)

FALLBACK_NOTE = "I love you! (Database couldn't find a note, but this one is true!)"


class JournalService(ScreenService):
    """Mood journal entries, newest first."""

    TABLE = "journal_entries"

    def __init__(self, backend: BackendClient, rng: Optional[random.Random] = None):
        super().__init__(backend)
        self.rng = rng or random.Random()
        self.entries: Collection[JournalEntry] = Collection("journal", self._load)

    async def _load(self) -> List[JournalEntry]:
        rows = await (
            self.backend.table(self.TABLE)
            .select()
            .order("created_at", ascending=False)
            .execute()
        )
        return self.parse(JournalEntry, rows)

    async def list(self) -> List[JournalEntry]:
        return await self.entries.get()

    async def add(self, data: JournalEntryCreate) -> Optional[JournalEntry]:
        if not data.content.strip():
            raise ValidationFailed("Write a little something first. ✏️")
        user_id = await self.current_user_id("You must be logged in to save a memory!")
        rows = await self.entries.mutate(
            self.backend.table(self.TABLE).insert({
                "content": data.content,
                "mood": data.mood.value,
                "user_id": user_id,
            }).execute()
        )
        return self.first(JournalEntry, rows)

    async def love_note(self) -> LoveNote:
        """A random note from the jar; a built-in note when the jar is empty or unreachable."""
        try:
            rows = await self.backend.table("love_notes").select("content").execute()
        except BackendError as e:
            logger.warning(f"Love jar unavailable: {e.message}")
            rows = []
        if not rows:
            return LoveNote(content=FALLBACK_NOTE)
        return LoveNote(content=self.rng.choice(rows)["content"])
