"""
Personal journal models.
"""
from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime
from enum import Enum


class Mood(str, Enum):
    """Moods offered in the comfort corner."""
    BLOSSOM = "🌸"
    CLOUDY = "☁️"
    TEA = "🍵"
    SPARKLE = "✨"
    SLEEPY = "💤"


class JournalEntryCreate(BaseModel):
    """A new journal entry."""
    mood: Mood = Field(default=Mood.BLOSSOM)
    content: str = Field(default="", description="Free text")


class JournalEntry(JournalEntryCreate):
    """A stored entry (table `journal_entries`)."""
    id: str
    created_at: Optional[datetime] = None


class LoveNote(BaseModel):
    """A note drawn from the love jar (table `love_notes`)."""
    content: str
