"""Data models for Cozy Cloud."""
from .trip import (
    Trip, TripCreate, TripStatus,
    Activity, ActivityCreate,
    Expense, ExpenseCreate, ExpenseCategory,
    Document,
)
from .event import (
    Event, EventCreate, EventStatus, EventRole,
    Guest, GuestCreate, GuestStatus,
    Cue, CueCreate,
)
from .directory import Supplier, SupplierCreate, SupplierCategory
from .journal import JournalEntry, JournalEntryCreate, LoveNote, Mood

__all__ = [
    "Trip",
    "TripCreate",
    "TripStatus",
    "Activity",
    "ActivityCreate",
    "Expense",
    "ExpenseCreate",
    "ExpenseCategory",
    "Document",
    "Event",
    "EventCreate",
    "EventStatus",
    "EventRole",
    "Guest",
    "GuestCreate",
    "GuestStatus",
    "Cue",
    "CueCreate",
    "Supplier",
    "SupplierCreate",
    "SupplierCategory",
    "JournalEntry",
    "JournalEntryCreate",
    "LoveNote",
    "Mood",
]
