"""
MICE event models - events, guest lists and run-of-show cues.
"""
from pydantic import BaseModel, Field, field_validator
from typing import Optional
from datetime import date
from enum import Enum

from .trip import canonical_time


class EventStatus(str, Enum):
    """Lifecycle of an event."""
    PLANNING = "planning"
    ACTIVE = "active"
    COMPLETED = "completed"


class EventRole(str, Enum):
    """The user's role at the event."""
    ORGANIZER = "Organizer"
    VOLUNTEER = "Volunteer"
    ATTENDEE = "Attendee"
    SPEAKER = "Speaker"


class GuestStatus(str, Enum):
    """RSVP state of a guest."""
    INVITED = "Invited"
    CONFIRMED = "Confirmed"
    CHECKED_IN = "Checked In"
    DECLINED = "Declined"


class EventCreate(BaseModel):
    """Fields submitted when creating an event."""
    name: str = Field(..., min_length=1, description="Event name")
    event_type: str = Field(
        default="Conference",
        description="Meeting, incentive, conference, exhibition..."
    )
    role: EventRole = Field(default=EventRole.ORGANIZER)
    venue: str = Field(default="", description="Where the event takes place")
    event_date: date = Field(..., description="Date of the event")


class Event(EventCreate):
    """A stored event (table `events`)."""
    id: str
    status: EventStatus = Field(default=EventStatus.PLANNING)
    venue: str = Field(default="")
    event_date: Optional[date] = None

    @field_validator("venue", "event_type", mode="before")
    @classmethod
    def empty_text(cls, v):
        return v or ""

    @field_validator("event_date", mode="before")
    @classmethod
    def empty_date(cls, v):
        return v or None

    @field_validator("role", mode="before")
    @classmethod
    def default_role(cls, v):
        return v or EventRole.ORGANIZER

    @field_validator("status", mode="before")
    @classmethod
    def legacy_status(cls, v):
        # Early rows were created as 'upcoming'
        if v in (None, "upcoming"):
            return EventStatus.PLANNING
        return v


class GuestCreate(BaseModel):
    """Fields submitted when adding a guest."""
    name: str = Field(..., min_length=1)
    role: str = Field(default="Attendee")
    status: GuestStatus = Field(default=GuestStatus.INVITED)
    contact_info: str = Field(default="")
    dietary_restrictions: str = Field(default="")


class Guest(GuestCreate):
    """A stored guest (table `event_guests`)."""
    id: str
    event_id: str

    @field_validator("contact_info", "dietary_restrictions", mode="before")
    @classmethod
    def empty_text(cls, v):
        return v or ""


class CueCreate(BaseModel):
    """Fields submitted when adding a run-of-show cue."""
    day_number: int = Field(default=1, ge=1)
    start_time: str = Field(..., description="24-hour 'HH:mm'")
    end_time: Optional[str] = Field(None, description="24-hour 'HH:mm'")
    activity: str = Field(..., min_length=1, description="What happens on stage")
    personnel: str = Field(default="", description="Who is responsible")
    notes: str = Field(default="")

    @field_validator("start_time", "end_time", mode="before")
    @classmethod
    def validate_times(cls, v):
        if v == "":
            return None
        return canonical_time(v)


class Cue(CueCreate):
    """A stored cue (table `run_of_show`)."""
    id: str
    event_id: str

    @field_validator("personnel", "notes", mode="before")
    @classmethod
    def empty_text(cls, v):
        return v or ""
