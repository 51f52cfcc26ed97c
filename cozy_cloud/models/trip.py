"""
Trip models - itineraries and everything that hangs off them.
"""
from pydantic import BaseModel, Field, field_validator
from typing import Optional
from datetime import date, datetime
from enum import Enum
import re


CANONICAL_TIME = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


def canonical_time(value):
    """Accept 'HH:mm' or the backend's 'HH:mm:ss' and return 'HH:mm'."""
    if value is None:
        return value
    text = str(value).strip()
    if len(text) == 8 and text[5] == ":":
        text = text[:5]
    if not CANONICAL_TIME.match(text):
        raise ValueError(f"Expected a 24-hour HH:mm time, got {value!r}")
    return text


class TripStatus(str, Enum):
    """Lifecycle of a trip."""
    PLANNING = "planning"
    CONFIRMED = "confirmed"
    COMPLETED = "completed"


class ExpenseCategory(str, Enum):
    """Budget categories."""
    FOOD = "Food"
    TRANSPORT = "Transport"
    STAY = "Stay"
    SHOPPING = "Shopping"
    OTHER = "Other"


class TripCreate(BaseModel):
    """Fields submitted when creating a trip."""
    title: str = Field(
        default="",
        description="Short name for the trip"
    )
    destination: str = Field(
        ...,
        min_length=1,
        description="Where the trip goes"
    )
    start_date: date = Field(..., description="First day of the trip")
    end_date: date = Field(..., description="Last day of the trip")
    budget_limit: float = Field(
        default=0.0,
        ge=0,
        description="Spending limit for the whole trip"
    )
    notes: Optional[str] = Field(None, description="Free-form notes")

    @field_validator("end_date")
    @classmethod
    def validate_end_date(cls, v, info):
        start = info.data.get("start_date")
        if start is not None and v < start:
            raise ValueError("end_date must not be before start_date")
        return v


class Trip(BaseModel):
    """
    A stored trip (table `itineraries`).

    Rows are read back as they are; older rows may have no dates.
    """
    id: str
    title: str = Field(default="")
    destination: str = Field(default="")
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    budget_limit: float = Field(default=0.0)
    notes: Optional[str] = None
    status: TripStatus = Field(
        default=TripStatus.PLANNING,
        description="planning, confirmed or completed"
    )

    @field_validator("budget_limit", mode="before")
    @classmethod
    def default_budget(cls, v):
        return 0.0 if v is None else v

    @field_validator("title", "destination", mode="before")
    @classmethod
    def empty_title(cls, v):
        return v or ""

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def empty_date(cls, v):
        return v or None


class ActivityCreate(BaseModel):
    """Fields submitted when adding or editing an activity."""
    day_number: int = Field(
        default=1,
        ge=1,
        description="Day of the trip the activity belongs to"
    )
    start_time: Optional[str] = Field(
        None,
        description="Start time, 24-hour 'HH:mm'; left empty until picked"
    )
    activity_name: str = Field(..., min_length=1, description="What happens")
    location: str = Field(default="", description="Where it happens")
    notes: Optional[str] = Field(None, description="Additional notes")

    @field_validator("start_time", mode="before")
    @classmethod
    def validate_start_time(cls, v):
        return canonical_time(v or None)

    @field_validator("location", mode="before")
    @classmethod
    def empty_location(cls, v):
        return v or ""


class Activity(ActivityCreate):
    """A stored activity (table `itinerary_activities`)."""
    id: str
    itinerary_id: str
    start_time: str
    sort_order: Optional[int] = Field(
        None,
        description="Position within the day once an order has been saved"
    )


class ExpenseCreate(BaseModel):
    """Fields submitted when logging an expense."""
    description: str = Field(..., min_length=1)
    amount: float = Field(..., gt=0)
    category: ExpenseCategory = Field(default=ExpenseCategory.FOOD)
    expense_date: Optional[date] = Field(
        None,
        description="Defaults to today on the backend"
    )


class Expense(ExpenseCreate):
    """A stored expense (table `itinerary_expenses`)."""
    id: str
    itinerary_id: str
    category: ExpenseCategory = Field(default=ExpenseCategory.OTHER)

    @field_validator("category", mode="before")
    @classmethod
    def unknown_category(cls, v):
        # Rows written by older clients may carry labels we no longer offer
        try:
            return ExpenseCategory(v)
        except ValueError:
            return ExpenseCategory.OTHER


class Document(BaseModel):
    """A stored document (table `trip_documents`)."""
    id: str
    itinerary_id: str
    file_path: str = Field(..., description="Object path inside the bucket")
    file_name: str = Field(..., description="Name shown to the user")
    file_type: str = Field(..., description="MIME type")
    file_size: int = Field(..., ge=0, description="Size in bytes")
    created_at: Optional[datetime] = None

    @property
    def is_image(self) -> bool:
        return self.file_type.startswith("image/")

    @property
    def is_pdf(self) -> bool:
        return self.file_type == "application/pdf"
