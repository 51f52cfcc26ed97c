"""
Supplier directory models.
"""
from pydantic import BaseModel, Field, field_validator
from typing import Optional
from enum import Enum


class SupplierCategory(str, Enum):
    """Kinds of suppliers kept in the directory."""
    TRANSPORT = "Transport"
    ACCOMMODATION = "Accommodation"
    FOOD_AND_BEV = "Food & Bev"
    GUIDE_STAFF = "Guide/Staff"
    OTHER = "Other"


class SupplierCreate(BaseModel):
    """Fields submitted when adding a supplier."""
    business_name: str = Field(..., min_length=1)
    category: SupplierCategory = Field(default=SupplierCategory.TRANSPORT)
    contact_person: str = Field(default="")
    contact_info: str = Field(default="", description="Phone number")
    email: str = Field(default="")
    rating: int = Field(default=0, ge=0, le=5, description="0 to 5 stars")
    notes: str = Field(default="")


class Supplier(SupplierCreate):
    """A stored supplier (table `suppliers`)."""
    id: str
    category: SupplierCategory = Field(default=SupplierCategory.OTHER)

    @field_validator("contact_person", "contact_info", "email", "notes", mode="before")
    @classmethod
    def empty_text(cls, v):
        return v or ""

    @field_validator("rating", mode="before")
    @classmethod
    def empty_rating(cls, v):
        return v or 0

    def matches(self, search: str, category: Optional[str] = None) -> bool:
        """Case-insensitive match on name or contact, plus optional category."""
        term = (search or "").lower()
        matches_search = (
            term in self.business_name.lower()
            or (bool(self.contact_person) and term in self.contact_person.lower())
        )
        matches_category = category in (None, "", "All") or self.category.value == category
        return matches_search and matches_category
