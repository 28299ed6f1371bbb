"""
Pydantic schemas and validation rules for Location.
"""
from pydantic import BaseModel, ConfigDict
from datetime import datetime
from typing import Optional

from app.models.customer import Customer as CustomerModel
from app.validation import Exists, MaxLength, Pattern, Required, RuleTable

# Digits, spaces, dots and hyphens only.
ZIP_PATTERN = r"[-\s.0-9]*"


def location_rules() -> RuleTable:
    """Rules for creating or replacing a location."""
    return {
        "address": [Required(), MaxLength(255)],
        "city": [Required(), MaxLength(255)],
        "state": [Required(), MaxLength(255)],
        "zip": [Required(), Pattern(ZIP_PATTERN), MaxLength(30)],
        "customer_id": [Required(), Exists(CustomerModel.id)],
    }


class LocationBase(BaseModel):
    """Base location schema with common fields."""
    address: str
    city: str
    state: str
    zip: str
    customer_id: int


class Location(LocationBase):
    """Schema for location responses."""
    id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
