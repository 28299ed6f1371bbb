"""
Pydantic schemas and validation rules for Customer.
"""
from pydantic import BaseModel, ConfigDict
from datetime import datetime
from typing import List, Optional

from app.models.customer import Customer as CustomerModel
from app.schemas.location import Location
from app.validation import EmailFormat, MaxLength, Pattern, Required, RuleTable, Unique

# Optional leading "+", then digits, spaces, dots and hyphens with at most
# one parenthesized group, e.g. "+1 (555) 010-9999".
PHONE_PATTERN = r"[+]?[-\s.0-9]*([(][\s.0-9]*[)])?[-\s.0-9]*"


def customer_rules(customer_id: Optional[int] = None) -> RuleTable:
    """
    Rules for creating or replacing a customer.

    Pass ``customer_id`` when updating so the customer's own email does
    not count as taken.
    """
    return {
        "first_name": [Required(), MaxLength(255)],
        "last_name": [Required(), MaxLength(255)],
        "email": [
            Required(),
            EmailFormat(),
            MaxLength(255),
            Unique(CustomerModel.email, ignore_id=customer_id),
        ],
        "phone": [Required(), Pattern(PHONE_PATTERN), MaxLength(30)],
    }


class CustomerBase(BaseModel):
    """Base customer schema with common fields."""
    first_name: str
    last_name: str
    email: str
    phone: str


class Customer(CustomerBase):
    """Schema for customer responses."""
    id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    locations: List[Location] = []

    model_config = ConfigDict(from_attributes=True)
