"""
Pydantic schemas for responses, and the validation rules for requests.
"""
from app.schemas.location import LocationBase, Location, location_rules
from app.schemas.customer import CustomerBase, Customer, customer_rules

__all__ = [
    "LocationBase", "Location", "location_rules",
    "CustomerBase", "Customer", "customer_rules",
]
