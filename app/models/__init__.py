"""
SQLAlchemy database models.
"""
from app.models.customer import Customer
from app.models.location import Location

__all__ = ["Customer", "Location"]
