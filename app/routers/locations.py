"""
Location routes.
"""
import logging
from typing import Any, List

from fastapi import APIRouter, Body, Depends, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import RecordId, get_db
from app.exceptions import NotFoundError
from app.models.location import Location
from app.schemas.location import Location as LocationSchema, location_rules
from app.validation import commit_or_revalidate, validate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/locations", tags=["locations"])


async def get_location_or_404(db: AsyncSession, location_id: int) -> Location:
    location = await db.get(Location, location_id)

    if location is None:
        raise NotFoundError("Location", location_id)

    return location


@router.get("", response_model=List[LocationSchema])
async def get_locations(db: AsyncSession = Depends(get_db)):
    """
    Get all locations.
    """
    result = await db.execute(select(Location).order_by(Location.id))
    return result.scalars().all()


@router.get("/{location_id}", response_model=LocationSchema)
async def get_location(location_id: RecordId, db: AsyncSession = Depends(get_db)):
    """
    Get a specific location by ID.
    """
    return await get_location_or_404(db, location_id)


@router.post("", response_model=LocationSchema, status_code=status.HTTP_201_CREATED)
async def create_location(payload: Any = Body(default=None), db: AsyncSession = Depends(get_db)):
    """
    Create a new location for an existing customer.
    """
    rules = location_rules()
    data = await validate(db, payload, rules)

    db_location = Location(**data)
    db.add(db_location)
    await commit_or_revalidate(db, payload, rules)
    await db.refresh(db_location)
    logger.info("Created location %s for customer %s", db_location.id, db_location.customer_id)

    return db_location


@router.put("/{location_id}", response_model=LocationSchema)
async def update_location(
    location_id: RecordId,
    payload: Any = Body(default=None),
    db: AsyncSession = Depends(get_db),
):
    """
    Replace a location's fields.
    """
    db_location = await get_location_or_404(db, location_id)

    rules = location_rules()
    data = await validate(db, payload, rules)
    for field, value in data.items():
        setattr(db_location, field, value)

    await commit_or_revalidate(db, payload, rules)
    await db.refresh(db_location)
    logger.info("Updated location %s", location_id)

    return db_location


@router.delete("/{location_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_location(location_id: RecordId, db: AsyncSession = Depends(get_db)):
    """
    Delete a location.
    """
    db_location = await get_location_or_404(db, location_id)

    await db.delete(db_location)
    await db.commit()
    logger.info("Deleted location %s", location_id)

    return None
