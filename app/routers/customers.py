"""
Customer routes.
"""
import logging
from typing import Any, List

from fastapi import APIRouter, Body, Depends, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.database import RecordId, get_db
from app.exceptions import NotFoundError
from app.models.customer import Customer
from app.schemas.customer import Customer as CustomerSchema, customer_rules
from app.validation import commit_or_revalidate, validate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/customers", tags=["customers"])


async def get_customer_or_404(db: AsyncSession, customer_id: int) -> Customer:
    """
    Load a customer with its locations, re-reading any copy already in
    the session so store-generated values are current.
    """
    result = await db.execute(
        select(Customer)
        .options(selectinload(Customer.locations))
        .where(Customer.id == customer_id)
        .execution_options(populate_existing=True)
    )
    customer = result.scalar_one_or_none()

    if customer is None:
        raise NotFoundError("Customer", customer_id)

    return customer


@router.get("", response_model=List[CustomerSchema])
async def get_customers(db: AsyncSession = Depends(get_db)):
    """
    Get all customers with their locations.
    """
    result = await db.execute(
        select(Customer).options(selectinload(Customer.locations)).order_by(Customer.id)
    )
    return result.scalars().all()


@router.get("/{customer_id}", response_model=CustomerSchema)
async def get_customer(customer_id: RecordId, db: AsyncSession = Depends(get_db)):
    """
    Get a specific customer by ID.
    """
    return await get_customer_or_404(db, customer_id)


@router.post("", response_model=CustomerSchema, status_code=status.HTTP_201_CREATED)
async def create_customer(payload: Any = Body(default=None), db: AsyncSession = Depends(get_db)):
    """
    Create a new customer.
    """
    rules = customer_rules()
    data = await validate(db, payload, rules)

    db_customer = Customer(**data)
    db.add(db_customer)
    await commit_or_revalidate(db, payload, rules)
    logger.info("Created customer %s", db_customer.id)

    return await get_customer_or_404(db, db_customer.id)


@router.put("/{customer_id}", response_model=CustomerSchema)
async def update_customer(
    customer_id: RecordId,
    payload: Any = Body(default=None),
    db: AsyncSession = Depends(get_db),
):
    """
    Replace a customer's fields.
    """
    db_customer = await get_customer_or_404(db, customer_id)

    rules = customer_rules(db_customer.id)
    data = await validate(db, payload, rules)
    for field, value in data.items():
        setattr(db_customer, field, value)

    await commit_or_revalidate(db, payload, rules)
    logger.info("Updated customer %s", customer_id)

    return await get_customer_or_404(db, customer_id)


@router.delete("/{customer_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_customer(customer_id: RecordId, db: AsyncSession = Depends(get_db)):
    """
    Delete a customer. The store removes its locations.
    """
    db_customer = await db.get(Customer, customer_id)

    if db_customer is None:
        raise NotFoundError("Customer", customer_id)

    await db.delete(db_customer)
    await db.commit()
    logger.info("Deleted customer %s", customer_id)

    return None
