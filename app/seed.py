"""
Fill the database with sample customers and locations.

Usage:
    python -m app.seed --customers 10 --locations 10
"""
import argparse
import asyncio
import logging
import random
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncEngine

from app.config import get_settings
from app.database import create_engine, create_sessionmaker, init_db
from app.models import Customer, Location

logger = logging.getLogger(__name__)

FIRST_NAMES = ["John", "Maria", "Ana", "Carlos", "Grace", "Wanjiru", "Peter", "Lucia", "Omar", "Hannah"]
LAST_NAMES = ["Doe", "Silva", "Smith", "Otieno", "Garcia", "Kim", "Novak", "Okafor", "Rossi", "Berg"]
STREETS = ["Main St", "Oak Avenue", "Pine Road", "Harbor Blvd", "Elm Street", "Mill Lane"]
CITIES = [
    ("Springfield", "Illinois"),
    ("Austin", "Texas"),
    ("Portland", "Oregon"),
    ("Denver", "Colorado"),
    ("Madison", "Wisconsin"),
]


def sample_customer(rng: random.Random, index: int) -> dict:
    first_name = rng.choice(FIRST_NAMES)
    last_name = rng.choice(LAST_NAMES)
    return {
        "first_name": first_name,
        "last_name": last_name,
        "email": f"{first_name}.{last_name}.{index}@mail.com".lower(),
        "phone": f"+1 ({rng.randint(200, 999)}) {rng.randint(200, 999)}-{rng.randint(1000, 9999)}",
    }


def sample_location(rng: random.Random, customer_id: int) -> dict:
    city, state = rng.choice(CITIES)
    return {
        "address": f"{rng.randint(1, 9999)} {rng.choice(STREETS)}",
        "city": city,
        "state": state,
        "zip": f"{rng.randint(10000, 99999)}-{rng.randint(1000, 9999)}",
        "customer_id": customer_id,
    }


async def seed(
    engine: AsyncEngine, customers: int = 10, locations: int = 10, seed_value: Optional[int] = None
) -> tuple[int, int]:
    """
    Insert ``customers`` customers and spread ``locations`` locations
    over them. Returns the number of rows created for each.
    """
    rng = random.Random(seed_value)
    await init_db(engine)

    sessionmaker = create_sessionmaker(engine)
    async with sessionmaker() as session:
        # Offset keeps emails unique across repeated runs.
        offset = random.Random().randint(0, 10**6)
        db_customers = [Customer(**sample_customer(rng, offset + i)) for i in range(customers)]
        session.add_all(db_customers)
        await session.flush()

        if db_customers:
            for _ in range(locations):
                owner = rng.choice(db_customers)
                session.add(Location(**sample_location(rng, owner.id)))
        await session.commit()

    created_locations = locations if db_customers else 0
    logger.info("Seeded %s customers and %s locations", len(db_customers), created_locations)
    return len(db_customers), created_locations


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Seed sample customers and locations.")
    parser.add_argument("--customers", type=int, default=10, help="Customers to create")
    parser.add_argument("--locations", type=int, default=10, help="Locations to create")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for repeatable data")
    return parser.parse_args()


async def _main(args: argparse.Namespace) -> None:
    settings = get_settings()
    engine = create_engine(settings.database_url, echo=settings.database_echo)
    try:
        await seed(engine, args.customers, args.locations, args.seed)
    finally:
        await engine.dispose()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    asyncio.run(_main(parse_args()))
