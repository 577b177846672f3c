#!/usr/bin/env python3
"""
Database management script.
Creates or drops the schema and seeds the default Abuja areas.
"""

import asyncio
import sys
import argparse
import logging
from pathlib import Path

from sqlalchemy.ext.asyncio import AsyncSession

# Add the app directory to the Python path
sys.path.insert(0, str(Path(__file__).parent))

from app.config import settings
from app.database import AsyncSessionLocal, create_tables, drop_tables, close_db_connection
import app.models  # noqa: F401  registers every table on Base.metadata
from app.models.area import Area
from app.repositories.area import AreaRepository
from app.utils.validators import generate_slug

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


DEFAULT_AREAS = [
    {
        "name": "Jabi",
        "description": "A fast-growing district known for upscale residences, shopping centres, and proximity "
                       "to the city centre. Popular with young professionals and families.",
        "image": "https://images.unsplash.com/photo-1545324418-cc1a3fa10c00?w=800&q=80",
    },
    {
        "name": "Lugbe",
        "description": "One of Abuja's most affordable satellite towns with rapid development. Great for "
                       "budget-conscious renters and first-time buyers.",
        "image": "https://images.unsplash.com/photo-1560518883-ce09059eeffa?w=800&q=80",
    },
    {
        "name": "Katampe",
        "description": "A prestigious hill-top neighbourhood offering serenity, views, and high-end properties. "
                       "Ideal for executives and diplomats.",
        "image": "https://images.unsplash.com/photo-1512917774080-9991f1c4c750?w=800&q=80",
    },
    {
        "name": "Maitama",
        "description": "Abuja's premier district, home to embassies, luxury estates, and top-tier amenities. "
                       "The gold standard of urban living.",
        "image": "https://images.unsplash.com/photo-1600596542815-ffad4c1539a9?w=800&q=80",
    },
    {
        "name": "Gwarinpa",
        "description": "Africa's largest housing estate, known for residential comfort, family-friendly layouts, "
                       "and vibrant community life.",
        "image": "https://images.unsplash.com/photo-1564013799919-ab600027ffc6?w=800&q=80",
    },
    {
        "name": "Wuse",
        "description": "A bustling commercial and residential hub at the heart of Abuja. Close to markets, "
                       "offices, and nightlife.",
        "image": "https://images.unsplash.com/photo-1477959858617-67f85cf4f1df?w=800&q=80",
    },
]


async def seed_areas(session: AsyncSession) -> int:
    """
    Insert the default areas that are not present yet.

    Areas are matched by slug, so running the seed twice is harmless.

    Returns:
        Number of areas created
    """
    repository = AreaRepository(session)
    created = 0

    for data in DEFAULT_AREAS:
        slug = generate_slug(data["name"])
        if await repository.get_by_slug(slug):
            logger.info(f"Area already exists: {data['name']}")
            continue

        session.add(Area(
            name=data["name"],
            slug=slug,
            description=data["description"],
            image=data["image"],
            images=[data["image"]]
        ))
        await session.commit()
        created += 1
        logger.info(f"Created area: {data['name']}")

    logger.info(f"Areas seeding completed ({created} created)")
    return created


async def run_seed() -> None:
    async with AsyncSessionLocal() as session:
        try:
            await seed_areas(session)
        except Exception:
            await session.rollback()
            raise


def main():
    """Command line entry point."""
    parser = argparse.ArgumentParser(description="Urban Listings database management")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("create-tables", help="Create all tables")

    drop_parser = subparsers.add_parser("drop-tables", help="Drop all tables (never in production)")
    drop_parser.add_argument("--confirm", action="store_true", help="Confirm dropping every table")

    subparsers.add_parser("seed-areas", help="Insert the default Abuja areas")

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        return

    async def run(coro):
        try:
            await coro
        finally:
            await close_db_connection()

    try:
        if args.command == "create-tables":
            asyncio.run(run(create_tables()))

        elif args.command == "drop-tables":
            if not args.confirm:
                print("Dropping tables requires --confirm flag")
                return
            asyncio.run(run(drop_tables()))

        elif args.command == "seed-areas":
            asyncio.run(run(run_seed()))

    except Exception as e:
        logger.error(f"Command failed ({settings.environment}): {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
