#!/usr/bin/env python3
"""
Database management script.
Creates, drops, resets and seeds the tables of the configured database.
"""

import asyncio
import argparse
import logging
from decimal import Decimal

from sqlalchemy import select, func

from rental_manager.config import settings
from rental_manager.database import AsyncSessionLocal, create_tables, drop_tables, close_db_connection
from rental_manager.models.property import Property
from rental_manager.models.room import RoomType
from rental_manager.models.lead import LeadSource
from rental_manager.schemas.property import PropertyCreate
from rental_manager.schemas.room import RoomCreate
from rental_manager.schemas.lead import LeadCreate
from rental_manager.services.property import PropertyService
from rental_manager.services.room import RoomService
from rental_manager.services.lead import LeadService

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


class MigrationManager:
    """Manages the database schema and sample data."""

    async def create(self) -> None:
        logger.info(f"Creating tables on {self._safe_url()}")
        await create_tables()

    async def drop(self) -> None:
        logger.warning(f"Dropping tables on {self._safe_url()}")
        await drop_tables()

    async def seed_database(self) -> None:
        """Seed the database with a sample property, rooms and a lead."""
        logger.info("Seeding database with sample data")

        async with AsyncSessionLocal() as session:
            result = await session.execute(select(func.count(Property.id)))
            if result.scalar():
                logger.info("Properties already exist, skipping seed")
                return

            property_obj = await PropertyService(session).create_property(
                PropertyCreate(name="Sunset", address="1 Main St", description="Sample property")
            )

            room_service = RoomService(session)
            first_room = await room_service.create_room(
                RoomCreate(
                    property_id=property_obj.id,
                    room_number="101",
                    room_type=RoomType.PRIVATE_BATH,
                    rent=Decimal("500")
                )
            )
            await room_service.create_room(
                RoomCreate(
                    property_id=property_obj.id,
                    room_number="102",
                    room_type=RoomType.SHARED_BATH,
                    rent=Decimal("400")
                )
            )

            await LeadService(session).create_lead(
                LeadCreate(
                    name="Alice",
                    contact_number="555-1111",
                    source=LeadSource.WHATSAPP,
                    property_id=property_obj.id,
                    room_id=first_room.id
                )
            )

        logger.info("Database seeded successfully")

    async def reset_database(self) -> None:
        """Reset the database by dropping and recreating all tables."""
        logger.warning("Resetting database - all data will be lost!")

        if not settings.is_development and not settings.is_testing:
            raise RuntimeError("Database reset is only allowed in development or test mode")

        await drop_tables()
        await create_tables()
        await self.seed_database()

        logger.info("Database reset completed")

    @staticmethod
    def _safe_url() -> str:
        url = settings.database_url
        return url.split("@")[1] if "@" in url else url


async def _run(manager: MigrationManager, command: str) -> None:
    try:
        if command == "create":
            await manager.create()
        elif command == "drop":
            await manager.drop()
        elif command == "seed":
            await manager.seed_database()
        elif command == "reset":
            await manager.reset_database()
    finally:
        await close_db_connection()


def main():
    """Main CLI interface for database management."""
    parser = argparse.ArgumentParser(description="Database management for the Rental Manager API")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("create", help="Create all tables")

    drop_parser = subparsers.add_parser("drop", help="Drop all tables")
    drop_parser.add_argument("--confirm", action="store_true", help="Confirm dropping tables")

    subparsers.add_parser("seed", help="Seed database with sample data")

    reset_parser = subparsers.add_parser("reset", help="Drop, recreate and seed (development only)")
    reset_parser.add_argument("--confirm", action="store_true", help="Confirm database reset")

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        return

    if args.command in ("drop", "reset") and not args.confirm:
        print(f"Database {args.command} requires --confirm flag")
        return

    try:
        asyncio.run(_run(MigrationManager(), args.command))
    except Exception as e:
        logger.error(f"Command '{args.command}' failed: {e}")
        raise SystemExit(1)


if __name__ == "__main__":
    main()
