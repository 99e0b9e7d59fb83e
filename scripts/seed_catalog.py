"""
Seed script to populate default permissions and roles.

Creates the tables when missing, then inserts the default permissions,
system roles and their permission links. Re-running changes nothing.

Usage:
    python -m scripts.seed_catalog
"""

import asyncio
import logging

from config import ApplicationConfig
from tenant_access.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from tenant_access.app.use_cases.bootstrap import SeedCatalogUseCase
from tenant_access.depends import AsyncSessionLocal, init_db

logger = logging.getLogger(__name__)


async def main():
    logging.basicConfig(level=ApplicationConfig.LOG_LEVEL)

    logger.info("Initializing database tables...")
    await init_db()

    async with AsyncSessionLocal() as session:
        result = await SeedCatalogUseCase(SqlAlchemyUnitOfWork(session)).execute()

    if result.is_err():
        logger.error("Catalog seeding failed: %s", result.error.message)
        raise SystemExit(1)

    seeded = result.value
    logger.info(
        "Catalog seeded: %d permissions, %d roles, %d links created",
        seeded.permissions_created,
        seeded.roles_created,
        seeded.links_created,
    )


if __name__ == "__main__":
    asyncio.run(main())
