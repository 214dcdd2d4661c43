"""
Initialize the database: create the patient table through the admin role.
Run with: python -m scripts.init_db
"""

import asyncio
from gateway.config import get_settings
from gateway.database import ADMIN, DatabasePools
from gateway.services.seed_service import seed_service


async def init():
    print("Creating patient table...")
    pools = DatabasePools.create(get_settings())
    try:
        await seed_service.create_schema(pools.pool(ADMIN))
    finally:
        await pools.dispose()
    print("Patient table created successfully.")


if __name__ == "__main__":
    asyncio.run(init())
