"""
Seed initializer: ensures the patient table exists and appends the fixed
sample rows through the admin pool.
"""

from datetime import date
from sqlalchemy import insert
from sqlalchemy.ext.asyncio import AsyncConnection
from gateway.database import Base, RolePool
from gateway.models.patient import Patient
from gateway.schemas.envelope import InsertResult
from gateway.utils.logger import get_logger

logger = get_logger(__name__)


SEED_PATIENTS = [
    {"name": "Sara Brown", "dateOfBirth": date(1901, 1, 1)},
    {"name": "John Smith", "dateOfBirth": date(1941, 1, 1)},
    {"name": "Jack Ma", "dateOfBirth": date(1961, 1, 30)},
    {"name": "Elon Musk", "dateOfBirth": date(1999, 1, 1)},
]


async def _create_patient_table(conn: AsyncConnection) -> None:
    await conn.run_sync(Base.metadata.create_all, tables=[Patient.__table__], checkfirst=True)


class SeedService:
    async def create_schema(self, admin: RolePool) -> None:
        """Create the patient table if absent. Idempotent."""
        async with admin.transaction() as conn:
            await _create_patient_table(conn)
        logger.info("Patient table ready.")

    async def insert_seed_data(self, admin: RolePool) -> InsertResult:
        """
        Append every seed patient, in order, on a single admin connection.

        Rows are not deduplicated, so each call grows the table by
        len(SEED_PATIENTS). Errors are left to propagate; the transaction
        rolls back and the remaining inserts are skipped.
        """
        async with admin.transaction() as conn:
            await _create_patient_table(conn)
            for patient in SEED_PATIENTS:
                await conn.execute(insert(Patient).values(**patient))

        logger.info("Inserted %d seed patients", len(SEED_PATIENTS))
        return InsertResult(rowsInserted=len(SEED_PATIENTS))


seed_service = SeedService()
