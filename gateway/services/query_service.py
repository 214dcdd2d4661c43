from urllib.parse import unquote
from sqlalchemy.exc import SQLAlchemyError
from gateway.database import RolePool, execute_raw
from gateway.exceptions import error_message
from gateway.schemas.envelope import QueryFailure, QueryResult, QuerySuccess
from gateway.utils.logger import get_logger

logger = get_logger(__name__)

SQL_SEGMENT = "/sql/"


def extract_sql(path: str) -> str:
    """
    Decode the SQL text that follows the first `/sql/` in a still-encoded path.

    Decoding is strict UTF-8, so a malformed escape sequence raises
    UnicodeDecodeError. `+` stays a literal plus.
    """
    _, found, remainder = path.partition(SQL_SEGMENT)
    if not found:
        raise ValueError(f"Path has no {SQL_SEGMENT} segment: {path}")
    return unquote(remainder, errors="strict")


class QueryService:
    async def run_query(self, guest: RolePool, sql_text: str) -> QueryResult:
        # Checkout failures propagate; only the statement itself is reported in the envelope.
        async with guest.connection() as conn:
            try:
                rows = await execute_raw(conn, sql_text)
            except SQLAlchemyError as e:
                message = error_message(e)
                logger.info("Guest query failed: %s", message)
                return QueryFailure(error=message)

        return QuerySuccess(data=rows, rowCount=len(rows))


query_service = QueryService()
