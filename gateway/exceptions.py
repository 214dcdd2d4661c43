from sqlalchemy.exc import DBAPIError


class PoolsNotInitializedError(RuntimeError):
    def __init__(self):
        super().__init__("Database pools not initialized. Start the app through its lifespan first.")


def error_message(exc: BaseException) -> str:
    """Driver's own message for DBAPI errors, without SQLAlchemy's statement dump."""
    if isinstance(exc, DBAPIError) and exc.orig is not None:
        return str(exc.orig)
    return str(exc)
