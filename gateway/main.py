from contextlib import asynccontextmanager
from typing import Optional
import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from gateway.config import Settings, get_settings
from gateway.database import DatabasePools
from gateway.middleware.cors_headers import CorsHeadersMiddleware
from gateway.routers import api
from gateway.schemas.envelope import ErrorResponse, NotFoundResponse
from gateway.utils.logger import configure_logging, get_logger

logger = get_logger(__name__)


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Unknown paths and known paths with the wrong method both answer 404; other statuses keep theirs."""
    if exc.status_code in (404, 405):
        return JSONResponse(status_code=404, content=NotFoundResponse().model_dump())
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(error=str(exc.detail)).model_dump(),
    )


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Startup: build both role pools; a verification failure aborts startup
        pools = DatabasePools.create(settings)
        if settings.verify_on_startup:
            await pools.verify()
        app.state.pools = pools
        yield
        # Shutdown
        app.state.pools = None
        await pools.dispose()

    app = FastAPI(
        title="Patient SQL Gateway",
        description="Seeds the patient table and runs ad-hoc SQL under a restricted role",
        version="1.0.0",
        lifespan=lifespan,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
        redirect_slashes=False,
    )

    app.add_middleware(CorsHeadersMiddleware, allowed_origin=settings.allowed_origin)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)

    app.include_router(api.router, prefix="/api/v1", tags=["Patients"])
    return app


def main() -> None:
    settings = get_settings()
    configure_logging(settings.log_level)
    logger.info("Server running on http://localhost:%s", settings.port)
    uvicorn.run(create_app(settings), host="0.0.0.0", port=settings.port, log_config=None)


if __name__ == "__main__":
    main()
