from urllib.parse import quote
from fastapi import APIRouter, Depends, Request
from gateway.database import ADMIN, GUEST, DatabasePools, get_pools
from gateway.schemas.envelope import InsertResult, QueryResult
from gateway.services.query_service import extract_sql, query_service
from gateway.services.seed_service import seed_service

router = APIRouter()


def _raw_path(request: Request) -> str:
    """Request path as sent on the wire, before the server decoded it."""
    raw = request.scope.get("raw_path")
    if raw is None:
        return quote(request.scope["path"])
    return raw.split(b"?", 1)[0].decode("latin-1")


@router.post("/insert", response_model=InsertResult)
async def insert_rows(pools: DatabasePools = Depends(get_pools)):
    return await seed_service.insert_seed_data(pools.pool(ADMIN))


@router.get("/sql/{sql_text:path}", response_model=QueryResult)
async def run_sql(request: Request, pools: DatabasePools = Depends(get_pools)):
    # The path parameter is already decoded by the server; decode the raw path ourselves.
    sql_text = extract_sql(_raw_path(request))
    return await query_service.run_query(pools.pool(GUEST), sql_text)
