from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from src.domain.errors import NoDataError, QueryError, StoreUnavailable


async def no_data_handler(request: Request, exc: NoDataError):
    return JSONResponse(
        status_code=404,
        content={"error": "no_data", "operation": exc.operation},
    )


async def store_unavailable_handler(request: Request, exc: StoreUnavailable):
    return JSONResponse(status_code=503, content={"error": "store_unavailable"})


async def query_error_handler(request: Request, exc: QueryError):
    return JSONResponse(status_code=502, content={"error": "query_error"})


def register_exception_handlers(app: FastAPI):
    app.add_exception_handler(NoDataError, no_data_handler)
    # Starlette resolves handlers along the MRO, subclass first
    app.add_exception_handler(StoreUnavailable, store_unavailable_handler)
    app.add_exception_handler(QueryError, query_error_handler)
