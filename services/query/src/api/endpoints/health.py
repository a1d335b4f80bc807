from fastapi import APIRouter, Request, Response

from src.utils.concurrency import run_blocking

router = APIRouter()


@router.get("/healthz")
async def healthz(request: Request):
    try:
        ok = await run_blocking(request.app.state.store.ping)
    except Exception as e:
        return Response(status_code=503, content=str(e))
    if not ok:
        return Response(status_code=503, content="clickhouse ping failed")
    return {"status": "ok", "clickhouse": ok}
