from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from shared.utils.retry import retry_async
from src.api.errors import register_exception_handlers
from src.api.router import api_router
from src.core.config import settings
from src.core.logger import configure_logging, get_logger
from src.infrastructure.clickhouse.client import ClickHouseEventStore, create_client
from src.infrastructure.member.client import MemberServiceClient
from src.services.access_guard import AccessGuard
from src.services.analytics_service import AnalyticsService
from src.utils.concurrency import run_blocking

# Configure logging once and get service logger
configure_logging()
logger = get_logger("query.main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("query_service_starting")
    app.state.store = ClickHouseEventStore(await _init_clickhouse_with_retry())
    app.state.member_client = MemberServiceClient()
    await app.state.member_client.start()
    app.state.analytics = AnalyticsService(
        app.state.store,
        AccessGuard(
            app.state.member_client,
            timeout_seconds=settings.member_validation_timeout_seconds,
        ),
    )
    try:
        yield
    finally:
        logger.info("query_service_stopping")
        await app.state.member_client.close()
        app.state.store.close()


app = FastAPI(title="Insite Realtime Read API", version="0.1.0", lifespan=lifespan)
app.include_router(api_router)
register_exception_handlers(app)


async def _init_clickhouse_with_retry():
    async def _connect():
        return await run_blocking(create_client, settings)

    def _on_retry(attempt: int, exc: BaseException, sleep_for: float):
        logger.warning(
            "clickhouse_connect_retry",
            extra={
                "attempt": attempt,
                "error": str(exc),
                "sleep_for": round(sleep_for, 2),
            },
        )

    client = await retry_async(
        _connect,
        retries=settings.clickhouse_connect_retries,
        base_delay=settings.clickhouse_connect_base_delay,
        max_delay=settings.clickhouse_connect_max_delay,
        jitter=0.2,
        on_retry=_on_retry,
    )
    logger.info("clickhouse_connected")
    return client


@app.get("/metrics")
async def metrics():
    return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)
