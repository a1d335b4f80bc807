from fastapi import Request

from src.services.analytics_service import AnalyticsService


def get_analytics_service(request: Request) -> AnalyticsService:
    return request.app.state.analytics  # type: ignore[return-value]
