from fastapi import APIRouter, Depends, Header

from src.api.dependencies import get_analytics_service
from src.domain.models import (
    AbnormalResult,
    PageDistributionResult,
    ReferrerResult,
    ResponseTimeResult,
)
from src.schemas.data_request import DataRequest
from src.services.analytics_service import AnalyticsService

router = APIRouter(prefix="/data", tags=["data"])


@router.post(
    "/response-time",
    response_model=ResponseTimeResult,
    response_model_by_alias=True,
    summary="Average response time (ms)",
)
async def response_time(
    body: DataRequest,
    member_id: int = Header(..., alias="memberId"),
    svc: AnalyticsService = Depends(get_analytics_service),
):
    return await svc.response_time(
        member_id, body.application_token, body.start_date, body.end_date
    )


@router.post(
    "/referrers",
    response_model=ReferrerResult,
    response_model_by_alias=True,
    summary="Share of traffic per referring URL",
)
async def referrers(
    body: DataRequest,
    member_id: int = Header(..., alias="memberId"),
    svc: AnalyticsService = Depends(get_analytics_service),
):
    return await svc.referrer_distribution(
        member_id, body.application_token, body.start_date, body.end_date
    )


@router.post(
    "/pages",
    response_model=PageDistributionResult,
    response_model_by_alias=True,
    summary="User count per current page",
)
async def pages(
    body: DataRequest,
    member_id: int = Header(..., alias="memberId"),
    svc: AnalyticsService = Depends(get_analytics_service),
):
    return await svc.page_distribution(
        member_id, body.application_token, body.start_date, body.end_date
    )


@router.post(
    "/abnormal",
    response_model=AbnormalResult,
    response_model_by_alias=True,
    summary="Whether the latest session marker is abnormal",
)
async def abnormal(
    body: DataRequest,
    member_id: int = Header(..., alias="memberId"),
    svc: AnalyticsService = Depends(get_analytics_service),
):
    return await svc.abnormal_flag(
        member_id, body.application_token, body.start_date, body.end_date
    )
