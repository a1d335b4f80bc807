from typing import List

from pydantic import BaseModel, ConfigDict, Field


class ResultModel(BaseModel):
    """Immutable response DTO serialised with camelCase aliases."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)


class ResponseTimeResult(ResultModel):
    average_response_time: float = Field(alias="averageResponseTime")


class DistributionEntry(ResultModel):
    """Share of one key (a URL) in a distribution."""

    key: str
    count: int = Field(ge=0)
    ratio: float = Field(ge=0.0, le=1.0)


class ReferrerResult(ResultModel):
    referrers: List[DistributionEntry]


class PageDistributionResult(ResultModel):
    pages: List[DistributionEntry]


class AbnormalResult(ResultModel):
    abnormal: bool
