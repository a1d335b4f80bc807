from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, model_validator


class DataRequest(BaseModel):
    """Body shared by the analytics read endpoints."""

    model_config = ConfigDict(populate_by_name=True)

    application_token: str = Field(
        ...,
        alias="applicationToken",
        min_length=1,
        description="Token of the application to read",
    )
    start_date: datetime | None = Field(
        None, alias="startDate", description="Inclusive lower bound, default all time"
    )
    end_date: datetime | None = Field(
        None, alias="endDate", description="Exclusive upper bound, default now"
    )

    @model_validator(mode="after")
    def check_range(self):
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValueError("endDate must not be before startDate")
        return self
