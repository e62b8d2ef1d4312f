from typing import Any

from pydantic import BaseModel, Field


class ReportRequest(BaseModel):
    report_type: str = Field(alias="reportType")
    org_code: str = Field(alias="orgCode")
    date_start: str = Field(alias="dateStart")
    date_end: str = Field(alias="dateEnd")
    # Only an exact "json" is meaningful; any other value means CSV.
    format: Any = None

    model_config = {"populate_by_name": True}


class ErrorResponse(BaseModel):
    error: str


class NoDataResponse(BaseModel):
    message: str = "No data found"


class HealthResponse(BaseModel):
    status: str
    environment: str
