from typing import Annotated

import structlog
from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, Response
from pydantic import ValidationError

from opsreport.core.dependencies import get_report_store
from opsreport.schemas.report import ErrorResponse, NoDataResponse, ReportRequest
from opsreport.services.report_service import (
    export_json_rows,
    fetch_report_rows,
    render_csv,
    report_filename,
    resolve_query_target,
    wants_json,
)
from opsreport.services.store_client import ReportStore

logger = structlog.get_logger()

router = APIRouter(tags=["reports"])

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
}


def _json_response(content, status_code: int) -> JSONResponse:
    return JSONResponse(content=content, status_code=status_code, headers=CORS_HEADERS)


def _error_message(exc: Exception) -> str:
    if isinstance(exc, ValidationError):
        return "; ".join(
            f"{'.'.join(str(part) for part in err['loc']) or 'body'}: {err['msg']}"
            for err in exc.errors()
        )
    return str(exc) or exc.__class__.__name__


async def _read_payload(request: Request) -> dict:
    payload = await request.json()
    if not isinstance(payload, dict):
        raise ValueError("Request body must be a JSON object")
    return payload


@router.options("/generate-report")
async def generate_report_preflight() -> Response:
    return Response(content="ok", status_code=200, headers=CORS_HEADERS)


@router.api_route("/generate-report", methods=["POST", "GET", "PUT", "PATCH", "DELETE"])
async def generate_report(
    request: Request,
    store: Annotated[ReportStore, Depends(get_report_store)],
) -> Response:
    try:
        payload = await _read_payload(request)
        target = resolve_query_target(payload.get("reportType"))
        body = ReportRequest.model_validate(payload)

        rows = await fetch_report_rows(store, target, body.org_code, body.date_start, body.date_end)
        if not rows:
            logger.info("report.no_data", report_type=body.report_type, target=target)
            return _json_response(NoDataResponse().model_dump(), status_code=404)

        if wants_json(body.format):
            logger.info("report.generated", report_type=body.report_type, format="json", rows=len(rows))
            return _json_response(export_json_rows(rows), status_code=200)

        filename = report_filename(body.report_type, body.date_start, body.date_end)
        logger.info("report.generated", report_type=body.report_type, format="csv", rows=len(rows))
        return Response(
            content=render_csv(rows),
            status_code=200,
            headers={
                **CORS_HEADERS,
                "Content-Type": "text/csv",
                "Content-Disposition": f'attachment; filename="{filename}"',
            },
        )
    except Exception as exc:
        message = _error_message(exc)
        logger.warning("report.failed", error=message, error_type=exc.__class__.__name__)
        return _json_response(ErrorResponse(error=message).model_dump(), status_code=400)
