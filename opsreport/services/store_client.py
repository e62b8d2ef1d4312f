"""Read-only client for the PostgREST interface in front of the report views.

The store owns the schema, access policies and aggregation views; this module
only issues one filtered ``select=*`` read per report request:

  GET {SUPABASE_URL}/rest/v1/{view}?select=*
      &organization_code=eq.{org}&date=gte.{start}&date=lte.{end}
"""

from __future__ import annotations

from typing import Protocol, Union

import httpx
import structlog

logger = structlog.get_logger()

Scalar = Union[str, int, float, bool, None]
ReportRow = dict[str, Scalar]

ORG_CODE_COLUMN = "organization_code"
DATE_COLUMN = "date"


class StoreQueryError(Exception):
    """The store rejected the read or could not be reached."""


class ReportStore(Protocol):
    async def fetch_rows(
        self,
        target: str,
        org_code: str,
        date_start: str,
        date_end: str,
    ) -> list[ReportRow]: ...


def build_query_params(org_code: str, date_start: str, date_end: str) -> list[tuple[str, str]]:
    """PostgREST filters for one organization over an inclusive date range."""
    return [
        ("select", "*"),
        (ORG_CODE_COLUMN, f"eq.{org_code}"),
        (DATE_COLUMN, f"gte.{date_start}"),
        (DATE_COLUMN, f"lte.{date_end}"),
    ]


def _error_message(resp: httpx.Response) -> str:
    """Pull the human-readable message out of a PostgREST error body."""
    try:
        body = resp.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    text = resp.text.strip()
    return text or resp.reason_phrase or f"Store returned HTTP {resp.status_code}"


class PostgrestReportStore:
    def __init__(self, base_url: str, service_key: str, timeout: float | None = None):
        self.base_url = (base_url or "").strip().rstrip("/")
        self.service_key = service_key or ""
        self.timeout = timeout

    def _headers(self) -> dict[str, str]:
        return {
            "apikey": self.service_key,
            "Authorization": f"Bearer {self.service_key}",
            "Accept": "application/json",
        }

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.timeout)

    async def fetch_rows(
        self,
        target: str,
        org_code: str,
        date_start: str,
        date_end: str,
    ) -> list[ReportRow]:
        if not self.base_url:
            raise StoreQueryError("Store URL is not configured")

        url = f"{self.base_url}/rest/v1/{target}"
        params = build_query_params(org_code, date_start, date_end)

        try:
            async with self._client() as client:
                resp = await client.get(url, headers=self._headers(), params=params)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            logger.warning("store.unreachable", target=target, error=str(exc))
            raise StoreQueryError(str(exc) or exc.__class__.__name__) from exc

        if resp.is_error:
            message = _error_message(resp)
            logger.warning(
                "store.query_failed",
                target=target,
                status_code=resp.status_code,
                error=message,
            )
            raise StoreQueryError(message)

        data = resp.json()
        if not isinstance(data, list):
            raise StoreQueryError("Unexpected store response shape")
        return data
