"""
Test fixtures for the report export API.

The store is replaced by an in-memory fake injected through
``dependency_overrides``, so no network access is needed.
"""

from dataclasses import dataclass, field

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from opsreport.core.dependencies import get_report_store
from opsreport.main import create_app
from opsreport.services.store_client import StoreQueryError


@dataclass
class FakeReportStore:
    """Returns canned rows and records every read it receives."""

    rows: list[dict] = field(default_factory=list)
    error: str | None = None
    calls: list[dict] = field(default_factory=list)

    async def fetch_rows(self, target, org_code, date_start, date_end):
        self.calls.append(
            {
                "target": target,
                "org_code": org_code,
                "date_start": date_start,
                "date_end": date_end,
            }
        )
        if self.error is not None:
            raise StoreQueryError(self.error)
        return [dict(row) for row in self.rows]


@pytest.fixture
def store() -> FakeReportStore:
    return FakeReportStore()


@pytest.fixture
def app(store: FakeReportStore):
    application = create_app()
    application.dependency_overrides[get_report_store] = lambda: store
    return application


@pytest_asyncio.fixture
async def client(app) -> AsyncClient:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


def make_report_body(**overrides) -> dict:
    body = {
        "reportType": "daily_worker_summary",
        "orgCode": "ORG1",
        "dateStart": "2024-01-01",
        "dateEnd": "2024-01-31",
    }
    body.update(overrides)
    return body
