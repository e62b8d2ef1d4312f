from opsreport.core.config import settings
from opsreport.services.store_client import PostgrestReportStore, ReportStore


def get_report_store() -> ReportStore:
    """Fresh store handle per request; tests swap it via ``dependency_overrides``."""
    return PostgrestReportStore(
        base_url=settings.SUPABASE_URL,
        service_key=settings.SUPABASE_SERVICE_ROLE_KEY,
        timeout=settings.STORE_TIMEOUT_SECONDS,
    )
