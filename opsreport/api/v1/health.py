from fastapi import APIRouter

from opsreport.core.config import settings
from opsreport.schemas.report import HealthResponse

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health_check():
    return HealthResponse(status="ok", environment=settings.APP_ENV)
