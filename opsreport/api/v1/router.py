from fastapi import APIRouter

from opsreport.api.v1 import health, reports

api_router = APIRouter(prefix="/api/v1")

api_router.include_router(reports.router)
api_router.include_router(health.router)
