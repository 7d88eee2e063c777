"""API router composition.

All REST endpoints live under `/api/v1/*`.
"""

from fastapi import APIRouter

from vault_status.api.routes.status import router as status_router


api_router = APIRouter()

api_router.include_router(status_router, tags=["status"])
