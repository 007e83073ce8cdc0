"""
Main API router
"""
from fastapi import APIRouter

from legacy_audit.api.v1 import health, version, audits

api_router = APIRouter()

api_router.include_router(health.router, tags=["health"])
api_router.include_router(version.router, tags=["version"])
api_router.include_router(audits.router, prefix="/audits", tags=["audits"])
