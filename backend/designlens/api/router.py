"""Master API router — mounts all endpoint routers."""

from __future__ import annotations

from fastapi import APIRouter

from designlens.api import extract, feasibility, health

api_router = APIRouter(prefix="/api")

api_router.include_router(health.router)
api_router.include_router(extract.router)
api_router.include_router(feasibility.router)
