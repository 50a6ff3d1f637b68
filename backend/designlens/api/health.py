"""Health check + meta endpoints."""

from __future__ import annotations

from fastapi import APIRouter

from designlens.llm.client import is_valid_api_key
from designlens.llm.prompts import PROMPT_VERSION
from designlens.models.requests import CredentialCheckRequest
from designlens.models.responses import CredentialCheckResponse, HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    return HealthResponse(status="ok", version="0.1.0", prompt_version=PROMPT_VERSION)


@router.get("/prompts")
async def prompts() -> dict[str, str]:
    from designlens.llm.prompts import get_all_templates

    return get_all_templates()


@router.post("/credentials/check", response_model=CredentialCheckResponse)
async def check_credential(req: CredentialCheckRequest) -> CredentialCheckResponse:
    return CredentialCheckResponse(valid=is_valid_api_key(req.api_key))
