"""FastAPI app factory."""

from __future__ import annotations

import logging

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from designlens.config import settings
from designlens.errors import DesignLensError

load_dotenv()

logging.basicConfig(
    level=getattr(logging, settings.designlens_log_level.upper(), logging.INFO),
    format="%(asctime)s %(name)s %(levelname)s %(message)s",
)

logger = logging.getLogger(__name__)


async def _handle_designlens_error(request: Request, exc: DesignLensError) -> JSONResponse:
    logger.info("%s %s -> %s: %s", request.method, request.url.path, exc.kind, exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


def create_app() -> FastAPI:
    app = FastAPI(
        title="DesignLens",
        description="Design selection → structured summary → LLM engineering feasibility assessment",
        version="0.1.0",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(DesignLensError, _handle_designlens_error)

    from designlens.api.router import api_router

    app.include_router(api_router)

    return app


app = create_app()
