"""FastAPI dependency injection."""

from __future__ import annotations

from fastapi import Depends

from designlens.config import Settings, settings
from designlens.engine.pipeline import AnalysisPipeline


def get_settings() -> Settings:
    return settings


def get_pipeline(config: Settings = Depends(get_settings)) -> AnalysisPipeline:
    return AnalysisPipeline(config)
