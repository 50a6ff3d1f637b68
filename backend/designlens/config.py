"""Application configuration from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    anthropic_api_key: str = ""
    designlens_env: str = "development"
    designlens_log_level: str = "info"

    # CORS
    cors_origins: list[str] = ["http://localhost:3000"]

    # LLM endpoint
    analysis_model: str = "claude-3-5-sonnet-20241022"
    anthropic_version: str = "2023-06-01"
    max_output_tokens: int = 4000
    request_timeout_seconds: float = 120.0

    # Cost ceilings and pricing (USD per token)
    prompt_overhead_tokens: int = 2000
    max_image_attachments: int = 3
    input_token_cost: float = 0.000003
    output_token_cost: float = 0.000015

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
