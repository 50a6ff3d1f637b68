"""LangChain ChatAnthropic wrapper for single-shot feasibility requests."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from designlens.config import Settings, settings as default_settings
from designlens.errors import InvalidCredentialError, NetworkError

logger = logging.getLogger(__name__)

_KEY_PREFIX = "sk-ant-"
_KEY_MIN_LENGTH = 21


def is_valid_api_key(api_key: str | None) -> bool:
    return bool(api_key) and api_key.startswith(_KEY_PREFIX) and len(api_key) >= _KEY_MIN_LENGTH


def resolve_api_key(api_key: str | None, config: Settings | None = None) -> str:
    """Request key first, then the configured one. Raises before any network use."""
    config = config or default_settings
    key = api_key or config.anthropic_api_key
    if not is_valid_api_key(key):
        raise InvalidCredentialError()
    return key


def _response_text(content: Any) -> str:
    if isinstance(content, str):
        return content
    parts = []
    for block in content or []:
        if isinstance(block, dict) and block.get("type") == "text":
            parts.append(block.get("text", ""))
        elif isinstance(block, str):
            parts.append(block)
    return "".join(parts)


async def request_analysis(
    blocks: list[dict[str, Any]],
    api_key: str,
    config: Settings | None = None,
) -> str:
    """POST one user message to the messages API and return the reply text.

    No retries. A timeout, transport failure or non-2xx status becomes a
    NetworkError. Cancelling the awaiting task stops waiting; the remote
    call is not guaranteed to stop.
    """
    config = config or default_settings
    key = resolve_api_key(api_key, config)

    import anthropic
    from langchain_anthropic import ChatAnthropic
    from langchain_core.messages import HumanMessage

    llm = ChatAnthropic(
        model=config.analysis_model,
        api_key=key,
        max_tokens=config.max_output_tokens,
        max_retries=0,
        default_request_timeout=config.request_timeout_seconds,
        default_headers={"anthropic-version": config.anthropic_version},
    )

    logger.info("Requesting analysis from %s (%d content blocks)", config.analysis_model, len(blocks))
    try:
        response = await asyncio.wait_for(
            llm.ainvoke([HumanMessage(content=blocks)]),
            timeout=config.request_timeout_seconds,
        )
    except asyncio.TimeoutError as e:
        raise NetworkError(None, f"timed out after {config.request_timeout_seconds:.0f}s") from e
    except anthropic.APIStatusError as e:
        reason = getattr(e.response, "reason_phrase", "") or e.message
        logger.warning("LLM request failed: %s %s", e.status_code, reason)
        raise NetworkError(e.status_code, reason) from e
    except anthropic.APITimeoutError as e:
        raise NetworkError(None, "request timed out") from e
    except anthropic.APIConnectionError as e:
        logger.warning("LLM connection failed: %s", e)
        raise NetworkError(None, str(e) or "connection error") from e

    return _response_text(response.content)
