"""Error taxonomy for the analysis flow.

Every failure that reaches the caller is one of these kinds. Each carries a
stable ``kind`` tag, a user-displayable message and the HTTP status the API
layer answers with.
"""

from __future__ import annotations

from typing import Any


class DesignLensError(Exception):
    kind = "analysis_error"
    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def details(self) -> dict[str, Any]:
        return {}

    def to_dict(self) -> dict[str, Any]:
        return {"error": self.kind, "message": self.message, **self.details()}


class NoSelectionError(DesignLensError):
    kind = "no_selection"
    status_code = 400

    def __init__(self, message: str = "No design elements selected") -> None:
        super().__init__(message)


class DocumentError(DesignLensError):
    """The host snapshot is not a usable scene graph."""

    kind = "invalid_document"
    status_code = 400


class ExtractionError(DesignLensError):
    kind = "extraction_failed"
    status_code = 422

    def __init__(self, node_id: str | None, message: str) -> None:
        super().__init__(f"Extraction failed at node {node_id}: {message}")
        self.node_id = node_id

    def details(self) -> dict[str, Any]:
        return {"node_id": self.node_id}


class InvalidCredentialError(DesignLensError):
    kind = "invalid_credential"
    status_code = 401

    def __init__(self, message: str = "API key must start with 'sk-ant-' and be longer than 20 characters") -> None:
        super().__init__(message)


class NetworkError(DesignLensError):
    kind = "network_error"
    status_code = 502

    def __init__(self, status: int | None, reason: str) -> None:
        label = f"{status} {reason}" if status is not None else reason
        super().__init__(f"LLM API error: {label}")
        self.status = status
        self.reason = reason

    def details(self) -> dict[str, Any]:
        return {"status": self.status, "reason": self.reason}


class NoStructuredContentError(DesignLensError):
    kind = "no_structured_content"
    status_code = 502

    def __init__(self, message: str = "No valid JSON found in LLM response") -> None:
        super().__init__(message)


class MalformedResponseError(DesignLensError):
    kind = "malformed_response"
    status_code = 502

    def __init__(self, message: str = "Invalid response format from LLM API") -> None:
        super().__init__(message)
