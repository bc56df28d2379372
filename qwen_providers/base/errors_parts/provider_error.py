"""
Structured adapter error exception type.

Wraps transport, protocol and decode failures with a normalized `ErrorCode`
so callers can branch on the kind of failure without parsing messages.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .error_code import ErrorCode


@dataclass
class ProviderError(Exception):
    """Represents a structured adapter error with a normalized error code.

    Attributes:
        code: Normalized :class:`ErrorCode` classification for the failure.
        message: Human-readable error message suitable for logging.
        provider: Provider key where the error originated (``"qwen"``).
        model: Optional model name associated with the failure.
        upstream_code: Error code reported by the API body, when structured.
        status_code: HTTP status for ``HTTP_STATUS``/``API`` errors.
        body: Raw response body text for unstructured HTTP errors.
        raw: Optional original exception for diagnostics.
    """

    code: ErrorCode
    message: str
    provider: str = "qwen"
    model: Optional[str] = None
    upstream_code: Optional[str] = None
    status_code: Optional[int] = None
    body: Optional[str] = None
    raw: Optional[BaseException] = None

    def __post_init__(self) -> None:
        super().__init__(self.message)

    def __str__(self) -> str:  # pragma: no cover - trivial
        """Return a compact string combining provider, model, code, and message."""
        upstream = f" [{self.upstream_code}]" if self.upstream_code else ""
        return f"{self.provider}:{self.model or '-'} {self.code.value}{upstream}: {self.message}"

    @property
    def cancelled(self) -> bool:
        """Whether the failure was a caller-initiated abort or timeout."""
        return self.code is ErrorCode.CANCELLED


__all__ = ["ProviderError"]
