"""DTO for structured upstream error bodies.

DashScope reports failures (in both protocol modes) as a JSON object carrying
an error ``code`` and a human-readable ``message``. Any body that does not
validate against this model is surfaced as a raw HTTP-status error instead.
"""

from __future__ import annotations

from pydantic import BaseModel


class ErrorBody(BaseModel):
    """Structured error payload returned with a non-success status.

    Attributes:
        code: Upstream error code (e.g. ``"InvalidApiKey"`` or ``"401"``).
        message: Upstream human-readable description.
    """

    code: str
    message: str


__all__ = ["ErrorBody"]
