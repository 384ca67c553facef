from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Optional


@dataclass(frozen=True)
class UpstreamFailure:
    status_code: int
    error: str
    code: str


QUOTA_EXCEEDED = UpstreamFailure(429, "API quota exceeded. Please try again later.", "QUOTA_EXCEEDED")
RATE_LIMITED = UpstreamFailure(429, "Rate limit exceeded. Please try again later.", "RATE_LIMIT_EXCEEDED")
INVALID_API_KEY = UpstreamFailure(401, "Invalid API key", "INVALID_API_KEY")


def _status_of(exc: BaseException) -> Optional[int]:
    for attr in ("status_code", "code", "status"):
        value = getattr(exc, attr, None)
        if isinstance(value, int) and not isinstance(value, bool):
            return value
    response = getattr(exc, "response", None)
    value = getattr(response, "status_code", None)
    return value if isinstance(value, int) else None


def _markers(exc: BaseException) -> str:
    parts: Iterable[Any] = (
        type(exc).__name__,
        getattr(exc, "code", ""),
        getattr(exc, "status", ""),
        getattr(exc, "reason", ""),
        str(exc),
    )
    return " ".join(str(part) for part in parts if part).lower()


def classify_upstream_error(exc: BaseException) -> Optional[UpstreamFailure]:
    """Map a model client exception to the relay's public error codes.

    Returns ``None`` for errors that are not a quota, rate limit or
    credential problem; callers report those as internal errors.
    """
    status = _status_of(exc)
    text = _markers(exc)

    if "insufficient_quota" in text or "quota" in text:
        return QUOTA_EXCEEDED
    if status == 429 or "rate_limit" in text or "rate limit" in text or "resourceexhausted" in text \
            or "resource_exhausted" in text:
        return RATE_LIMITED
    if status in (401, 403) or "invalid_api_key" in text or "api key not valid" in text \
            or "api_key_invalid" in text or "unauthenticated" in text or "permissiondenied" in text:
        return INVALID_API_KEY
    return None
