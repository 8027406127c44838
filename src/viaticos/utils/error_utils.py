"""Classify provider exceptions by status code or message.

Provider SDKs raise different exception types across versions, so checks look
at an HTTP-like ``code``/``status_code`` attribute first and fall back to the
message text.
"""

import re

_QUOTA_CODE_RE = re.compile(r"\b429\b")


def _status_code(exc: Exception) -> int | None:
    for attr in ("status_code", "code"):
        value = getattr(exc, attr, None)
        if isinstance(value, int):
            return value
        value = getattr(value, "value", None)  # grpc/http enums
        if isinstance(value, int):
            return value
    return None


def _message(exc: Exception) -> str:
    return f"{type(exc).__name__} {exc}".lower()


def is_invalid_api_key_error(exc: Exception) -> bool:
    """Return True if the provider rejected the credential itself."""
    msg = _message(exc)
    return (
        "api key not valid" in msg
        or "api_key_invalid" in msg
        or "invalid api key" in msg
        or "unauthenticated" in msg
        or _status_code(exc) == 401
    )


def is_permission_error(exc: Exception) -> bool:
    """Return True if the exception is a permission denial (e.g. HTTP 403)."""
    msg = _message(exc)
    return "permission" in msg or "forbidden" in msg or _status_code(exc) == 403


def is_quota_error(exc: Exception) -> bool:
    """Return True if the exception appears to be a quota or rate limit (e.g. HTTP 429)."""
    msg = _message(exc)
    return (
        "quota" in msg
        or "resource_exhausted" in msg
        or "resourceexhausted" in msg
        or "rate limit" in msg
        or _QUOTA_CODE_RE.search(msg) is not None
        or _status_code(exc) == 429
    )
