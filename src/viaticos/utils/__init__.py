"""Shared utilities."""

from .date_utils import is_iso_date, normalize_date
from .error_utils import is_invalid_api_key_error, is_permission_error, is_quota_error
from .json_utils import parse_json_from_text

__all__ = [
    "is_iso_date",
    "normalize_date",
    "is_invalid_api_key_error",
    "is_permission_error",
    "is_quota_error",
    "parse_json_from_text",
]
