"""Helpers for multipart form fields that carry JSON lists."""
from __future__ import annotations

import json
from typing import Optional

from alumni_api.core.errors import VALIDATION_ERROR, ApiError


def parse_json_list(raw: Optional[str], field: str, keys: tuple[str, ...]) -> Optional[list[dict]]:
    """
    Decode a form field holding a JSON array of objects, keeping only `keys`.
    Returns None when the field was not sent.
    """
    if raw is None:
        return None
    try:
        value = json.loads(raw) if raw.strip() else []
    except json.JSONDecodeError:
        raise ApiError.bad_request(VALIDATION_ERROR, [{"field": field, "msg": "Must be a JSON array"}])
    if not isinstance(value, list) or not all(isinstance(item, dict) for item in value):
        raise ApiError.bad_request(VALIDATION_ERROR, [{"field": field, "msg": "Must be a JSON array of objects"}])
    return [{key: str(item.get(key) or "") for key in keys} for item in value]
