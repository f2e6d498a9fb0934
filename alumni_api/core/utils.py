"""URL helpers rooted at the public API_URL."""
from __future__ import annotations

from typing import Optional
from urllib.parse import quote

from .config import get_settings

API_PREFIX = "/api"


def api_url(*segments: str, base: Optional[str] = None) -> str:
    """
    Absolute URL of `/api/<segments...>` on the public API host.
    Each segment is percent-quoted, so user-supplied filenames cannot add path levels.
    """
    root = (base if base is not None else get_settings().api_url).rstrip("/")
    path = "/".join(quote(str(segment).strip("/"), safe="") for segment in segments if segment)
    return f"{root}{API_PREFIX}/{path}" if path else f"{root}{API_PREFIX}"
