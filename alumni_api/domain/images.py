"""Image folders and public URLs for stored uploads."""
from __future__ import annotations

from enum import Enum

from alumni_api.core.utils import api_url


class ImageFolder(str, Enum):
    AVATARS = "avatars"
    POSTERS = "posters"
    NEWS_IMAGES = "newsImages"
    COMPANY_LOGOS = "companyLogos"


def image_url(folder: ImageFolder, filename: str | None, base: str | None = None) -> str | None:
    if not filename:
        return None
    return api_url("images", folder.value, filename, base=base)
