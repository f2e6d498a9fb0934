from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import FileResponse

from alumni_api.domain.images import ImageFolder
from alumni_api.routers.deps import get_services
from alumni_api.services.registry import Services

router = APIRouter(prefix="/images", tags=["images"])


@router.get("/{folder}/{filename}")
def get_image(folder: ImageFolder, filename: str, services: Services = Depends(get_services)):
    return FileResponse(services.images.image_path(folder, filename))
