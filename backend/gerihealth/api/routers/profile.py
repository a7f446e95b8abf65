"""
Profile Router

Onboarding form and profile photo.
"""

import io
import logging
from typing import List

from fastapi import APIRouter, Depends, File, HTTPException, Response, UploadFile
from PIL import Image

from ..dependencies import get_profile_service
from ..schemas import ProfileCreate, ProfileResponse, ProfileUpdate
from ...application.services.profile_service import ProfileService


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/profile", tags=["Profile"])


def _photo_media_type(data: bytes) -> str:
    try:
        with Image.open(io.BytesIO(data)) as img:
            return Image.MIME.get(img.format, "application/octet-stream")
    except (OSError, ValueError):
        return "application/octet-stream"


@router.post("", response_model=ProfileResponse, status_code=201)
def create_profile(
    request: ProfileCreate,
    service: ProfileService = Depends(get_profile_service)
):
    profile = service.create(
        name=request.name,
        surname=request.surname,
        date_of_birth=request.date_of_birth,
        location=request.location
    )
    return ProfileResponse(**profile.to_dict())


@router.get("", response_model=List[ProfileResponse])
def list_profiles(service: ProfileService = Depends(get_profile_service)):
    return [ProfileResponse(**p.to_dict()) for p in service.list()]


@router.get("/current", response_model=ProfileResponse)
def current_profile(service: ProfileService = Depends(get_profile_service)):
    """The onboarded user's profile."""
    profile = service.get_current()
    if profile is None:
        raise HTTPException(status_code=404, detail="No profile yet")
    return ProfileResponse(**profile.to_dict())


@router.get("/{profile_id}", response_model=ProfileResponse)
def get_profile(profile_id: int, service: ProfileService = Depends(get_profile_service)):
    return ProfileResponse(**service.get(profile_id).to_dict())


@router.patch("/{profile_id}", response_model=ProfileResponse)
def update_profile(
    profile_id: int,
    request: ProfileUpdate,
    service: ProfileService = Depends(get_profile_service)
):
    profile = service.update(profile_id, **request.model_dump(exclude_none=True))
    return ProfileResponse(**profile.to_dict())


@router.delete("/{profile_id}", status_code=204)
def delete_profile(profile_id: int, service: ProfileService = Depends(get_profile_service)):
    service.delete(profile_id)
    return Response(status_code=204)


@router.put("/{profile_id}/photo", response_model=ProfileResponse)
async def upload_photo(
    profile_id: int,
    file: UploadFile = File(...),
    service: ProfileService = Depends(get_profile_service)
):
    data = await file.read()
    if not data:
        raise HTTPException(status_code=400, detail="Empty file")
    profile = service.set_photo(profile_id, data)
    return ProfileResponse(**profile.to_dict())


@router.get("/{profile_id}/photo")
def get_photo(profile_id: int, service: ProfileService = Depends(get_profile_service)):
    data = service.get_photo(profile_id)
    return Response(content=data, media_type=_photo_media_type(data))
