from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from pydantic import BaseModel
import logging

from app.api.deps import get_profile_service
from app.errors import InvalidInputError
from app.middleware.auth import get_current_user_id
from app.models.user import UserProfile
from app.services.profile import ProfileService, validate_profile_picture

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/profile", tags=["profile"])


class UpdateNameRequest(BaseModel):
    name: str


class ProfileResponse(BaseModel):
    profile: UserProfile
    needs_name: bool


class PictureResponse(BaseModel):
    profile_picture_url: str
    message: str


@router.get("", response_model=ProfileResponse)
async def get_profile(
    user_id: str = Depends(get_current_user_id),
    service: ProfileService = Depends(get_profile_service),
):
    """Get the caller's profile, creating a blank one on first access"""
    profile = await service.ensure_profile(user_id)
    return {"profile": profile, "needs_name": not profile.has_name}


@router.patch("", response_model=ProfileResponse)
async def update_profile_name(
    request: UpdateNameRequest,
    user_id: str = Depends(get_current_user_id),
    service: ProfileService = Depends(get_profile_service),
):
    """Set the caller's display name"""
    try:
        profile = await service.update_name(user_id, request.name)
    except InvalidInputError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))

    return {"profile": profile, "needs_name": False}


@router.post("/picture", response_model=PictureResponse)
async def upload_profile_picture(
    file: UploadFile = File(...),
    user_id: str = Depends(get_current_user_id),
    service: ProfileService = Depends(get_profile_service),
):
    """Replace the caller's profile picture (image/*, at most 5MB)"""
    # Checked before reading the body when the client reports a size
    try:
        validate_profile_picture(file.content_type, file.size or 0)
    except InvalidInputError as e:
        raise HTTPException(status_code=400, detail=e.message)

    content = await file.read()

    try:
        current = await service.ensure_profile(user_id)
        url = await service.upload_profile_picture(
            user_id=user_id,
            file_name=file.filename or "upload",
            content=content,
            content_type=file.content_type,
            current_url=current.profile_picture_url,
        )
    except InvalidInputError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except Exception as e:
        logger.error(f"Error uploading profile picture for user {user_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to upload profile picture")

    return {"profile_picture_url": url, "message": "Profile picture updated successfully!"}
