"""
Profile APIs.

POST /register: store the profile of a user who signed up with the frontend's
identity provider.
PUT /edit-profile/{uid}: update name and email of that profile.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from taskboard.api.dependencies import get_user_service
from taskboard.models.user import EditProfileRequest, RegisterRequest
from taskboard.services.user_service import UserService

router = APIRouter()

UserServiceDep = Annotated[UserService, Depends(get_user_service)]


@router.post(
    "/register",
    status_code=status.HTTP_201_CREATED,
    response_model=dict,
    summary="Register a user profile",
)
async def register(payload: RegisterRequest, service: UserServiceDep) -> dict:
    user = await service.register_user(payload.uid, payload.name, payload.email)
    return user.model_dump()


@router.put(
    "/edit-profile/{uid}",
    response_model=dict,
    summary="Edit a user profile",
)
async def edit_profile(uid: str, payload: EditProfileRequest, service: UserServiceDep) -> dict:
    """Only the stored profile changes; credentials live with the identity provider."""
    message = await service.edit_profile(uid, payload.name, payload.email)
    return {"message": message}
