"""
Authentication: signup and login against users stored with bcrypt hashes.

Login only checks credentials and returns the user record; issuing tokens or
sessions is left to the caller.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from taskboard.api.dependencies import get_auth_service
from taskboard.models.user import LoginRequest, SignupRequest
from taskboard.services.auth_service import AuthService

router = APIRouter()

AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]


@router.post(
    "/signup",
    status_code=status.HTTP_201_CREATED,
    response_model=dict,
    summary="Sign up with email, username and password",
)
async def signup(payload: SignupRequest, service: AuthServiceDep) -> dict:
    await service.signup(
        payload.user_entered_email,
        payload.user_entered_username,
        payload.user_entered_password,
    )
    return {"message": "User registered successfully"}


@router.post(
    "/login",
    response_model=dict,
    summary="Log in with email and password",
)
async def login(payload: LoginRequest, service: AuthServiceDep) -> dict:
    user = await service.login(payload.user_entered_email, payload.user_entered_password)
    return {"message": "Login successful", "user": user.model_dump()}
