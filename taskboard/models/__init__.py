"""Pydantic models for stored documents and request bodies."""

from taskboard.models.task import Task, TaskCreate, TaskDelete, TaskUpdate
from taskboard.models.user import (
    AuthUser,
    EditProfileRequest,
    LoginRequest,
    RegisterRequest,
    SignupRequest,
    UserProfile,
)

__all__ = [
    "Task",
    "TaskCreate",
    "TaskUpdate",
    "TaskDelete",
    "UserProfile",
    "AuthUser",
    "RegisterRequest",
    "EditProfileRequest",
    "SignupRequest",
    "LoginRequest",
]
