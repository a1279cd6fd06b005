"""
User models.

Profile users are stored at users/{uid} as {name, email}. Auth users (signup
and login) are stored under a generated id as {email, username, password},
where password is a bcrypt hash.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict


class UserProfile(BaseModel):
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "uid": "firebase-or-other-uid",
                "name": "Ada",
                "email": "ada@example.com",
            }
        },
    )

    uid: str
    name: str
    email: str


class AuthUser(BaseModel):
    """Auth user as returned to clients. The password hash is never included."""

    email: str
    username: Optional[str] = None


class RegisterRequest(BaseModel):
    uid: Optional[str] = None
    name: Optional[str] = None
    email: Optional[str] = None


class EditProfileRequest(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None


class SignupRequest(BaseModel):
    user_entered_email: Optional[str] = None
    user_entered_username: Optional[str] = None
    user_entered_password: Optional[str] = None


class LoginRequest(BaseModel):
    user_entered_email: Optional[str] = None
    user_entered_password: Optional[str] = None
