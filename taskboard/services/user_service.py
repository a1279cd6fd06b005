"""
Profile adapter: users/{uid} = {name, email}.

uid comes from the caller (the frontend's identity provider) and is trusted
as unique. E-mail uniqueness is not enforced here.
"""

import logging
from typing import Optional

from taskboard.database import DocumentStore
from taskboard.errors import NotFoundError, require
from taskboard.models.user import UserProfile

logger = logging.getLogger(__name__)


class UserService:
    def __init__(self, store: DocumentStore, collection: str = "users") -> None:
        self.store = store
        self.collection = collection

    async def register_user(
        self, uid: Optional[str], name: Optional[str], email: Optional[str]
    ) -> UserProfile:
        """Create or overwrite the profile document of uid."""
        require(uid=uid, name=name, email=email)

        await self.store.set(self.collection, uid, {"name": name, "email": email})
        logger.info("Registered profile for uid=%s", uid)
        return UserProfile(uid=uid, name=name, email=email)

    async def edit_profile(self, uid: str, name: Optional[str], email: Optional[str]) -> str:
        """Update name and email together on an existing profile."""
        require(name=name, email=email)

        if not await self.store.update(self.collection, uid, {"name": name, "email": email}):
            raise NotFoundError("User not found.")
        logger.info("Updated profile for uid=%s", uid)
        return "Profile updated."
