"""
Auth adapter: e-mail/username/password signup and login.

Users are stored under a generated id as {email, username, password} where
password is a salted bcrypt hash. Signup looks the e-mail up before inserting;
there is no lock, so two simultaneous signups with the same e-mail can both
succeed. No tokens or sessions are issued.
"""

import asyncio
import logging
from typing import Optional

import bcrypt

from taskboard.database import DocumentStore
from taskboard.errors import ConflictError, NotFoundError, UnauthorizedError, ValidationError, require
from taskboard.models.user import AuthUser

logger = logging.getLogger(__name__)

# bcrypt only looks at the first 72 bytes and recent releases reject longer input
MAX_PASSWORD_BYTES = 72


def hash_password(password: str, rounds: int = 10) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    encoded = password.encode("utf-8")
    if len(encoded) > MAX_PASSWORD_BYTES:
        return False
    try:
        return bcrypt.checkpw(encoded, password_hash.encode("utf-8"))
    except ValueError:
        # Stored value is not a bcrypt hash
        return False


class AuthService:
    def __init__(self, store: DocumentStore, collection: str = "users", bcrypt_rounds: int = 10) -> None:
        self.store = store
        self.collection = collection
        self.bcrypt_rounds = bcrypt_rounds

    async def signup(self, email: Optional[str], username: Optional[str], password: Optional[str]) -> str:
        """Insert a new user with a hashed password. Returns the generated user id."""
        require(email=email, username=username, password=password)
        if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValidationError(f"password must be at most {MAX_PASSWORD_BYTES} bytes.")

        if await self.store.find_one(self.collection, "email", email) is not None:
            logger.warning("Signup rejected: email already registered")
            raise ConflictError("Email already registered")

        # Hashing is CPU-bound; keep it off the event loop
        password_hash = await asyncio.to_thread(hash_password, password, self.bcrypt_rounds)
        user_id = await self.store.add(
            self.collection,
            {"email": email, "username": username, "password": password_hash},
        )
        logger.info("Registered auth user %s", user_id)
        return user_id

    async def login(self, email: Optional[str], password: Optional[str]) -> AuthUser:
        """Check the password against the stored hash and return the user without it."""
        require(email=email, password=password)

        found = await self.store.find_one(self.collection, "email", email)
        if found is None:
            raise NotFoundError("User not found")
        user_id, data = found

        password_hash = data.get("password")
        if not password_hash or not await asyncio.to_thread(verify_password, password, password_hash):
            logger.warning("Login rejected for user %s: invalid credentials", user_id)
            raise UnauthorizedError("Invalid credentials")

        logger.info("Login succeeded for user %s", user_id)
        return AuthUser(email=data["email"], username=data.get("username"))
