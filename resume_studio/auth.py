"""
Session-scoped identity.

Users log in with username/password; the user id is kept in Starlette's
signed session cookie. Passwords are stored as bcrypt hashes.
"""

from __future__ import annotations

import bcrypt
from fastapi import Request
from loguru import logger

from resume_studio.errors import Unauthorized, ValidationFailure
from resume_studio.schemas.resume import User
from resume_studio.store.base import BaseStorage

SESSION_KEY = "user_id"
DEFAULT_ROUNDS = 12
# bcrypt only reads the first 72 bytes of a password.
MAX_PASSWORD_BYTES = 72


def hash_password(password: str, rounds: int = DEFAULT_ROUNDS) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=rounds)).decode("ascii")


def verify_password(password: str, stored: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), stored.encode("utf-8"))
    except ValueError:
        # Malformed stored hash, or a password bcrypt refuses.
        return False


class IdentityService:
    def __init__(self, storage: BaseStorage, rounds: int = DEFAULT_ROUNDS):
        self.storage = storage
        self.rounds = rounds

    def register(self, username: str, password: str, name: str = "") -> User:
        if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValidationFailure(f"Must be at most {MAX_PASSWORD_BYTES} bytes", field="password")
        if self.storage.get_user_by_username(username) is not None:
            raise ValidationFailure("Username already exists", field="username")
        record = self.storage.create_user(username, hash_password(password, self.rounds), name)
        logger.info(f"Registered user {record.id} ({username})")
        return record.public()

    def authenticate(self, username: str, password: str) -> User:
        record = self.storage.get_user_by_username(username)
        if record is None or not verify_password(password, record.password):
            raise Unauthorized("Invalid username or password")
        return record.public()

    def ensure_user(self, username: str, password: str, name: str = "") -> tuple[User, bool]:
        """Return the user, creating it first if needed. The flag is True when created."""
        record = self.storage.get_user_by_username(username)
        if record is not None:
            return record.public(), False
        return self.register(username, password, name), True


def login(request: Request, user: User) -> None:
    request.session.clear()
    request.session[SESSION_KEY] = user.id


def logout(request: Request) -> None:
    request.session.clear()


def current_user(request: Request) -> User:
    """FastAPI dependency: the logged-in user, or Unauthorized."""
    user_id = request.session.get(SESSION_KEY)
    if user_id is None:
        raise Unauthorized()
    record = request.app.state.storage.get_user(user_id)
    if record is None:
        request.session.clear()
        raise Unauthorized()
    return record.public()
