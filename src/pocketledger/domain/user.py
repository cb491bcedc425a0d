"""User and session domain service."""

import secrets
from datetime import datetime, timedelta, UTC
from typing import Optional

import structlog
from werkzeug.security import check_password_hash, generate_password_hash

from pocketledger.domain.entities import Session, User
from pocketledger.domain.errors import (
    AuthenticationError,
    ConflictError,
    ValidationError,
    missing_field,
    user_already_exists,
)
from pocketledger.domain.ledger import as_utc
from pocketledger.storage.base import Storage

logger = structlog.get_logger(__name__)

SESSION_LIFETIME = timedelta(days=7)
INVALID_CREDENTIALS = "Invalid credentials"


class UserService:
    """Service for registering users and issuing session tokens."""

    def __init__(self, storage: Storage):
        """Initialize user service.

        Args:
            storage: Storage instance
        """
        self.storage = storage

    def register(
        self, email: str, name: str, password: str, now: Optional[datetime] = None
    ) -> User:
        """Register a new user.

        Args:
            email: Email address, used as the user's identifier
            name: Display name
            password: Plain-text password (only its hash is stored)
            now: Registration time

        Returns:
            The created user

        Raises:
            ValidationError: If a field is missing
            ConflictError: If the email is already registered
        """
        for field_name, value in (("email", email), ("name", name), ("password", password)):
            if not value or not value.strip():
                raise ValidationError(missing_field(field_name))

        email = email.strip()
        if self.storage.get_user(email) is not None:
            raise ConflictError(user_already_exists(email))

        user = User(
            email=email,
            name=name.strip(),
            password_hash=generate_password_hash(password),
            created_at=as_utc(now) if now else datetime.now(UTC),
        )
        self.storage.put_user(user)
        logger.info("user_registered", owner_id=email)
        return user

    def login(self, email: str, password: str, now: Optional[datetime] = None) -> Session:
        """Verify credentials and issue a session.

        Raises:
            ValidationError: If email or password is missing
            AuthenticationError: If the credentials do not match
        """
        if not email or not password:
            raise ValidationError("Missing email or password")

        user = self.storage.get_user(email.strip())
        if user is None or not check_password_hash(user.password_hash, password):
            logger.info("login_failed", email=email)
            raise AuthenticationError(INVALID_CREDENTIALS)

        now = as_utc(now) if now else datetime.now(UTC)
        session = Session(
            token=secrets.token_urlsafe(32),
            owner_id=user.email,
            created_at=now,
            expires_at=now + SESSION_LIFETIME,
        )
        self.storage.put_session(session)
        logger.info("login_succeeded", owner_id=user.email)
        return session

    def resolve_session(self, token: Optional[str], now: Optional[datetime] = None) -> str:
        """Resolve a session token to its owner id.

        Raises:
            AuthenticationError: If the token is missing, unknown, or expired
        """
        if not token:
            raise AuthenticationError("Not logged in")

        session = self.storage.get_session(token)
        if session is None:
            raise AuthenticationError("Session not found. Please log in again.")

        now = as_utc(now) if now else datetime.now(UTC)
        if now >= session.expires_at:
            self.storage.delete_session(token)
            raise AuthenticationError("Session expired. Please log in again.")

        return session.owner_id

    def get_user(self, email: str) -> Optional[User]:
        """Get user by email."""
        return self.storage.get_user(email)

    def logout(self, token: str) -> None:
        """End a session. Unknown tokens are ignored."""
        self.storage.delete_session(token)
