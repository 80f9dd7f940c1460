"""Single-user credential check backed by the key-value storage."""

from __future__ import annotations

import logging
import secrets
from collections.abc import Callable
from datetime import datetime, timedelta, timezone

from pydantic import ValidationError

from backend.db.storage_client import KeyValueStorage, StorageError
from shared.models import AuthSession, AuthUser, ToolError, ToolErrorCode


logger = logging.getLogger(__name__)

AUTH_STORAGE_KEY = "auth"
MIN_PASSWORD_LENGTH = 6


class AuthService:
    """Checks the configured demo credential and keeps one session."""

    def __init__(
        self,
        storage: KeyValueStorage,
        *,
        username: str,
        password: str,
        session_ttl: timedelta = timedelta(hours=24),
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._storage = storage
        self._username = username
        self._password = password
        self._session_ttl = session_ttl
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    def _load_session(self) -> AuthSession | None:
        try:
            raw_session = self._storage.load(AUTH_STORAGE_KEY)
        except StorageError:
            logger.warning("auth_session_unreadable; treating as logged out")
            return None
        if raw_session is None:
            return None
        try:
            return AuthSession.model_validate(raw_session)
        except ValidationError:
            logger.warning("auth_session_malformed; treating as logged out")
            return None

    def _save_session(self, session: AuthSession) -> ToolError | None:
        try:
            self._storage.save(AUTH_STORAGE_KEY, session.model_dump(mode="json"))
        except StorageError as exc:
            logger.warning("auth_session_save_failed error=%s", exc)
            return ToolError(code=ToolErrorCode.PERSISTENCE_ERROR, message="Failed to save session")
        return None

    def login(self, username: str, password: str) -> AuthUser | ToolError:
        if username != self._username or password != self._password:
            logger.info("auth_login_rejected username=%s", username)
            return ToolError(
                code=ToolErrorCode.UNAUTHORIZED,
                message="Invalid username or password",
            )

        now = self._clock()
        user = AuthUser(
            id=1,
            username=self._username,
            full_name="Admin User",
            email="admin@moneywise.com",
            role="admin",
            created_at=now,
            last_login_at=now,
        )
        session = AuthSession(
            user=user,
            token=secrets.token_urlsafe(32),
            expires_at=now + self._session_ttl,
        )
        error = self._save_session(session)
        if error is not None:
            return error

        logger.info("auth_login_succeeded username=%s", username)
        return user

    def logout(self) -> None | ToolError:
        try:
            self._storage.clear(AUTH_STORAGE_KEY)
        except StorageError as exc:
            logger.warning("auth_logout_failed error=%s", exc)
            return ToolError(code=ToolErrorCode.PERSISTENCE_ERROR, message="Logout failed")
        return None

    def current_session(self) -> AuthSession | None:
        session = self._load_session()
        if session is None:
            return None
        if session.is_expired(self._clock()):
            logger.info("auth_session_expired username=%s", session.user.username)
            self.logout()
            return None
        return session

    def current_user(self) -> AuthUser | None:
        session = self.current_session()
        return session.user if session is not None else None

    def is_authenticated(self) -> bool:
        return self.current_session() is not None

    def extend_session(self) -> AuthSession | ToolError:
        session = self.current_session()
        if session is None:
            return ToolError(code=ToolErrorCode.UNAUTHORIZED, message="No active session")

        extended = session.model_copy(update={"expires_at": self._clock() + self._session_ttl})
        error = self._save_session(extended)
        if error is not None:
            return error
        return extended

    def change_password(self, current_password: str, new_password: str) -> None | ToolError:
        if current_password != self._password:
            return ToolError(
                code=ToolErrorCode.VALIDATION_ERROR,
                message="Current password is incorrect",
                details={"current_password": "Current password is incorrect"},
            )
        if len(new_password) < MIN_PASSWORD_LENGTH:
            return ToolError(
                code=ToolErrorCode.VALIDATION_ERROR,
                message=f"New password must be at least {MIN_PASSWORD_LENGTH} characters long",
                details={
                    "new_password": f"New password must be at least {MIN_PASSWORD_LENGTH} characters long"
                },
            )

        self._password = new_password
        logger.info("auth_password_changed username=%s", self._username)
        return None
