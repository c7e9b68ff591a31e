"""
Admin session.

A single admin account is configured through ADMIN_EMAIL / ADMIN_PASSWORD.
The session state is persisted as JSON under a fixed key so it survives
restarts of the admin tooling.

Usage:
    session = AdminSession.load()
    if not session.is_authenticated:
        session.login(email, password)
"""

from __future__ import annotations

import hmac
import json
from pathlib import Path

from pydantic import BaseModel

from shared.config.constants import SESSION_STORAGE_KEY
from shared.config.logging import get_logger
from shared.config.settings import Settings, get_settings

logger = get_logger(__name__)


class AdminUser(BaseModel):
    email: str
    name: str = "Admin"


class AdminSession(BaseModel):
    """Authentication state of the admin tooling."""

    user: AdminUser | None = None
    is_authenticated: bool = False

    def login(self, email: str, password: str, settings: Settings | None = None) -> bool:
        """
        Authenticate against the configured admin credentials.

        Returns False without changing state on mismatch or when no
        credentials are configured.
        """
        settings = settings or get_settings()
        if not settings.admin_email or not settings.admin_password:
            logger.warning("Admin credentials are not configured")
            return False

        email_ok = hmac.compare_digest(email.encode(), settings.admin_email.encode())
        password_ok = hmac.compare_digest(password.encode(), settings.admin_password.encode())
        if not (email_ok and password_ok):
            logger.warning("Admin login rejected", email=email)
            return False

        self.user = AdminUser(email=email)
        self.is_authenticated = True
        logger.info("Admin logged in", email=email)
        return True

    def logout(self) -> None:
        self.user = None
        self.is_authenticated = False

    # =========================================================================
    # Persistence
    # =========================================================================

    def save(self, path: str | Path | None = None) -> Path:
        """Write the session state file and return its path."""
        target = Path(path or get_settings().session_file)
        document = {SESSION_STORAGE_KEY: {"state": self.model_dump(mode="json"), "version": 0}}
        target.write_text(json.dumps(document), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: str | Path | None = None) -> AdminSession:
        """
        Read the session state file.

        A missing or unreadable file yields a logged-out session.
        """
        source = Path(path or get_settings().session_file)
        if not source.exists():
            return cls()

        try:
            document = json.loads(source.read_text(encoding="utf-8"))
            return cls.model_validate(document[SESSION_STORAGE_KEY]["state"])
        except (ValueError, KeyError, TypeError):
            logger.warning("Ignoring unreadable session file", path=str(source), exc_info=True)
            return cls()
