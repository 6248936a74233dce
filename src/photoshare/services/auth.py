"""Shared-password session state."""

import logging
from dataclasses import dataclass

from photoshare.domain.session import AuthResult, Role
from photoshare.services.client_storage import ClientStorage

logger = logging.getLogger(__name__)

ROLE_KEY = "photoshare_role"


@dataclass(frozen=True)
class Credentials:
    """Configured shared secrets."""

    admin_password: str
    user_password: str


@dataclass
class SessionState:
    """Role of one browser, persisted in its client storage.

    The secrets are compared in plaintext; this gates casual access only.
    """

    storage: ClientStorage
    credentials: Credentials

    @property
    def role(self) -> Role:
        """Return the stored role, treating unknown values as anonymous."""
        raw = self.storage.get(ROLE_KEY)
        try:
            return Role(raw) if raw else Role.ANONYMOUS
        except ValueError:
            return Role.ANONYMOUS

    def is_authenticated(self) -> bool:
        """Return True for user and admin sessions."""
        return self.role in {Role.USER, Role.ADMIN}

    def is_admin(self) -> bool:
        """Return True for admin sessions."""
        return self.role is Role.ADMIN

    def authenticate(self, password: str) -> AuthResult:
        """Check the admin secret first, then the user secret."""
        admin_secret = self.credentials.admin_password
        user_secret = self.credentials.user_password
        if admin_secret and password == admin_secret:
            self.storage.set(ROLE_KEY, Role.ADMIN.value)
            logger.info("Admin session started")
            return AuthResult(success=True, role=Role.ADMIN)
        if user_secret and password == user_secret:
            self.storage.set(ROLE_KEY, Role.USER.value)
            logger.info("User session started")
            return AuthResult(success=True, role=Role.USER)
        logger.info("Rejected login attempt")
        return AuthResult(success=False, role=None)

    def logout(self) -> None:
        """Clear the stored role."""
        self.storage.remove(ROLE_KEY)
