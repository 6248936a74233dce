"""Session and presentation state models."""

from dataclasses import dataclass
from enum import Enum


class Role(Enum):
    """Access level of the current browser session."""

    ANONYMOUS = "anonymous"
    USER = "user"
    ADMIN = "admin"


class Theme(Enum):
    """Colour scheme preference."""

    LIGHT = "light"
    DARK = "dark"


@dataclass(frozen=True)
class AuthResult:
    """Outcome of a password check."""

    success: bool
    role: Role | None
