"""Domain entity representing a staff role."""

from dataclasses import dataclass

ROLE_ADMIN = "admin"
ROLE_VIEWER = "viewer"

DEFAULT_ROLES: tuple[tuple[str, str], ...] = (
    ("Administrator", ROLE_ADMIN),
    ("Viewer", ROLE_VIEWER),
)


@dataclass
class Role:
    """A role granted to staff accounts (``admin`` or ``viewer``)."""

    id: int
    name: str
    alias: str


__all__ = ["DEFAULT_ROLES", "ROLE_ADMIN", "ROLE_VIEWER", "Role"]
