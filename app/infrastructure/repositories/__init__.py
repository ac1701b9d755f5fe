"""Repository implementations for infrastructure layer."""

from .complaint_repository import ComplaintRepository
from .notification_repository import NotificationRepository
from .role_repository import RoleRepository
from .user_repository import UserRepository

__all__ = [
    "ComplaintRepository",
    "NotificationRepository",
    "RoleRepository",
    "UserRepository",
]
