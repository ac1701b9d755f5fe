"""ORM models used by the application infrastructure."""

from .complaint import ComplaintModel
from .notification import NotificationModel
from .role import RoleModel
from .user import UserModel

__all__ = [
    "ComplaintModel",
    "NotificationModel",
    "RoleModel",
    "UserModel",
]
