"""Use case for creating staff users."""

from sqlalchemy.orm import Session

from app.domain.entities import ROLE_VIEWER, User
from app.infrastructure.repositories import RoleRepository, UserRepository
from app.infrastructure.security import get_password_hash
from app.utils import now_in_app_timezone


def create_user(
    session: Session,
    *,
    username: str,
    password: str,
    role_alias: str = ROLE_VIEWER,
    is_active: bool = True,
) -> User:
    """Create a new user ensuring unique usernames."""

    username = (username or "").strip()
    if not username:
        raise ValueError("El nombre de usuario es obligatorio")
    if not password:
        raise ValueError("La contraseña es obligatoria")

    repository = UserRepository(session)
    if repository.get_by_username(username):
        raise ValueError("El nombre de usuario ya está registrado")

    role = RoleRepository(session).get_by_alias(role_alias)
    if role is None:
        raise ValueError("Rol no encontrado")

    user = User(
        id=None,
        role=role,
        username=username,
        password=get_password_hash(password),
        is_active=is_active,
        created_at=now_in_app_timezone(),
    )
    return repository.create(user)
