"""FastAPI dependency utilities."""

import logging

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from app.config import Settings, get_settings
from app.domain.entities import User
from app.infrastructure import database
from app.infrastructure.database import get_db
from app.infrastructure.notifications import ConnectionRegistry
from app.infrastructure.repositories import UserRepository
from app.infrastructure.security import decode_access_token

logger = logging.getLogger(__name__)

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/token")
optional_oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/token", auto_error=False)


def _credentials_exception(detail: str = "Credenciales inválidas") -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def resolve_current_user(token: str, db: Session) -> User:
    """Resolve the authenticated user for the provided token."""

    try:
        payload = decode_access_token(token)
    except ValueError as exc:
        raise _credentials_exception() from exc

    username = payload.get("sub")
    if not isinstance(username, str) or not username:
        raise _credentials_exception()

    user = UserRepository(db).get_by_username(username)
    if user is None:
        raise _credentials_exception("Usuario no encontrado")
    return user


def get_current_user(
    token: str = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
) -> User:
    """Return the authenticated user from the provided token."""

    return resolve_current_user(token, db)


def get_current_active_user(current_user: User = Depends(get_current_user)) -> User:
    """Ensure the authenticated user is active."""

    if not current_user.is_active:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Usuario inactivo",
        )
    return current_user


def require_admin(current_user: User = Depends(get_current_active_user)) -> User:
    """Ensure the authenticated user has administrator privileges."""

    if not current_user.is_admin():
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="No autorizado",
        )
    return current_user


def get_stream_user(
    request: Request,
    token: str | None = Depends(optional_oauth2_scheme),
) -> User:
    """Authenticate a push stream request.

    Browsers cannot attach headers to ``EventSource`` requests, so the token
    may also travel in the ``token`` query parameter. The lookup uses its own
    session, closed before the response starts streaming, so open streams do
    not hold pooled connections.
    """

    token = token or request.query_params.get("token")
    if not token:
        logger.info("Stream rechazado: solicitud sin token")
        raise _credentials_exception("No autenticado")
    session = database.SessionLocal()
    try:
        user = resolve_current_user(token, session)
    finally:
        session.close()
    if not user.is_active:
        logger.info("Stream rechazado: usuario %s inactivo", user.id)
        raise _credentials_exception("Usuario inactivo")
    return user


def get_connection_registry(request: Request) -> ConnectionRegistry:
    """Return the registry created for this application instance."""

    return request.app.state.connection_registry


def get_app_settings() -> Settings:
    return get_settings()
