"""Utility script to create an initial staff user in the database."""

from __future__ import annotations

import argparse
from getpass import getpass

from sqlalchemy.exc import SQLAlchemyError

from app.application.use_cases.users.create_user import create_user
from app.domain.entities import ROLE_ADMIN, ROLE_VIEWER
from app.infrastructure.database import SessionLocal, initialize_database


def parse_args() -> argparse.Namespace:
    """Parse command line arguments for user creation."""

    parser = argparse.ArgumentParser(
        description="Create an initial user for the Complaint Desk API.",
    )
    parser.add_argument(
        "--username",
        default="admin",
        help="Nombre de usuario (por defecto: admin)",
    )
    parser.add_argument(
        "--role",
        choices=(ROLE_ADMIN, ROLE_VIEWER),
        default=ROLE_ADMIN,
        help="Rol asignado al usuario (por defecto: admin)",
    )
    parser.add_argument(
        "--password",
        default=None,
        help="Contraseña del usuario. Si no se proporciona se solicitará interactivamente.",
    )
    parser.add_argument(
        "--inactive",
        action="store_true",
        help="Crea el usuario deshabilitado.",
    )
    return parser.parse_args()


def main() -> None:
    """Create a user using the provided command line arguments."""

    args = parse_args()

    password = args.password or getpass("Ingrese la contraseña del usuario: ")
    if not password:
        raise SystemExit("No se proporcionó una contraseña válida.")

    initialize_database()

    session = SessionLocal()
    try:
        user = create_user(
            session,
            username=args.username,
            password=password,
            role_alias=args.role,
            is_active=not args.inactive,
        )
    except ValueError as exc:
        session.rollback()
        raise SystemExit(f"No se pudo crear el usuario: {exc}") from exc
    except SQLAlchemyError as exc:
        session.rollback()
        raise SystemExit(f"Error al guardar el usuario en la base de datos: {exc}") from exc
    else:
        print(
            "Usuario creado exitosamente:\n"
            f"  ID: {user.id}\n"
            f"  Usuario: {user.username}\n"
            f"  Rol: {user.role.alias}\n"
            f"  Activo: {'sí' if user.is_active else 'no'}"
        )
    finally:
        session.close()


if __name__ == "__main__":
    main()
