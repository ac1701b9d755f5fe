"""Validation helpers shared by complaint use cases."""

from app.domain.errors import ValidationError

SUBJECT_MIN_LENGTH = 3
SUBJECT_MAX_LENGTH = 255
DESCRIPTION_MIN_LENGTH = 10


def normalize_subject(value: str) -> str:
    subject = (value or "").strip()
    if not SUBJECT_MIN_LENGTH <= len(subject) <= SUBJECT_MAX_LENGTH:
        raise ValidationError(
            f"El asunto debe tener entre {SUBJECT_MIN_LENGTH} y {SUBJECT_MAX_LENGTH} caracteres"
        )
    return subject


def normalize_description(value: str) -> str:
    description = (value or "").strip()
    if len(description) < DESCRIPTION_MIN_LENGTH:
        raise ValidationError(
            f"La descripción debe tener al menos {DESCRIPTION_MIN_LENGTH} caracteres"
        )
    return description
