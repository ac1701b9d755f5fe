"""Domain entity describing a submitted complaint."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

COMPLAINT_STATUS_NEW = "new"
COMPLAINT_STATUS_RECEIVED = "received"
COMPLAINT_STATUS_DISCUSSING = "discussing"
COMPLAINT_STATUS_PROCESSING = "processing"
COMPLAINT_STATUS_RESOLVED = "resolved"
COMPLAINT_STATUS_ARCHIVED = "archived"

# Ordered pipeline; ``archived`` sits outside it.
COMPLAINT_STATUS_PIPELINE: tuple[str, ...] = (
    COMPLAINT_STATUS_NEW,
    COMPLAINT_STATUS_RECEIVED,
    COMPLAINT_STATUS_DISCUSSING,
    COMPLAINT_STATUS_PROCESSING,
    COMPLAINT_STATUS_RESOLVED,
)
COMPLAINT_STATUSES: tuple[str, ...] = COMPLAINT_STATUS_PIPELINE + (
    COMPLAINT_STATUS_ARCHIVED,
)

COMPLAINT_CATEGORIES: tuple[str, ...] = (
    "technical",
    "environment",
    "hr",
    "equipment",
    "safety",
    "financial",
    "others",
)
COMPLAINT_PRIORITIES: tuple[str, ...] = ("low", "medium", "high", "urgent")


@dataclass
class Complaint:
    """Anonymous complaint tracked through the status pipeline."""

    id: int | None
    tracking_number: str
    category: str
    priority: str
    subject: str
    description: str
    status: str = COMPLAINT_STATUS_NEW
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def is_new(self) -> bool:
        return self.status == COMPLAINT_STATUS_NEW

    def can_transition_to(self, status: str) -> bool:
        """Return ``True`` when the complaint may move to ``status``.

        Complaints advance one step at a time along the pipeline. Any
        complaint that already left ``new`` may be archived, and archived
        complaints are terminal.
        """

        if status not in COMPLAINT_STATUSES or status == self.status:
            return False
        if self.status == COMPLAINT_STATUS_ARCHIVED:
            return False
        if status == COMPLAINT_STATUS_ARCHIVED:
            return self.status != COMPLAINT_STATUS_NEW
        current = COMPLAINT_STATUS_PIPELINE.index(self.status)
        return COMPLAINT_STATUS_PIPELINE.index(status) == current + 1


__all__ = [
    "COMPLAINT_CATEGORIES",
    "COMPLAINT_PRIORITIES",
    "COMPLAINT_STATUSES",
    "COMPLAINT_STATUS_ARCHIVED",
    "COMPLAINT_STATUS_DISCUSSING",
    "COMPLAINT_STATUS_NEW",
    "COMPLAINT_STATUS_PIPELINE",
    "COMPLAINT_STATUS_PROCESSING",
    "COMPLAINT_STATUS_RECEIVED",
    "COMPLAINT_STATUS_RESOLVED",
    "Complaint",
]
