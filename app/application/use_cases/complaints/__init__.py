"""Use cases for complaint intake and triage."""

from .submit_complaint import generate_tracking_number, submit_complaint
from .track_complaint import track_complaint
from .update_complaint_status import update_complaint_status

__all__ = [
    "generate_tracking_number",
    "submit_complaint",
    "track_complaint",
    "update_complaint_status",
]
