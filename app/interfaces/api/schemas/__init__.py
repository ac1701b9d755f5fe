from .auth import Token
from .complaint import (
    ComplaintCreate,
    ComplaintRead,
    ComplaintStatusUpdate,
    ComplaintSubmitted,
    ComplaintTrackingRead,
)
from .notification import (
    AcknowledgementResponse,
    ConnectionStatsRead,
    NotificationDeleteRequest,
    NotificationFeedRead,
    NotificationMarkReadRequest,
    NotificationSummaryRead,
)

__all__ = [
    "AcknowledgementResponse",
    "ComplaintCreate",
    "ComplaintRead",
    "ComplaintStatusUpdate",
    "ComplaintSubmitted",
    "ComplaintTrackingRead",
    "ConnectionStatsRead",
    "NotificationDeleteRequest",
    "NotificationFeedRead",
    "NotificationMarkReadRequest",
    "NotificationSummaryRead",
    "Token",
]
