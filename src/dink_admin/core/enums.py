from __future__ import annotations

from enum import Enum
from typing import Optional


class Role(str, Enum):
    """Staff roles carried in the session cookie."""

    ADMIN = "admin"
    MANAGER = "manager"
    COACH = "coach"
    EMPLOYEE = "employee"
    VIEWER = "viewer"

    @classmethod
    def parse(cls, value, default: Optional["Role"] = None) -> "Role":
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return default or cls.EMPLOYEE

    @property
    def can_access_admin(self) -> bool:
        return self in (Role.ADMIN, Role.MANAGER)


class MembershipLevel(str, Enum):
    GUEST = "guest"
    BASIC = "basic"
    PREMIUM = "premium"
    VIP = "vip"


class DuprStatus(str, Enum):
    """Filter values accepted by the member list procedure."""

    VERIFIED = "verified"
    PENDING = "pending"
    UNVERIFIED = "unverified"


class EventType(str, Enum):
    EVENT_SCRAMBLE = "event_scramble"
    DUPR_OPEN_PLAY = "dupr_open_play"
    DUPR_TOURNAMENT = "dupr_tournament"
    NON_DUPR_TOURNAMENT = "non_dupr_tournament"
    LEAGUE = "league"
    CLINIC = "clinic"
    PRIVATE_LESSON = "private_lesson"
    OPEN_PLAY = "open_play"


class PaymentStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"
    REFUNDED = "refunded"


class BookingSource(str, Enum):
    PLAYER_APP = "player_app"
    ADMIN_DASHBOARD = "admin_dashboard"


class FulfillmentStatus(str, Enum):
    PENDING = "pending"
    ALLOCATED = "allocated"
    IN_PROGRESS = "in_progress"
    FULFILLED = "fulfilled"
    EXPIRED = "expired"
    CANCELLED = "cancelled"


class EmailStatus(str, Enum):
    """Lifecycle of a marketing email draft."""

    DRAFT = "draft"
    REVIEWED = "reviewed"
    SENDING = "sending"
    SENT = "sent"
    FAILED = "failed"


class SubscriberStatus(str, Enum):
    ACTIVE = "active"
    UNSUBSCRIBED = "unsubscribed"


class InquiryStatus(str, Enum):
    NEW = "new"
    IN_PROGRESS = "in_progress"
    RESPONDED = "responded"
    RESOLVED = "resolved"
    CLOSED = "closed"
    SPAM = "spam"


class RecognitionStatus(str, Enum):
    PENDING = "pending"
    ORDERED = "ordered"
    IN_PRODUCTION = "in_production"
    RECEIVED = "received"
    INSTALLED = "installed"
    VERIFIED = "verified"
