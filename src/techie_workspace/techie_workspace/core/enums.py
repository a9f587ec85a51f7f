from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User role used for authorization."""

    USER = "user"
    MANAGER = "manager"
    ADMIN = "admin"


class SessionStatus(str, Enum):
    """Lifecycle of a check-in session."""

    ACTIVE = "active"
    COMPLETED = "completed"


class BillingStatus(str, Enum):
    PENDING = "pending"
    PAID = "paid"
    OVERDUE = "overdue"


class PlanType(str, Enum):
    """Membership plans, in display order."""

    HOURLY = "hourly"
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


class ReportPeriod(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"
