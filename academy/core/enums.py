"""Core enums used across modules."""

from enum import StrEnum


class CourseStatusEnum(StrEnum):
    """Course lifecycle status."""

    ACTIVE = "active"
    INACTIVE = "inactive"
    SUSPENDED = "suspended"


class CourseLevelEnum(StrEnum):
    """Course difficulty level."""

    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class InvoiceStatusEnum(StrEnum):
    """Invoice lifecycle status."""

    DRAFT = "draft"
    PENDING = "pending"
    SENT = "sent"
    PARTIAL = "partial"
    PAID = "paid"
    OVERDUE = "overdue"
    CANCELLED = "cancelled"
    REFUNDED = "refunded"


class CommentTypeEnum(StrEnum):
    """Invoice comment kind."""

    GENERAL = "general"
    PAYMENT = "payment"
    REMINDER = "reminder"
    DISPUTE = "dispute"
    SYSTEM = "system"
