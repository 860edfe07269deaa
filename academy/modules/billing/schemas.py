"""Billing schemas."""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, computed_field, model_validator

from academy.core.enums import CommentTypeEnum, InvoiceStatusEnum
from academy.shared.utils import utc_now

OVERDUE_CANDIDATE_STATUSES = frozenset(
    {InvoiceStatusEnum.PENDING, InvoiceStatusEnum.SENT, InvoiceStatusEnum.PARTIAL},
)


class InvoiceItemSchema(BaseModel):
    """Invoice line item."""

    model_config = ConfigDict(from_attributes=True)

    course_id: str
    course_name: str
    quantity: int = Field(ge=1)
    unit_price: Decimal = Field(ge=0)
    total_price: Decimal = Field(ge=0)
    description: str | None = None


class InvoiceCreate(BaseModel):
    """Create invoice request."""

    parent_id: str = Field(min_length=1)
    student_id: str = Field(min_length=1)
    amount: Decimal = Field(gt=0)
    due_date: date
    issue_date: date = Field(default_factory=lambda: utc_now().date())
    status: InvoiceStatusEnum = InvoiceStatusEnum.PENDING
    items: list[InvoiceItemSchema] = Field(default_factory=list)
    payment_method: str | None = None
    created_by: str = "system"

    @model_validator(mode="after")
    def validate_dates(self) -> "InvoiceCreate":
        if self.due_date < self.issue_date:
            raise ValueError("due_date must not be before issue_date")
        return self


class InvoiceUpdate(BaseModel):
    """Partial invoice update request. Status moves through the status endpoint."""

    parent_id: str | None = Field(default=None, min_length=1)
    amount: Decimal | None = Field(default=None, gt=0)
    due_date: date | None = None
    issue_date: date | None = None
    items: list[InvoiceItemSchema] | None = None
    payment_method: str | None = None
    modified_by: str = "system"


class InvoiceStatusUpdate(BaseModel):
    """Invoice status change request."""

    status: InvoiceStatusEnum
    actor_id: str = "system"
    actor_name: str = "System"
    comment: str | None = None


class InvoiceCommentCreate(BaseModel):
    """Add invoice comment request."""

    comment: str = Field(min_length=1, max_length=2000)
    type: CommentTypeEnum = CommentTypeEnum.GENERAL
    actor_id: str = "system"
    actor_name: str = "System"


class InvoiceCommentRead(BaseModel):
    """Invoice comment response schema."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    comment: str
    type: CommentTypeEnum
    created_by: str
    created_by_name: str
    created_at: datetime


class InvoiceRead(BaseModel):
    """Invoice response schema."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    parent_id: str
    student_id: str
    amount: Decimal
    due_date: date
    issue_date: date
    status: InvoiceStatusEnum
    items: list[InvoiceItemSchema]
    comments: list[InvoiceCommentRead]
    total_paid: Decimal
    payment_date: datetime | None
    payment_method: str | None
    last_modified: datetime
    last_modified_by: str
    created_at: datetime
    updated_at: datetime

    @computed_field
    @property
    def is_overdue(self) -> bool:
        return self.status in OVERDUE_CANDIDATE_STATUSES and self.due_date < utc_now().date()


class PaymentCreate(BaseModel):
    """Record payment request."""

    amount: Decimal = Field(gt=0)
    payment_date: date = Field(default_factory=lambda: utc_now().date())
    payment_method: str = Field(min_length=1, max_length=64)
    reference: str | None = Field(default=None, max_length=128)
    notes: str | None = Field(default=None, max_length=2000)
    created_by: str = "system"
    created_by_name: str = "System"


class PaymentRead(BaseModel):
    """Payment record response schema."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    invoice_id: str
    amount: Decimal
    payment_date: date
    payment_method: str
    reference: str | None
    notes: str | None
    created_by: str
    created_at: datetime


class BillingStatsRead(BaseModel):
    """Aggregate billing figures over an issue date range."""

    total_invoices: int
    total_amount: Decimal
    paid_amount: Decimal
    paid_count: int
    pending_amount: Decimal
    pending_count: int
    overdue_amount: Decimal
    overdue_count: int
