"""Billing domain models."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal

from academy.core.enums import CommentTypeEnum, InvoiceStatusEnum
from academy.shared.utils import new_id, utc_now


@dataclass
class InvoiceItem:
    """Invoice line for one course."""

    course_id: str
    course_name: str
    quantity: int
    unit_price: Decimal
    total_price: Decimal
    description: str | None = None


@dataclass(frozen=True)
class InvoiceComment:
    """Append-only invoice comment."""

    comment: str
    type: CommentTypeEnum
    created_by: str
    created_by_name: str
    id: str = field(default_factory=new_id)
    created_at: datetime = field(default_factory=utc_now)


@dataclass
class Invoice:
    """Invoice issued to a parent for one student.

    ``total_paid`` is recomputed from the payment history on every recorded
    payment and ``comments`` only ever grows.
    """

    parent_id: str
    student_id: str
    amount: Decimal
    due_date: date
    issue_date: date
    status: InvoiceStatusEnum = InvoiceStatusEnum.PENDING
    items: list[InvoiceItem] = field(default_factory=list)
    comments: list[InvoiceComment] = field(default_factory=list)
    total_paid: Decimal = Decimal("0")
    payment_date: datetime | None = None
    payment_method: str | None = None
    last_modified: datetime = field(default_factory=utc_now)
    last_modified_by: str = "system"
    id: str = field(default_factory=new_id)
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)


@dataclass(frozen=True)
class PaymentRecord:
    """Immutable payment received against an invoice."""

    invoice_id: str
    amount: Decimal
    payment_date: date
    payment_method: str
    created_by: str
    reference: str | None = None
    notes: str | None = None
    id: str = field(default_factory=new_id)
    created_at: datetime = field(default_factory=utc_now)
