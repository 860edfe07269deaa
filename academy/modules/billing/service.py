"""Billing business logic layer."""

from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal

from fastapi import Depends

from academy.core.enums import CommentTypeEnum, InvoiceStatusEnum
from academy.core.metrics import PAYMENTS_RECORDED_TOTAL
from academy.core.store import InMemoryStore, get_store
from academy.modules.audit.repository import AuditRepository
from academy.modules.billing.models import (
    Invoice,
    InvoiceComment,
    InvoiceItem,
    PaymentRecord,
)
from academy.modules.billing.repository import BillingRepository
from academy.modules.billing.schemas import (
    BillingStatsRead,
    InvoiceCreate,
    InvoiceUpdate,
    PaymentCreate,
)
from academy.shared.exceptions import BusinessRuleException, NotFoundException
from academy.shared.utils import utc_now

logger = logging.getLogger(__name__)

SYSTEM_ACTOR_ID = "system"
SYSTEM_ACTOR_NAME = "System"
REMINDER_TEXT = "Payment reminder sent to parent"


def _payment_comment_text(payment: PaymentRecord) -> str:
    text = f"Payment of {payment.amount} received via {payment.payment_method}"
    if payment.reference:
        text += f" (Ref: {payment.reference})"
    return text


class BillingService:
    """Invoice ledger with the payment-driven status machine.

    Explicit status changes are trusted as given; only ``record_payment``
    derives a status, and only from the full payment history of the invoice.
    """

    def __init__(
        self,
        repository: BillingRepository,
        audit_repository: AuditRepository,
    ) -> None:
        self.repository = repository
        self.audit_repository = audit_repository

    async def _get_invoice_or_raise(self, invoice_id: str) -> Invoice:
        invoice = await self.repository.get_invoice_by_id(invoice_id)
        if invoice is None:
            raise NotFoundException("Invoice not found")
        return invoice

    async def create_invoice(self, payload: InvoiceCreate) -> Invoice:
        """Create invoice with no payments and no comments."""
        async with self.repository.transaction():
            invoice = await self.repository.add_invoice(
                Invoice(
                    parent_id=payload.parent_id,
                    student_id=payload.student_id,
                    amount=payload.amount,
                    due_date=payload.due_date,
                    issue_date=payload.issue_date,
                    status=payload.status,
                    items=[InvoiceItem(**item.model_dump()) for item in payload.items],
                    payment_method=payload.payment_method,
                    last_modified_by=payload.created_by,
                ),
            )
            await self.audit_repository.create_audit_log(
                actor_id=payload.created_by,
                action="billing.invoice.create",
                entity_type="invoice",
                entity_id=invoice.id,
                payload={
                    "student_id": invoice.student_id,
                    "amount": str(invoice.amount),
                    "status": invoice.status.value,
                },
            )
        return invoice

    async def get_invoice(self, invoice_id: str) -> Invoice:
        return await self._get_invoice_or_raise(invoice_id)

    async def list_invoices(
        self,
        limit: int,
        offset: int,
        *,
        parent_id: str | None = None,
        student_id: str | None = None,
        status: InvoiceStatusEnum | None = None,
    ) -> tuple[list[Invoice], int]:
        """List invoices, newest first."""
        return await self.repository.list_invoices(
            limit=limit,
            offset=offset,
            parent_id=parent_id,
            student_id=student_id,
            status=status,
        )

    async def update_invoice(self, invoice_id: str, payload: InvoiceUpdate) -> Invoice:
        """Apply partial update to invoice details."""
        async with self.repository.transaction():
            invoice = await self._get_invoice_or_raise(invoice_id)
            changes = payload.model_dump(exclude_none=True, exclude={"modified_by", "items"})
            if payload.items is not None:
                changes["items"] = [InvoiceItem(**item.model_dump()) for item in payload.items]

            due_date = changes.get("due_date", invoice.due_date)
            issue_date = changes.get("issue_date", invoice.issue_date)
            if due_date < issue_date:
                raise BusinessRuleException("due_date must not be before issue_date")

            invoice = await self.repository.update_invoice(
                invoice,
                **changes,
                last_modified=utc_now(),
                last_modified_by=payload.modified_by,
            )
            await self.audit_repository.create_audit_log(
                actor_id=payload.modified_by,
                action="billing.invoice.update",
                entity_type="invoice",
                entity_id=invoice.id,
                payload={"fields": sorted(changes)},
            )
        return invoice

    async def delete_invoice(self, invoice_id: str) -> None:
        """Delete invoice. Its payment records stay in the history."""
        async with self.repository.transaction():
            invoice = await self._get_invoice_or_raise(invoice_id)
            await self.repository.delete_invoice(invoice)
            await self.audit_repository.create_audit_log(
                actor_id=None,
                action="billing.invoice.delete",
                entity_type="invoice",
                entity_id=invoice.id,
                payload={"status": invoice.status.value},
            )

    async def update_status(
        self,
        invoice_id: str,
        status: InvoiceStatusEnum,
        actor_id: str,
        comment: str | None = None,
        actor_name: str = SYSTEM_ACTOR_NAME,
    ) -> Invoice:
        """Set invoice status; any transition is accepted."""
        async with self.repository.transaction():
            invoice = await self._get_invoice_or_raise(invoice_id)
            previous_status = invoice.status
            now = utc_now()

            changes: dict = {
                "status": status,
                "last_modified": now,
                "last_modified_by": actor_id,
            }
            if status == InvoiceStatusEnum.PAID and invoice.payment_date is None:
                changes["payment_date"] = now
            await self.repository.update_invoice(invoice, **changes)

            if comment:
                await self.repository.add_comment(
                    invoice,
                    InvoiceComment(
                        comment=comment,
                        type=CommentTypeEnum.SYSTEM,
                        created_by=actor_id,
                        created_by_name=actor_name,
                    ),
                )
            await self.audit_repository.create_audit_log(
                actor_id=actor_id,
                action="billing.invoice.status",
                entity_type="invoice",
                entity_id=invoice.id,
                payload={"from": previous_status.value, "to": status.value},
            )
        return invoice

    async def record_payment(self, invoice_id: str, payload: PaymentCreate) -> Invoice:
        """Append payment record and derive invoice status from the full history."""
        async with self.repository.transaction():
            invoice = await self._get_invoice_or_raise(invoice_id)
            payment = await self.repository.add_payment(
                PaymentRecord(
                    invoice_id=invoice.id,
                    amount=payload.amount,
                    payment_date=payload.payment_date,
                    payment_method=payload.payment_method,
                    reference=payload.reference,
                    notes=payload.notes,
                    created_by=payload.created_by,
                ),
            )

            total_paid = await self.repository.total_paid(invoice.id)
            changes: dict = {"total_paid": total_paid}
            if total_paid >= invoice.amount:
                changes["status"] = InvoiceStatusEnum.PAID
                changes["payment_date"] = utc_now()
            elif total_paid > 0:
                changes["status"] = InvoiceStatusEnum.PARTIAL
            await self.repository.update_invoice(invoice, **changes)

            await self.repository.add_comment(
                invoice,
                InvoiceComment(
                    comment=_payment_comment_text(payment),
                    type=CommentTypeEnum.PAYMENT,
                    created_by=payload.created_by,
                    created_by_name=payload.created_by_name,
                ),
            )
            await self.audit_repository.create_audit_log(
                actor_id=payload.created_by,
                action="billing.payment.record",
                entity_type="invoice",
                entity_id=invoice.id,
                payload={
                    "payment_id": payment.id,
                    "amount": str(payment.amount),
                    "total_paid": str(total_paid),
                    "status": invoice.status.value,
                },
            )
        PAYMENTS_RECORDED_TOTAL.labels(invoice_status=invoice.status.value).inc()
        logger.info(
            "Recorded payment %s on invoice %s, total paid %s",
            payment.id,
            invoice.id,
            total_paid,
        )
        return invoice

    async def add_comment(
        self,
        invoice_id: str,
        text: str,
        comment_type: CommentTypeEnum,
        actor_id: str,
        actor_name: str,
    ) -> Invoice:
        """Append comment without touching status."""
        async with self.repository.transaction():
            invoice = await self._get_invoice_or_raise(invoice_id)
            await self.repository.add_comment(
                invoice,
                InvoiceComment(
                    comment=text,
                    type=comment_type,
                    created_by=actor_id,
                    created_by_name=actor_name,
                ),
            )
            await self.audit_repository.create_audit_log(
                actor_id=actor_id,
                action="billing.invoice.comment",
                entity_type="invoice",
                entity_id=invoice.id,
                payload={"type": comment_type.value},
            )
        return invoice

    async def send_reminder(self, invoice_id: str) -> Invoice:
        """Log a payment reminder on the invoice. Delivery happens elsewhere."""
        return await self.add_comment(
            invoice_id,
            REMINDER_TEXT,
            CommentTypeEnum.REMINDER,
            SYSTEM_ACTOR_ID,
            SYSTEM_ACTOR_NAME,
        )

    async def get_payment_history(self, invoice_id: str | None = None) -> list[PaymentRecord]:
        """Payments for one invoice, or all, newest first."""
        return await self.repository.list_payments(invoice_id)

    async def get_billing_stats(self, start: date, end: date) -> BillingStatsRead:
        """Aggregate invoices issued between ``start`` and ``end`` inclusive.

        An inverted range matches nothing and yields zero totals.
        """
        today = utc_now().date()
        invoices = [
            invoice
            for invoice in await self.repository.list_all_invoices()
            if start <= invoice.issue_date <= end
        ]
        paid = [item for item in invoices if item.status == InvoiceStatusEnum.PAID]
        pending = [item for item in invoices if item.status == InvoiceStatusEnum.PENDING]
        overdue = [item for item in pending if item.due_date < today]

        def total(items: list[Invoice]) -> Decimal:
            return sum((item.amount for item in items), Decimal("0"))

        return BillingStatsRead(
            total_invoices=len(invoices),
            total_amount=total(invoices),
            paid_amount=total(paid),
            paid_count=len(paid),
            pending_amount=total(pending),
            pending_count=len(pending),
            overdue_amount=total(overdue),
            overdue_count=len(overdue),
        )


async def get_billing_service(store: InMemoryStore = Depends(get_store)) -> BillingService:
    """Dependency provider for billing service."""
    return BillingService(
        repository=BillingRepository(store),
        audit_repository=AuditRepository(store),
    )
