"""Billing repository layer."""

from __future__ import annotations

from decimal import Decimal

from academy.core.enums import InvoiceStatusEnum
from academy.core.store import StoreRepository
from academy.modules.billing.models import Invoice, InvoiceComment, PaymentRecord
from academy.shared.pagination import paginate
from academy.shared.utils import utc_now


class BillingRepository(StoreRepository):
    """Store operations for invoices and the payment history."""

    async def add_invoice(self, invoice: Invoice) -> Invoice:
        self.store.invoices[invoice.id] = invoice
        return invoice

    async def get_invoice_by_id(self, invoice_id: str) -> Invoice | None:
        return self.store.invoices.get(invoice_id)

    async def list_invoices(
        self,
        limit: int,
        offset: int,
        *,
        parent_id: str | None = None,
        student_id: str | None = None,
        status: InvoiceStatusEnum | None = None,
    ) -> tuple[list[Invoice], int]:
        items = [
            item
            for item in self.store.invoices.values()
            if (parent_id is None or item.parent_id == parent_id)
            and (student_id is None or item.student_id == student_id)
            and (status is None or item.status == status)
        ]
        items.sort(key=lambda item: item.created_at, reverse=True)
        return paginate(items, limit, offset)

    async def list_all_invoices(self) -> list[Invoice]:
        return list(self.store.invoices.values())

    async def update_invoice(self, invoice: Invoice, **changes) -> Invoice:
        for key, value in changes.items():
            setattr(invoice, key, value)
        invoice.updated_at = utc_now()
        return invoice

    async def add_comment(self, invoice: Invoice, comment: InvoiceComment) -> Invoice:
        invoice.comments.append(comment)
        invoice.updated_at = utc_now()
        return invoice

    async def delete_invoice(self, invoice: Invoice) -> None:
        self.store.invoices.pop(invoice.id, None)

    async def add_payment(self, payment: PaymentRecord) -> PaymentRecord:
        self.store.payments.append(payment)
        return payment

    async def total_paid(self, invoice_id: str) -> Decimal:
        return sum(
            (payment.amount for payment in self.store.payments if payment.invoice_id == invoice_id),
            Decimal("0"),
        )

    async def list_payments(self, invoice_id: str | None = None) -> list[PaymentRecord]:
        """Return payments newest first; equal timestamps keep latest-recorded first."""
        items = [
            payment
            for payment in reversed(self.store.payments)
            if invoice_id is None or payment.invoice_id == invoice_id
        ]
        items.sort(key=lambda payment: payment.created_at, reverse=True)
        return items
