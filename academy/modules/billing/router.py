"""Billing API router."""

from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, Query, Response, status

from academy.core.enums import InvoiceStatusEnum
from academy.modules.billing.schemas import (
    BillingStatsRead,
    InvoiceCommentCreate,
    InvoiceCreate,
    InvoiceRead,
    InvoiceStatusUpdate,
    InvoiceUpdate,
    PaymentCreate,
    PaymentRead,
)
from academy.modules.billing.service import BillingService, get_billing_service
from academy.shared.pagination import Page, build_page, get_pagination_params

router = APIRouter(prefix="/billing", tags=["billing"])


@router.post("/invoices", response_model=InvoiceRead, status_code=status.HTTP_201_CREATED)
async def create_invoice(
    payload: InvoiceCreate,
    service: BillingService = Depends(get_billing_service),
) -> InvoiceRead:
    """Create invoice."""
    invoice = await service.create_invoice(payload)
    return InvoiceRead.model_validate(invoice)


@router.get("/invoices", response_model=Page[InvoiceRead])
async def list_invoices(
    parent_id: str | None = Query(default=None),
    student_id: str | None = Query(default=None),
    invoice_status: InvoiceStatusEnum | None = Query(default=None, alias="status"),
    pagination=Depends(get_pagination_params),
    service: BillingService = Depends(get_billing_service),
) -> Page[InvoiceRead]:
    """List invoices."""
    items, total = await service.list_invoices(
        pagination.limit,
        pagination.offset,
        parent_id=parent_id,
        student_id=student_id,
        status=invoice_status,
    )
    serialized = [InvoiceRead.model_validate(item) for item in items]
    return build_page(serialized, total, pagination)


@router.get("/invoices/{invoice_id}", response_model=InvoiceRead)
async def get_invoice(
    invoice_id: str,
    service: BillingService = Depends(get_billing_service),
) -> InvoiceRead:
    invoice = await service.get_invoice(invoice_id)
    return InvoiceRead.model_validate(invoice)


@router.patch("/invoices/{invoice_id}", response_model=InvoiceRead)
async def update_invoice(
    invoice_id: str,
    payload: InvoiceUpdate,
    service: BillingService = Depends(get_billing_service),
) -> InvoiceRead:
    """Update invoice details."""
    invoice = await service.update_invoice(invoice_id, payload)
    return InvoiceRead.model_validate(invoice)


@router.delete("/invoices/{invoice_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_invoice(
    invoice_id: str,
    service: BillingService = Depends(get_billing_service),
) -> Response:
    await service.delete_invoice(invoice_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.patch("/invoices/{invoice_id}/status", response_model=InvoiceRead)
async def update_invoice_status(
    invoice_id: str,
    payload: InvoiceStatusUpdate,
    service: BillingService = Depends(get_billing_service),
) -> InvoiceRead:
    """Set invoice status, optionally leaving a comment."""
    invoice = await service.update_status(
        invoice_id,
        payload.status,
        payload.actor_id,
        comment=payload.comment,
        actor_name=payload.actor_name,
    )
    return InvoiceRead.model_validate(invoice)


@router.post("/invoices/{invoice_id}/payments", response_model=InvoiceRead)
async def record_payment(
    invoice_id: str,
    payload: PaymentCreate,
    service: BillingService = Depends(get_billing_service),
) -> InvoiceRead:
    """Record payment against invoice."""
    invoice = await service.record_payment(invoice_id, payload)
    return InvoiceRead.model_validate(invoice)


@router.post("/invoices/{invoice_id}/comments", response_model=InvoiceRead)
async def add_invoice_comment(
    invoice_id: str,
    payload: InvoiceCommentCreate,
    service: BillingService = Depends(get_billing_service),
) -> InvoiceRead:
    invoice = await service.add_comment(
        invoice_id,
        payload.comment,
        payload.type,
        payload.actor_id,
        payload.actor_name,
    )
    return InvoiceRead.model_validate(invoice)


@router.post("/invoices/{invoice_id}/reminders", response_model=InvoiceRead)
async def send_invoice_reminder(
    invoice_id: str,
    service: BillingService = Depends(get_billing_service),
) -> InvoiceRead:
    """Send payment reminder to the parent."""
    invoice = await service.send_reminder(invoice_id)
    return InvoiceRead.model_validate(invoice)


@router.get("/payments", response_model=list[PaymentRead])
async def get_payment_history(
    invoice_id: str | None = Query(default=None),
    service: BillingService = Depends(get_billing_service),
) -> list[PaymentRead]:
    """Payment history, newest first."""
    payments = await service.get_payment_history(invoice_id)
    return [PaymentRead.model_validate(payment) for payment in payments]


@router.get("/stats", response_model=BillingStatsRead)
async def get_billing_stats(
    start: date = Query(),
    end: date = Query(),
    service: BillingService = Depends(get_billing_service),
) -> BillingStatsRead:
    """Billing totals for invoices issued in the date range."""
    return await service.get_billing_stats(start, end)
