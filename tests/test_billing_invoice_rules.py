from __future__ import annotations

from datetime import UTC, date, datetime, timedelta
from decimal import Decimal

import pytest

import academy.modules.billing.schemas as billing_schemas_module
import academy.modules.billing.service as billing_service_module
from academy.core.enums import CommentTypeEnum, InvoiceStatusEnum
from academy.core.store import InMemoryStore
from academy.modules.audit.repository import AuditRepository
from academy.modules.billing.repository import BillingRepository
from academy.modules.billing.schemas import (
    InvoiceCreate,
    InvoiceRead,
    InvoiceUpdate,
    PaymentCreate,
)
from academy.modules.billing.service import BillingService
from academy.shared.exceptions import NotFoundException

NOW = datetime(2025, 3, 15, 12, 0, tzinfo=UTC)


def _make_service(store: InMemoryStore) -> BillingService:
    return BillingService(
        repository=BillingRepository(store),
        audit_repository=AuditRepository(store),
    )


async def _create_invoice(
    service: BillingService,
    amount: str = "350",
    *,
    issue_date: date = date(2025, 3, 1),
    due_date: date = date(2025, 3, 31),
    status: InvoiceStatusEnum = InvoiceStatusEnum.PENDING,
):
    return await service.create_invoice(
        InvoiceCreate(
            parent_id="parent-1",
            student_id="student-1",
            amount=Decimal(amount),
            issue_date=issue_date,
            due_date=due_date,
            status=status,
        ),
    )


def _payment(amount: str, method: str = "cash", reference: str | None = None) -> PaymentCreate:
    return PaymentCreate(
        amount=Decimal(amount),
        payment_date=date(2025, 3, 10),
        payment_method=method,
        reference=reference,
        created_by="admin-1",
        created_by_name="Admin User",
    )


@pytest.fixture
def frozen_now(monkeypatch: pytest.MonkeyPatch) -> datetime:
    monkeypatch.setattr(billing_service_module, "utc_now", lambda: NOW)
    monkeypatch.setattr(billing_schemas_module, "utc_now", lambda: NOW)
    return NOW


@pytest.mark.asyncio
async def test_partial_then_full_payment_moves_invoice_to_paid(frozen_now: datetime) -> None:
    service = _make_service(InMemoryStore())
    invoice = await _create_invoice(service)

    await service.record_payment(invoice.id, _payment("150", reference="TX-1"))
    assert invoice.status == InvoiceStatusEnum.PARTIAL
    assert invoice.total_paid == Decimal("150")
    assert invoice.payment_date is None

    await service.record_payment(invoice.id, _payment("200"))
    assert invoice.status == InvoiceStatusEnum.PAID
    assert invoice.total_paid == Decimal("350")
    assert invoice.payment_date == frozen_now

    payment_comments = [item for item in invoice.comments if item.type == CommentTypeEnum.PAYMENT]
    assert [item.comment for item in payment_comments] == [
        "Payment of 150 received via cash (Ref: TX-1)",
        "Payment of 200 received via cash",
    ]
    assert payment_comments[0].created_by_name == "Admin User"


@pytest.mark.asyncio
async def test_total_paid_does_not_depend_on_payment_order(frozen_now: datetime) -> None:
    first_service = _make_service(InMemoryStore())
    second_service = _make_service(InMemoryStore())
    first = await _create_invoice(first_service, "300")
    second = await _create_invoice(second_service, "300")

    for amount in ("100", "50", "25"):
        await first_service.record_payment(first.id, _payment(amount))
    for amount in ("25", "100", "50"):
        await second_service.record_payment(second.id, _payment(amount))

    assert first.total_paid == second.total_paid == Decimal("175")
    assert first.status == second.status == InvoiceStatusEnum.PARTIAL


@pytest.mark.asyncio
async def test_overpayment_marks_invoice_paid(frozen_now: datetime) -> None:
    service = _make_service(InMemoryStore())
    invoice = await _create_invoice(service, "150")

    await service.record_payment(invoice.id, _payment("200", method="card"))

    assert invoice.status == InvoiceStatusEnum.PAID
    assert invoice.total_paid == Decimal("200")


@pytest.mark.asyncio
async def test_record_payment_for_unknown_invoice_raises_not_found() -> None:
    store = InMemoryStore()
    service = _make_service(store)

    with pytest.raises(NotFoundException):
        await service.record_payment("missing", _payment("10"))
    assert store.payments == []


@pytest.mark.asyncio
async def test_update_status_stamps_actor_and_adds_system_comment(frozen_now: datetime) -> None:
    service = _make_service(InMemoryStore())
    invoice = await _create_invoice(service, status=InvoiceStatusEnum.DRAFT)

    await service.update_status(
        invoice.id,
        InvoiceStatusEnum.PAID,
        "admin-1",
        comment="Paid at the front desk",
        actor_name="Admin User",
    )

    assert invoice.status == InvoiceStatusEnum.PAID
    assert invoice.last_modified == frozen_now
    assert invoice.last_modified_by == "admin-1"
    assert invoice.payment_date == frozen_now
    assert invoice.comments[-1].type == CommentTypeEnum.SYSTEM
    assert invoice.comments[-1].comment == "Paid at the front desk"


@pytest.mark.asyncio
async def test_update_status_accepts_any_transition_without_comment() -> None:
    service = _make_service(InMemoryStore())
    invoice = await _create_invoice(service)
    await service.update_status(invoice.id, InvoiceStatusEnum.CANCELLED, "admin-1")

    await service.update_status(invoice.id, InvoiceStatusEnum.SENT, "admin-1")

    assert invoice.status == InvoiceStatusEnum.SENT
    assert invoice.comments == []


@pytest.mark.asyncio
async def test_payment_history_is_newest_first_and_survives_invoice_delete() -> None:
    store = InMemoryStore()
    service = _make_service(store)
    invoice = await _create_invoice(service)
    other = await _create_invoice(service, "150")
    await service.record_payment(invoice.id, _payment("10"))
    await service.record_payment(other.id, _payment("20"))
    await service.record_payment(invoice.id, _payment("30"))

    history = await service.get_payment_history(invoice.id)
    assert [item.amount for item in history] == [Decimal("30"), Decimal("10")]

    await service.delete_invoice(invoice.id)
    everything = await service.get_payment_history()
    assert [item.amount for item in everything] == [Decimal("30"), Decimal("20"), Decimal("10")]


@pytest.mark.asyncio
async def test_billing_stats_uses_inclusive_issue_date_range(frozen_now: datetime) -> None:
    service = _make_service(InMemoryStore())
    await _create_invoice(service, "100", issue_date=date(2025, 3, 1), due_date=date(2025, 3, 10))
    await _create_invoice(service, "200", issue_date=date(2025, 3, 31), due_date=date(2025, 4, 30))
    paid = await _create_invoice(service, "50", issue_date=date(2025, 3, 5))
    await service.record_payment(paid.id, _payment("50"))
    await _create_invoice(service, "999", issue_date=date(2025, 4, 1), due_date=date(2025, 4, 2))

    stats = await service.get_billing_stats(date(2025, 3, 1), date(2025, 3, 31))

    assert stats.total_invoices == 3
    assert stats.total_amount == Decimal("350")
    assert (stats.paid_count, stats.paid_amount) == (1, Decimal("50"))
    assert (stats.pending_count, stats.pending_amount) == (2, Decimal("300"))
    assert (stats.overdue_count, stats.overdue_amount) == (1, Decimal("100"))


@pytest.mark.asyncio
async def test_send_reminder_appends_system_authored_comment() -> None:
    service = _make_service(InMemoryStore())
    invoice = await _create_invoice(service)

    await service.send_reminder(invoice.id)

    comment = invoice.comments[-1]
    assert comment.type == CommentTypeEnum.REMINDER
    assert comment.comment == "Payment reminder sent to parent"
    assert comment.created_by == "system"
    assert invoice.status == InvoiceStatusEnum.PENDING


@pytest.mark.asyncio
async def test_invoice_read_derives_overdue_flag(frozen_now: datetime) -> None:
    service = _make_service(InMemoryStore())
    late = await _create_invoice(service, due_date=frozen_now.date() - timedelta(days=1))
    on_time = await _create_invoice(service, due_date=frozen_now.date())

    assert InvoiceRead.model_validate(late).is_overdue is True
    assert InvoiceRead.model_validate(on_time).is_overdue is False
    assert late.status == InvoiceStatusEnum.PENDING

    await service.update_status(late.id, InvoiceStatusEnum.PAID, "admin-1")
    assert InvoiceRead.model_validate(late).is_overdue is False


@pytest.mark.asyncio
async def test_billing_stats_with_inverted_range_is_empty() -> None:
    service = _make_service(InMemoryStore())
    await _create_invoice(service, "100", issue_date=date(2025, 3, 5))

    stats = await service.get_billing_stats(date(2025, 3, 31), date(2025, 3, 1))

    assert stats.total_invoices == 0
    assert stats.total_amount == Decimal("0")
    assert (stats.paid_count, stats.pending_count, stats.overdue_count) == (0, 0, 0)


@pytest.mark.asyncio
async def test_add_comment_appends_without_touching_status() -> None:
    store = InMemoryStore()
    service = _make_service(store)
    invoice = await _create_invoice(service, status=InvoiceStatusEnum.SENT)
    before = len(invoice.comments)

    await service.add_comment(
        invoice.id,
        "Parent asked for a split payment",
        CommentTypeEnum.GENERAL,
        "admin-1",
        "Admin User",
    )

    assert len(invoice.comments) == before + 1
    comment = invoice.comments[-1]
    assert comment.type == CommentTypeEnum.GENERAL
    assert comment.created_by == "admin-1"
    assert invoice.status == InvoiceStatusEnum.SENT
    assert store.audit_logs[-1].action == "billing.invoice.comment"
    assert store.audit_logs[-1].actor_id == "admin-1"


@pytest.mark.asyncio
async def test_send_reminder_and_invoice_update_are_audited() -> None:
    store = InMemoryStore()
    service = _make_service(store)
    invoice = await _create_invoice(service)

    await service.send_reminder(invoice.id)
    await service.update_invoice(
        invoice.id,
        InvoiceUpdate(amount=Decimal("400"), modified_by="admin-1"),
    )

    reminder_log, update_log = store.audit_logs[-2:]
    assert reminder_log.action == "billing.invoice.comment"
    assert reminder_log.payload == {"type": CommentTypeEnum.REMINDER.value}
    assert update_log.action == "billing.invoice.update"
    assert update_log.actor_id == "admin-1"
    assert update_log.payload == {"fields": ["amount"]}
    assert invoice.amount == Decimal("400")


@pytest.mark.asyncio
async def test_list_invoices_filters_by_status() -> None:
    service = _make_service(InMemoryStore())
    pending = await _create_invoice(service)
    sent = await _create_invoice(service, status=InvoiceStatusEnum.SENT)

    items, total = await service.list_invoices(10, 0, status=InvoiceStatusEnum.SENT)
    assert (items, total) == ([sent], 1)

    items, total = await service.list_invoices(10, 0, status=InvoiceStatusEnum.PENDING)
    assert (items, total) == ([pending], 1)

    _, total = await service.list_invoices(10, 0, student_id="student-1")
    assert total == 2
