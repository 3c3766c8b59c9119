from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from django.db import DatabaseError, IntegrityError, transaction
from django.db.models import Q
from django.utils.translation import gettext as _

from common.audit import create_audit_log_from_request
from core.services import resolve_employee_for_user
from reports.balance import OpeningBalance, resolve_opening_balance
from reports.batch import DailyReportBatch, DailyReportEntry
from reports.exceptions import DailyReportRejected, DuplicateShiftReport, ReportPersistenceFailed
from reports.models import DailyReport
from reports.signals import daily_report_submitted

logger = logging.getLogger(__name__)


@dataclass
class SubmissionResult:
    reports: list[DailyReport]
    total_sales: Decimal
    check_out_recorded: bool
    message: str


def find_prior_closing_balance(device_id, report_date: date, shift_number: int) -> Decimal | None:
    """Closing balance of ``shift_number`` for a device on a date, whoever reported it."""
    return (
        DailyReport.objects.filter(device_id=device_id, report_date=report_date, shift_number=shift_number)
        .order_by("-submitted_at")
        .values_list("closing_balance", flat=True)
        .first()
    )


def resolve_entry_opening_balance(entry: DailyReportEntry, report_date: date) -> OpeningBalance:
    return resolve_opening_balance(
        shift=entry.shift,
        live_status=entry.live_status,
        device_id=entry.device_id,
        report_date=report_date,
        find_prior_closing_balance=find_prior_closing_balance,
    )


def _already_reported(employee, batch: DailyReportBatch) -> bool:
    keys = Q()
    for entry in batch.entries:
        keys |= Q(device_id=entry.device_id, shift_number=entry.shift_number)
    return DailyReport.objects.filter(keys, employee=employee, report_date=batch.report_date).exists()


def _notify_submitted(*, employee, batch, reports) -> bool:
    """Send daily_report_submitted; False when any receiver raised."""
    responses = daily_report_submitted.send_robust(
        sender=DailyReport,
        employee_id=employee.id,
        report_date=batch.report_date,
        submitted_at=reports[0].submitted_at,
        reports=reports,
    )
    delivered = True
    for receiver, response in responses:
        if isinstance(response, Exception):
            delivered = False
            logger.error(
                "daily_report_receiver_failed receiver=%s",
                getattr(receiver, "__qualname__", repr(receiver)),
                exc_info=response,
                extra={"employee_id": str(employee.id), "report_date": batch.report_date},
            )
    return delivered


def submit_daily_report(*, user, report_date: date, entries, notes: str = "", request=None) -> SubmissionResult:
    """Validate and store one employee's daily report, then close the day's attendance.

    The caller passes the authenticated ``user`` explicitly. Nothing is written
    unless every entry is valid, and the whole batch goes in with one insert.
    """
    employee = resolve_employee_for_user(user)
    batch = DailyReportBatch(employee_id=employee.id, report_date=report_date, notes=notes or "", entries=list(entries))
    log_context = {
        "employee_id": str(employee.id),
        "report_date": report_date,
        "entry_count": len(batch.entries),
    }

    errors = batch.validate(resolve=resolve_entry_opening_balance)
    if errors:
        logger.info("daily_report_rejected", extra=log_context)
        raise DailyReportRejected(errors=[error.as_dict() for error in errors])

    rows = [
        DailyReport(
            employee=employee,
            report_date=batch.report_date,
            device_id=entry.device_id,
            account_id=entry.account_id,
            shift_number=entry.shift_number,
            live_status=entry.live_status,
            product_category=entry.product_category.strip(),
            opening_balance=entry.opening_balance,
            closing_balance=entry.closing_balance,
            total_sales=entry.total_sales,
            notes=batch.notes,
        )
        for entry in batch.entries
    ]

    try:
        with transaction.atomic():
            reports = DailyReport.objects.bulk_create(rows)
            create_audit_log_from_request(
                request,
                actor=user,
                action="daily_report.submit",
                entity="daily_report",
                after_snapshot={
                    "employee_id": employee.id,
                    "report_date": batch.report_date,
                    "report_ids": [report.id for report in reports],
                    "total_sales": batch.total_sales,
                },
            )
    except IntegrityError as exc:
        if _already_reported(employee, batch):
            logger.warning("daily_report_duplicate", extra=log_context)
            raise DuplicateShiftReport() from exc
        logger.exception("daily_report_persist_failed", extra=log_context)
        raise ReportPersistenceFailed(str(exc)) from exc
    except DatabaseError as exc:
        logger.exception("daily_report_persist_failed", extra=log_context)
        raise ReportPersistenceFailed(str(exc)) from exc

    logger.info("daily_report_submitted", extra={**log_context, "total_sales": batch.total_sales})

    # Rows are committed here; receivers see them and run in their own transactions.
    check_out_recorded = _notify_submitted(employee=employee, batch=batch, reports=reports)
    if check_out_recorded:
        message = _("Daily report submitted. Your check-out for today has been recorded automatically.")
    else:
        message = _(
            "Daily report submitted, but your check-out could not be recorded. Please contact your leader."
        )
    return SubmissionResult(
        reports=reports,
        total_sales=batch.total_sales,
        check_out_recorded=check_out_recorded,
        message=message,
    )
