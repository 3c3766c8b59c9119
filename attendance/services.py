import logging

from django.db import IntegrityError, transaction
from django.utils import timezone
from django.utils.translation import gettext_lazy as _
from rest_framework import status

from attendance.models import AttendanceRecord
from common.exceptions import DomainError

logger = logging.getLogger(__name__)

HISTORY_LIMIT = 10


class AlreadyCheckedIn(DomainError):
    status_code = status.HTTP_409_CONFLICT
    default_code = "already_checked_in"
    default_detail = _("You have already checked in today.")


class DayAlreadyClosed(DomainError):
    status_code = status.HTTP_409_CONFLICT
    default_code = "day_already_closed"
    default_detail = _("Your daily report already closed today's attendance, so you can no longer check in.")


def today_record(employee, day=None):
    day = day or timezone.localdate()
    return AttendanceRecord.objects.filter(employee=employee, attendance_date=day).first()


def recent_history(employee, limit=HISTORY_LIMIT):
    return list(AttendanceRecord.objects.filter(employee=employee).order_by("-attendance_date")[:limit])


def check_in(employee, *, at=None):
    at = at or timezone.now()
    day = timezone.localdate(at)
    try:
        with transaction.atomic():
            record = AttendanceRecord.objects.create(
                employee=employee,
                attendance_date=day,
                check_in=at,
                status=AttendanceRecord.Status.PRESENT,
            )
    except IntegrityError as exc:
        existing = today_record(employee, day)
        if existing is not None and existing.check_in is None:
            raise DayAlreadyClosed() from exc
        raise AlreadyCheckedIn() from exc

    logger.info("attendance_checked_in", extra={"employee_id": str(employee.id), "report_date": day})
    return record


def record_check_out(employee_id, day, *, at=None):
    """Close the employee's attendance for ``day``; a closed day is left as it is."""
    at = at or timezone.now()
    with transaction.atomic():
        record, created = AttendanceRecord.objects.select_for_update().get_or_create(
            employee_id=employee_id,
            attendance_date=day,
            defaults={"check_out": at, "status": AttendanceRecord.Status.PRESENT},
        )
        if created:
            logger.warning(
                "attendance_checkout_without_checkin",
                extra={"employee_id": str(employee_id), "report_date": day},
            )
            return record

        if record.check_out is not None:
            return record

        record.check_out = at
        record.save(update_fields=["check_out", "updated_at"])

    logger.info("attendance_checkout_recorded", extra={"employee_id": str(employee_id), "report_date": day})
    return record
