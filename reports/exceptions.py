from django.utils.translation import gettext_lazy as _
from rest_framework import status

from common.exceptions import DomainError


class DailyReportRejected(DomainError):
    default_code = "daily_report_invalid"
    default_detail = _("The daily report has problems that must be fixed before it can be submitted.")


class BatchLimitExceeded(DomainError):
    default_code = "batch_limit_exceeded"
    default_detail = _("A daily report has too many device reports.")


class DuplicateShiftReport(DomainError):
    status_code = status.HTTP_409_CONFLICT
    default_code = "duplicate_shift_report"
    default_detail = _("A report for this date, device and shift has already been submitted.")


class ReportPersistenceFailed(DomainError):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_code = "persistence_failure"
    default_detail = _("The daily report could not be saved. Nothing was recorded; please try again.")
