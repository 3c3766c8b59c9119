from django.dispatch import receiver

from attendance.services import record_check_out
from reports.signals import daily_report_submitted


@receiver(daily_report_submitted, dispatch_uid="attendance.close_day_on_daily_report")
def close_day_on_daily_report(sender, employee_id, report_date, submitted_at=None, **kwargs):
    record_check_out(employee_id, report_date, at=submitted_at)
