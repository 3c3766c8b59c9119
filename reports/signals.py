from django.dispatch import Signal

# Sent once a daily report batch has been committed.
# Keyword arguments: employee_id, report_date, submitted_at, reports.
daily_report_submitted = Signal()
