import uuid

from django.db import models
from django.db.models import F, Q

from core.models import Account, Device, Employee


class LiveStatus(models.TextChoices):
    SMOOTH = "smooth", "Smooth"
    DEAD_RELIVE = "dead_relive", "Dead/Relive"


class DailyReport(models.Model):
    """One device's shift entry in an employee's daily sales journal.

    Rows are append-only: they are inserted once per submission and never updated.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    employee = models.ForeignKey(Employee, on_delete=models.PROTECT, related_name="daily_reports")
    report_date = models.DateField()
    device = models.ForeignKey(Device, on_delete=models.PROTECT, related_name="daily_reports")
    account = models.ForeignKey(Account, on_delete=models.PROTECT, related_name="daily_reports")
    shift_number = models.PositiveSmallIntegerField()
    live_status = models.CharField(max_length=16, choices=LiveStatus.choices, default=LiveStatus.SMOOTH)
    product_category = models.CharField(max_length=255)
    opening_balance = models.DecimalField(max_digits=14, decimal_places=2, default=0)
    closing_balance = models.DecimalField(max_digits=14, decimal_places=2)
    total_sales = models.DecimalField(max_digits=14, decimal_places=2)
    notes = models.TextField(blank=True)
    submitted_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-report_date", "shift_number"]
        indexes = [
            models.Index(fields=["employee", "report_date"], name="reports_employee_date_idx"),
            models.Index(fields=["device", "report_date", "shift_number"], name="reports_device_shift_idx"),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=["employee", "report_date", "device", "shift_number"],
                name="uniq_daily_report_shift",
            ),
            models.CheckConstraint(
                condition=Q(closing_balance__gte=F("opening_balance")),
                name="daily_report_closing_gte_opening",
            ),
            models.CheckConstraint(condition=Q(opening_balance__gte=0), name="daily_report_opening_non_negative"),
            models.CheckConstraint(condition=Q(shift_number__gte=1), name="daily_report_shift_positive"),
        ]

    def __str__(self):
        return f"{self.report_date} shift {self.shift_number} ({self.device_id})"
