import uuid

import django.db.models.deletion
from django.db import migrations, models
from django.db.models import F, Q


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("core", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="DailyReport",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("report_date", models.DateField()),
                ("shift_number", models.PositiveSmallIntegerField()),
                (
                    "live_status",
                    models.CharField(
                        choices=[("smooth", "Smooth"), ("dead_relive", "Dead/Relive")],
                        default="smooth",
                        max_length=16,
                    ),
                ),
                ("product_category", models.CharField(max_length=255)),
                ("opening_balance", models.DecimalField(decimal_places=2, default=0, max_digits=14)),
                ("closing_balance", models.DecimalField(decimal_places=2, max_digits=14)),
                ("total_sales", models.DecimalField(decimal_places=2, max_digits=14)),
                ("notes", models.TextField(blank=True)),
                ("submitted_at", models.DateTimeField(auto_now_add=True)),
                (
                    "account",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="daily_reports",
                        to="core.account",
                    ),
                ),
                (
                    "device",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="daily_reports",
                        to="core.device",
                    ),
                ),
                (
                    "employee",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="daily_reports",
                        to="core.employee",
                    ),
                ),
            ],
            options={
                "ordering": ["-report_date", "shift_number"],
                "indexes": [
                    models.Index(fields=["employee", "report_date"], name="reports_employee_date_idx"),
                    models.Index(fields=["device", "report_date", "shift_number"], name="reports_device_shift_idx"),
                ],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("employee", "report_date", "device", "shift_number"),
                        name="uniq_daily_report_shift",
                    ),
                    models.CheckConstraint(
                        condition=Q(closing_balance__gte=F("opening_balance")),
                        name="daily_report_closing_gte_opening",
                    ),
                    models.CheckConstraint(condition=Q(opening_balance__gte=0), name="daily_report_opening_non_negative"),
                    models.CheckConstraint(condition=Q(shift_number__gte=1), name="daily_report_shift_positive"),
                ],
            },
        ),
    ]
