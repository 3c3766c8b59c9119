from decimal import Decimal

from django.utils import timezone
from django.utils.translation import gettext as _
from rest_framework import serializers

from common.utils import format_currency
from core.models import Account, Device
from reports.batch import DailyReportEntry, max_entries
from reports.exceptions import BatchLimitExceeded
from reports.models import DailyReport, LiveStatus

MONEY_FIELD = {"max_digits": 14, "decimal_places": 2}


class DailyReportEntrySerializer(serializers.Serializer):
    """One device row of the daily report form.

    Every field may arrive empty; completeness is judged by the batch so that all
    incomplete rows are reported together.
    """

    shift = serializers.CharField(required=False, allow_blank=True, allow_null=True, default=None)
    device_id = serializers.PrimaryKeyRelatedField(
        queryset=Device.objects.filter(is_active=True), required=False, allow_null=True, default=None
    )
    account_id = serializers.PrimaryKeyRelatedField(
        queryset=Account.objects.all(), required=False, allow_null=True, default=None
    )
    live_status = serializers.ChoiceField(
        choices=LiveStatus.choices, required=False, allow_blank=True, allow_null=True, default=None
    )
    product_category = serializers.CharField(
        max_length=255, required=False, allow_blank=True, allow_null=True, default=""
    )
    opening_balance = serializers.DecimalField(default=Decimal("0"), **MONEY_FIELD)
    closing_balance = serializers.DecimalField(default=Decimal("0"), **MONEY_FIELD)

    def validate(self, attrs):
        employee = self.context.get("employee")
        device = attrs.get("device_id")
        account = attrs.get("account_id")
        if employee is not None:
            if device is not None and device.group_id != employee.group_id:
                raise serializers.ValidationError({"device_id": "Device is not allocated to your group."})
            if account is not None and account.group_id != employee.group_id:
                raise serializers.ValidationError({"account_id": "Account is not allocated to your group."})
        return attrs

    def to_entry(self, attrs) -> DailyReportEntry:
        device = attrs.get("device_id")
        account = attrs.get("account_id")
        return DailyReportEntry(
            device_id=device.id if device is not None else None,
            account_id=account.id if account is not None else None,
            shift=attrs.get("shift"),
            live_status=attrs.get("live_status") or None,
            product_category=attrs.get("product_category") or "",
            opening_balance=attrs.get("opening_balance"),
            closing_balance=attrs.get("closing_balance"),
        )


class DailyReportSubmitSerializer(serializers.Serializer):
    report_date = serializers.DateField(default=timezone.localdate)
    notes = serializers.CharField(required=False, allow_blank=True, default="")
    entries = DailyReportEntrySerializer(many=True, allow_empty=False)

    def to_internal_value(self, data):
        # The cap is checked before any row so an oversized batch is never reported row by row.
        entries = data.get("entries") if hasattr(data, "get") else None
        limit = max_entries()
        if isinstance(entries, list) and len(entries) > limit:
            raise BatchLimitExceeded(
                _("A daily report can hold at most %(limit)d device reports.") % {"limit": limit},
                errors={"entries": [{"count": len(entries), "limit": limit}]},
            )
        return super().to_internal_value(data)

    def to_entries(self):
        child = self.fields["entries"].child
        return [child.to_entry(attrs) for attrs in self.validated_data["entries"]]


class OpeningBalanceQuerySerializer(serializers.Serializer):
    shift = serializers.CharField(required=False, allow_blank=True, default="")
    live_status = serializers.CharField(required=False, allow_blank=True, default="")
    device_id = serializers.UUIDField(required=False, allow_null=True, default=None)
    report_date = serializers.DateField(default=timezone.localdate)


class OpeningBalanceSerializer(serializers.Serializer):
    opening_balance = serializers.DecimalField(source="amount", read_only=True, **MONEY_FIELD)
    opening_balance_display = serializers.SerializerMethodField()
    editable = serializers.BooleanField(read_only=True)
    locked = serializers.BooleanField(read_only=True)
    warning = serializers.CharField(read_only=True, allow_null=True)
    warning_code = serializers.CharField(read_only=True, allow_null=True)

    def get_opening_balance_display(self, obj):
        return format_currency(obj.amount)


class DailyReportSerializer(serializers.ModelSerializer):
    employee_name = serializers.CharField(source="employee.user.display_name", read_only=True)
    device_identifier = serializers.CharField(source="device.identifier", read_only=True)
    account_username = serializers.CharField(source="account.username", read_only=True)
    total_sales_display = serializers.SerializerMethodField()

    class Meta:
        model = DailyReport
        fields = [
            "id",
            "employee",
            "employee_name",
            "report_date",
            "shift_number",
            "device",
            "device_identifier",
            "account",
            "account_username",
            "live_status",
            "product_category",
            "opening_balance",
            "closing_balance",
            "total_sales",
            "total_sales_display",
            "notes",
            "submitted_at",
        ]
        read_only_fields = fields

    def get_total_sales_display(self, obj):
        return format_currency(obj.total_sales)
