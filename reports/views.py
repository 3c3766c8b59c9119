import uuid

from django.conf import settings
from django.utils.dateparse import parse_date
from django.utils.translation import gettext as _
from rest_framework import generics, status
from rest_framework.exceptions import ValidationError
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from common.permissions import RoleCapabilityPermission, user_has_capability
from common.utils import format_currency
from core.serializers import AccountOptionSerializer, DeviceOptionSerializer
from core.services import group_accounts, group_devices, resolve_employee_for_user
from reports.balance import resolve_opening_balance
from reports.models import DailyReport, LiveStatus
from reports.serializers import (
    DailyReportSerializer,
    DailyReportSubmitSerializer,
    OpeningBalanceQuerySerializer,
    OpeningBalanceSerializer,
)
from reports.services import find_prior_closing_balance, submit_daily_report


def _uuid_param(params, name):
    value = params.get(name)
    if not value:
        return None
    try:
        return uuid.UUID(value)
    except ValueError as exc:
        raise ValidationError({name: "Must be a valid UUID."}) from exc


class DailyReportListCreateView(generics.ListAPIView):
    serializer_class = DailyReportSerializer
    permission_classes = [IsAuthenticated, RoleCapabilityPermission]
    permission_action_map = {"get": "reports.daily.view", "post": "reports.daily.submit"}

    def get_queryset(self):
        user = self.request.user
        qs = DailyReport.objects.select_related("employee__user", "device", "account")
        if not user_has_capability(user, "reports.daily.view_all"):
            qs = qs.filter(employee__user=user)

        params = self.request.query_params
        report_date = params.get("report_date")
        if report_date:
            parsed = parse_date(report_date)
            if parsed is None:
                raise ValidationError({"report_date": "Use the YYYY-MM-DD format."})
            qs = qs.filter(report_date=parsed)
        for name in ("employee_id", "device_id"):
            value = _uuid_param(params, name)
            if value is not None:
                qs = qs.filter(**{name: value})
        return qs.order_by("-report_date", "shift_number", "submitted_at")

    def post(self, request):
        employee = resolve_employee_for_user(request.user)
        serializer = DailyReportSubmitSerializer(data=request.data, context={"request": request, "employee": employee})
        serializer.is_valid(raise_exception=True)

        result = submit_daily_report(
            user=request.user,
            report_date=serializer.validated_data["report_date"],
            notes=serializer.validated_data["notes"],
            entries=serializer.to_entries(),
            request=request,
        )

        return Response(
            {
                "reports": DailyReportSerializer(result.reports, many=True).data,
                "total_sales": str(result.total_sales),
                "total_sales_display": format_currency(result.total_sales),
                "check_out_recorded": result.check_out_recorded,
                "message": result.message,
            },
            status=status.HTTP_201_CREATED,
        )


class OpeningBalanceView(APIView):
    """Re-run the opening-balance rules for one form row.

    The dashboard calls this whenever shift, live status, device or date changes.
    """

    permission_classes = [IsAuthenticated, RoleCapabilityPermission]
    permission_action_map = {"get": "reports.daily.submit"}

    def get(self, request):
        employee = resolve_employee_for_user(request.user)
        query = OpeningBalanceQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        params = query.validated_data

        device_id = params["device_id"]
        if device_id is not None and device_id not in {device.id for device in group_devices(employee)}:
            raise ValidationError({"device_id": "Device is not allocated to your group."})

        resolved = resolve_opening_balance(
            shift=params["shift"],
            live_status=params["live_status"],
            device_id=params["device_id"],
            report_date=params["report_date"],
            find_prior_closing_balance=find_prior_closing_balance,
        )
        return Response(OpeningBalanceSerializer(resolved).data)


class DailyReportFormOptionsView(APIView):
    permission_classes = [IsAuthenticated, RoleCapabilityPermission]
    permission_action_map = {"get": "reports.daily.submit"}

    def get(self, request):
        employee = resolve_employee_for_user(request.user)
        devices = group_devices(employee)
        accounts = group_accounts(employee)

        warning = None
        if employee.group_id is None:
            warning = _("You have not been assigned to a group yet. Please contact your leader or an admin.")
        elif not devices or not accounts:
            warning = _("Your group has no devices or accounts allocated. Please contact your leader or an admin.")

        return Response(
            {
                "employee_id": str(employee.id),
                "employee_name": employee.user.display_name,
                "group_name": employee.group.name if employee.group_id else None,
                "devices": DeviceOptionSerializer(devices, many=True).data,
                "accounts": AccountOptionSerializer(accounts, many=True).data,
                "live_statuses": [{"value": value, "label": label} for value, label in LiveStatus.choices],
                "shifts": list(range(1, settings.DAILY_REPORT_MAX_SHIFT + 1)),
                "max_entries": settings.DAILY_REPORT_MAX_ENTRIES,
                "check_out_notice": _("Submitting this report also records your check-out for today."),
                "warning": warning,
            }
        )
