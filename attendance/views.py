from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from attendance.serializers import AttendanceRecordSerializer
from attendance.services import check_in, recent_history, today_record
from common.audit import create_audit_log_from_request
from common.permissions import RoleCapabilityPermission
from core.services import resolve_employee_for_user


class AttendanceCheckInView(APIView):
    permission_classes = [IsAuthenticated, RoleCapabilityPermission]
    permission_action_map = {"post": "attendance.self"}

    def post(self, request):
        employee = resolve_employee_for_user(request.user)
        record = check_in(employee)
        payload = AttendanceRecordSerializer(record).data
        create_audit_log_from_request(
            request,
            action="attendance.check_in",
            entity="attendance",
            entity_id=record.id,
            after_snapshot=payload,
        )
        return Response(payload, status=status.HTTP_201_CREATED)


class AttendanceTodayView(APIView):
    permission_classes = [IsAuthenticated, RoleCapabilityPermission]
    permission_action_map = {"get": "attendance.self"}

    def get(self, request):
        employee = resolve_employee_for_user(request.user)
        record = today_record(employee)
        return Response(AttendanceRecordSerializer(record).data if record is not None else None)


class AttendanceHistoryView(APIView):
    """Latest attendance days for the current employee; fixed size, so not paginated."""

    permission_classes = [IsAuthenticated, RoleCapabilityPermission]
    permission_action_map = {"get": "attendance.self"}

    def get(self, request):
        employee = resolve_employee_for_user(request.user)
        return Response(AttendanceRecordSerializer(recent_history(employee), many=True).data)
