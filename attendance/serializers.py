from rest_framework import serializers

from attendance.models import AttendanceRecord


class AttendanceRecordSerializer(serializers.ModelSerializer):
    class Meta:
        model = AttendanceRecord
        fields = ["id", "attendance_date", "check_in", "check_out", "status", "notes"]
        read_only_fields = fields
