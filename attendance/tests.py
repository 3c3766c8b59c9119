from datetime import date, datetime, timedelta, timezone as dt_timezone

from django.contrib.auth import get_user_model
from django.test import TestCase
from django.utils import timezone
from rest_framework.test import APIClient

from attendance.models import AttendanceRecord
from core.models import Employee, Group
from reports.models import DailyReport
from reports.signals import daily_report_submitted

DAY = date(2024, 5, 1)
SUBMITTED_AT = datetime(2024, 5, 1, 10, 30, tzinfo=dt_timezone.utc)


class AttendanceClosureTests(TestCase):
    def setUp(self):
        self.user_model = get_user_model()
        self.user = self.user_model.objects.create_user(username="closure-staff", password="pass1234")
        self.employee = Employee.objects.create(user=self.user, group=Group.objects.create(name="Closure"))

    def send(self):
        daily_report_submitted.send(
            sender=DailyReport,
            employee_id=self.employee.id,
            report_date=DAY,
            submitted_at=SUBMITTED_AT,
            reports=[],
        )

    def test_open_record_is_checked_out(self):
        AttendanceRecord.objects.create(
            employee=self.employee, attendance_date=DAY, check_in=SUBMITTED_AT - timedelta(hours=8)
        )

        with self.assertLogs("attendance.services", level="INFO") as logs:
            self.send()

        record = AttendanceRecord.objects.get(employee=self.employee, attendance_date=DAY)
        self.assertEqual(record.check_out, SUBMITTED_AT)
        self.assertFalse(record.is_open)
        self.assertTrue(any("attendance_checkout_recorded" in entry for entry in logs.output))

    def test_missing_record_is_created_with_check_out_only(self):
        with self.assertLogs("attendance.services", level="WARNING") as logs:
            self.send()

        record = AttendanceRecord.objects.get(employee=self.employee, attendance_date=DAY)
        self.assertIsNone(record.check_in)
        self.assertEqual(record.check_out, SUBMITTED_AT)
        self.assertEqual(record.status, AttendanceRecord.Status.PRESENT)
        self.assertTrue(any("attendance_checkout_without_checkin" in entry for entry in logs.output))

    def test_closed_record_is_left_untouched(self):
        earlier = SUBMITTED_AT - timedelta(hours=1)
        AttendanceRecord.objects.create(
            employee=self.employee,
            attendance_date=DAY,
            check_in=SUBMITTED_AT - timedelta(hours=8),
            check_out=earlier,
        )

        self.send()

        record = AttendanceRecord.objects.get(employee=self.employee, attendance_date=DAY)
        self.assertEqual(record.check_out, earlier)
        self.assertEqual(AttendanceRecord.objects.filter(employee=self.employee).count(), 1)


class AttendanceApiTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.user_model = get_user_model()
        self.user = self.user_model.objects.create_user(username="att-staff", password="pass1234", role="staff")
        self.employee = Employee.objects.create(user=self.user)
        self.viewer = self.user_model.objects.create_user(username="att-viewer", password="pass1234", role="viewer")

    def test_check_in_creates_today_record(self):
        self.client.force_authenticate(user=self.user)

        response = self.client.post("/api/v1/attendance/check-in/", {}, format="json")

        self.assertEqual(response.status_code, 201)
        body = response.json()
        self.assertEqual(body["attendance_date"], timezone.localdate().isoformat())
        self.assertEqual(body["status"], "present")
        self.assertIsNotNone(body["check_in"])
        self.assertIsNone(body["check_out"])

    def test_second_check_in_is_rejected(self):
        self.client.force_authenticate(user=self.user)
        self.client.post("/api/v1/attendance/check-in/", {}, format="json")

        response = self.client.post("/api/v1/attendance/check-in/", {}, format="json")

        self.assertEqual(response.status_code, 409)
        self.assertEqual(response.json()["code"], "already_checked_in")
        self.assertEqual(AttendanceRecord.objects.filter(employee=self.employee).count(), 1)

    def test_check_in_after_report_closed_the_day_is_rejected(self):
        AttendanceRecord.objects.create(
            employee=self.employee, attendance_date=timezone.localdate(), check_out=timezone.now()
        )
        self.client.force_authenticate(user=self.user)

        response = self.client.post("/api/v1/attendance/check-in/", {}, format="json")

        self.assertEqual(response.status_code, 409)
        self.assertEqual(response.json()["code"], "day_already_closed")
        record = AttendanceRecord.objects.get(employee=self.employee)
        self.assertIsNone(record.check_in)

    def test_today_returns_null_before_check_in(self):
        self.client.force_authenticate(user=self.user)

        response = self.client.get("/api/v1/attendance/today/")

        self.assertEqual(response.status_code, 200)
        self.assertIsNone(response.data)

    def test_history_returns_latest_ten_newest_first(self):
        for offset in range(12):
            AttendanceRecord.objects.create(employee=self.employee, attendance_date=DAY - timedelta(days=offset))
        self.client.force_authenticate(user=self.user)

        response = self.client.get("/api/v1/attendance/history/")

        self.assertEqual(response.status_code, 200)
        dates = [item["attendance_date"] for item in response.json()]
        self.assertEqual(len(dates), 10)
        self.assertEqual(dates[0], DAY.isoformat())
        self.assertEqual(dates, sorted(dates, reverse=True))

    def test_viewer_cannot_check_in(self):
        self.client.force_authenticate(user=self.viewer)

        response = self.client.post("/api/v1/attendance/check-in/", {}, format="json")

        self.assertEqual(response.status_code, 403)
