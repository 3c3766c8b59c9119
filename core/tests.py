from decimal import Decimal

from django.contrib.auth import get_user_model
from django.test import SimpleTestCase, TestCase, override_settings
from rest_framework.test import APIClient

from common.utils import format_currency, to_money
from core.models import AuditLog, Employee, Group
from core.services import EmployeeNotLinked, resolve_employee_for_user


class CurrencyHelperTests(SimpleTestCase):
    def test_format_currency_uses_id_grouping_without_fraction(self):
        self.assertEqual(format_currency(Decimal("500000")), "Rp 500.000")
        self.assertEqual(format_currency("1500000.40"), "Rp 1.500.000")
        self.assertEqual(format_currency(0), "Rp 0")
        self.assertEqual(format_currency(Decimal("-2500")), "-Rp 2.500")

    @override_settings(CURRENCY_CODE="USD")
    def test_format_currency_falls_back_to_code_for_unknown_symbol(self):
        self.assertEqual(format_currency(1000), "USD 1.000")

    def test_to_money_rejects_garbage(self):
        self.assertEqual(to_money(None), Decimal("0.00"))
        self.assertEqual(to_money("12.345"), Decimal("12.35"))
        with self.assertRaises(ValueError):
            to_money("abc")


class EmployeeResolutionTests(TestCase):
    def setUp(self):
        self.user_model = get_user_model()

    def test_linked_user_resolves_employee(self):
        user = self.user_model.objects.create_user(username="linked", password="pass1234")
        employee = Employee.objects.create(user=user, group=Group.objects.create(name="Linked"))

        self.assertEqual(resolve_employee_for_user(user), employee)

    def test_unlinked_user_raises(self):
        user = self.user_model.objects.create_user(username="unlinked", password="pass1234")

        with self.assertRaises(EmployeeNotLinked) as ctx:
            resolve_employee_for_user(user)
        self.assertEqual(ctx.exception.status_code, 403)
        self.assertEqual(ctx.exception.error_code, "employee_not_linked")

    def test_email_is_normalized_on_save(self):
        user = self.user_model.objects.create_user(username="mixed", email="  Mixed@Example.COM ", password="x")

        self.assertEqual(user.email, "mixed@example.com")


class AuditLogTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.user_model = get_user_model()
        self.admin = self.user_model.objects.create_user(username="audit-admin", password="pass1234", role="admin")
        self.staff = self.user_model.objects.create_user(username="audit-staff", password="pass1234", role="staff")

    def test_audit_logs_are_read_only(self):
        self.client.force_authenticate(user=self.admin)
        log = AuditLog.objects.create(action="test.action", entity="test", actor=self.admin)

        patch_res = self.client.patch(f"/api/v1/admin/audit-logs/{log.id}/", {"action": "changed"}, format="json")
        delete_res = self.client.delete(f"/api/v1/admin/audit-logs/{log.id}/")

        self.assertEqual(patch_res.status_code, 405)
        self.assertEqual(delete_res.status_code, 405)
        self.assertEqual(patch_res.json()["code"], "method_not_allowed")

    def test_list_filters_by_action(self):
        AuditLog.objects.create(action="daily_report.submit", entity="daily_report", actor=self.staff)
        AuditLog.objects.create(action="attendance.check_in", entity="attendance", actor=self.staff)
        self.client.force_authenticate(user=self.admin)

        response = self.client.get("/api/v1/admin/audit-logs/", {"action": "daily_report.submit"})

        self.assertEqual(response.status_code, 200)
        results = response.json()["results"]
        self.assertEqual([item["action"] for item in results], ["daily_report.submit"])
        self.assertEqual(results[0]["actor_username"], "audit-staff")
        self.assertEqual(
            sorted(results[0].keys()),
            [
                "action",
                "actor",
                "actor_username",
                "after_snapshot",
                "before_snapshot",
                "created_at",
                "entity",
                "entity_id",
                "id",
                "request_id",
            ],
        )

    def test_export_returns_csv(self):
        AuditLog.objects.create(action="daily_report.submit", entity="daily_report", actor=self.staff, request_id="r-1")
        self.client.force_authenticate(user=self.admin)

        response = self.client.get("/api/v1/admin/audit-logs/export/")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response["Content-Type"], "text/csv")
        lines = response.content.decode().strip().splitlines()
        self.assertEqual(lines[0], "id,created_at,actor,action,entity,entity_id,request_id")
        self.assertIn("daily_report.submit", lines[1])

    def test_staff_cannot_read_audit_logs_and_denial_is_logged(self):
        self.client.force_authenticate(user=self.staff)
        with self.assertLogs("security.authorization", level="WARNING") as cm:
            response = self.client.get("/api/v1/admin/audit-logs/")

        self.assertEqual(response.status_code, 403)
        self.assertEqual(
            sorted(response.json().keys()),
            ["code", "errors", "message", "status"],
        )
        self.assertTrue(any("permission_denied" in message for message in cm.output))


class ErrorEnvelopeTests(TestCase):
    def setUp(self):
        self.client = APIClient()

    def test_unauthenticated_request_uses_envelope(self):
        response = self.client.get("/api/v1/reports/daily/")

        self.assertEqual(response.status_code, 401)
        body = response.json()
        self.assertEqual(body["code"], "not_authenticated")
        self.assertEqual(body["status"], 401)
        self.assertIsNone(body["errors"])


class TokenTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.user_model = get_user_model()
        self.user = self.user_model.objects.create_user(
            username="token-user",
            email="token@example.com",
            password="pass1234",
            role="leader",
        )

    def test_token_accepts_email_and_carries_role(self):
        response = self.client.post(
            "/api/v1/token/",
            {"username": "TOKEN@example.com", "password": "pass1234"},
            format="json",
        )

        self.assertEqual(response.status_code, 200)
        self.assertIn("access", response.json())


class HealthTests(TestCase):
    def test_healthz_and_readyz(self):
        client = APIClient()

        health = client.get("/healthz", HTTP_X_REQUEST_ID="health-1")
        ready = client.get("/readyz")

        self.assertEqual(health.status_code, 200)
        self.assertEqual(health.json()["request_id"], "health-1")
        self.assertEqual(health["X-Request-ID"], "health-1")
        self.assertEqual(ready.json()["status"], "ready")
