from datetime import date
from decimal import Decimal
from unittest.mock import patch

from django.contrib.auth import get_user_model
from django.db import OperationalError
from django.test import SimpleTestCase, TestCase, override_settings
from rest_framework.test import APIClient

from attendance.models import AttendanceRecord
from core.models import Account, AuditLog, Device, Employee, Group
from reports.balance import NO_PRIOR_BALANCE_CODE, resolve_opening_balance
from reports.batch import (
    BATCH_SIZE,
    DUPLICATE_ENTRY,
    INCOMPLETE,
    INVALID_BALANCE,
    INVALID_SHIFT,
    OPENING_LOCKED,
    DailyReportBatch,
    DailyReportEntry,
)
from reports.exceptions import BatchLimitExceeded, DuplicateShiftReport, ReportPersistenceFailed
from reports.models import DailyReport, LiveStatus
from reports.services import find_prior_closing_balance, submit_daily_report

REPORT_DATE = date(2024, 5, 1)


def _no_lookup(*args):
    raise AssertionError("lookup should not be called")


class OpeningBalanceResolverTests(SimpleTestCase):
    def resolve(self, lookup=_no_lookup, **overrides):
        params = {
            "shift": "2",
            "live_status": LiveStatus.SMOOTH,
            "device_id": "device-1",
            "report_date": REPORT_DATE,
            "find_prior_closing_balance": lookup,
        }
        params.update(overrides)
        return resolve_opening_balance(**params)

    def test_smooth_shift_two_carries_prior_closing_balance(self):
        calls = []

        def lookup(device_id, report_date, shift_number):
            calls.append((device_id, report_date, shift_number))
            return Decimal("300000")

        resolved = self.resolve(lookup)

        self.assertEqual(resolved.amount, Decimal("300000.00"))
        self.assertFalse(resolved.editable)
        self.assertTrue(resolved.locked)
        self.assertIsNone(resolved.warning)
        self.assertEqual(calls, [("device-1", REPORT_DATE, 1)])

    def test_missing_prior_balance_opens_editable_with_warning(self):
        resolved = self.resolve(lambda *args: None, shift=3)

        self.assertEqual(resolved.amount, Decimal("0.00"))
        self.assertTrue(resolved.editable)
        self.assertEqual(resolved.warning, "No prior-shift balance found.")
        self.assertEqual(resolved.warning_code, NO_PRIOR_BALANCE_CODE)

    def test_lookup_failure_is_treated_as_not_found(self):
        def lookup(*args):
            raise OperationalError("database unavailable")

        with self.assertLogs("reports.balance", level="WARNING") as logs:
            resolved = self.resolve(lookup)

        self.assertEqual(resolved.amount, Decimal("0.00"))
        self.assertTrue(resolved.editable)
        self.assertEqual(resolved.warning_code, NO_PRIOR_BALANCE_CODE)
        self.assertTrue(any("prior_balance_lookup_failed" in entry for entry in logs.output))

    def test_dead_relive_always_opens_locked_at_zero(self):
        for shift in ("1", "2", "3", None):
            resolved = self.resolve(live_status=LiveStatus.DEAD_RELIVE, shift=shift)
            self.assertEqual(resolved.amount, Decimal("0.00"))
            self.assertFalse(resolved.editable)
            self.assertIsNone(resolved.warning)

    def test_first_shift_opens_locked_at_zero(self):
        for live_status in (LiveStatus.SMOOTH, None, ""):
            resolved = self.resolve(shift="1", live_status=live_status)
            self.assertEqual(resolved.amount, Decimal("0.00"))
            self.assertFalse(resolved.editable)

    def test_incomplete_inputs_stay_editable_without_lookup(self):
        for overrides in ({"shift": None}, {"shift": ""}, {"device_id": None}, {"live_status": None}):
            resolved = self.resolve(**overrides)
            self.assertEqual(resolved.amount, Decimal("0.00"))
            self.assertTrue(resolved.editable)
            self.assertIsNone(resolved.warning)

    def test_switching_back_to_smooth_re_resolves_from_scratch(self):
        dead = self.resolve(live_status=LiveStatus.DEAD_RELIVE)
        smooth = self.resolve(lambda *args: Decimal("125000.50"))

        self.assertEqual(dead.amount, Decimal("0.00"))
        self.assertEqual(smooth.amount, Decimal("125000.50"))
        self.assertTrue(smooth.locked)


class DailyReportBatchTests(SimpleTestCase):
    def entry(self, **overrides):
        values = {
            "device_id": "device-1",
            "account_id": "account-1",
            "shift": "1",
            "live_status": LiveStatus.SMOOTH,
            "product_category": "Skincare",
            "opening_balance": "0",
            "closing_balance": "500000",
        }
        values.update(overrides)
        return DailyReportEntry(**values)

    def test_total_sales_is_exact_sum_of_entries(self):
        batch = DailyReportBatch(
            employee_id="emp",
            report_date=REPORT_DATE,
            entries=[
                self.entry(closing_balance="500000"),
                self.entry(device_id="device-2", opening_balance="0", closing_balance="0.10"),
                self.entry(device_id="device-3", opening_balance="100000", closing_balance="100000.20"),
            ],
        )

        self.assertEqual(batch.total_sales, Decimal("500000.30"))
        self.assertEqual(batch.validate(), [])

    def test_incomplete_entries_are_all_reported(self):
        batch = DailyReportBatch(
            employee_id="emp",
            report_date=REPORT_DATE,
            entries=[
                self.entry(),
                self.entry(device_id="device-2", account_id=None),
                self.entry(device_id="device-3", product_category="  "),
            ],
        )

        errors = batch.validate()

        self.assertEqual([(e.entry, e.code) for e in errors], [(1, INCOMPLETE), (2, INCOMPLETE)])
        self.assertEqual(errors[0].fields, ("account_id",))
        self.assertIn("#2", errors[0].message)
        self.assertEqual(errors[1].fields, ("product_category",))

    def test_closing_below_opening_is_rejected(self):
        batch = DailyReportBatch(
            employee_id="emp",
            report_date=REPORT_DATE,
            entries=[self.entry(opening_balance="200000", closing_balance="150000")],
        )

        errors = batch.validate()

        self.assertEqual([e.code for e in errors], [INVALID_BALANCE])

    def test_unknown_shift_is_rejected(self):
        batch = DailyReportBatch(employee_id="emp", report_date=REPORT_DATE, entries=[self.entry(shift="9")])

        self.assertEqual([e.code for e in batch.validate()], [INVALID_SHIFT])

    @override_settings(DAILY_REPORT_MAX_SHIFT=12)
    def test_shift_limit_follows_settings(self):
        batch = DailyReportBatch(employee_id="emp", report_date=REPORT_DATE, entries=[self.entry(shift="9")])

        self.assertEqual(batch.validate(), [])

    def test_repeated_device_and_shift_is_flagged_on_later_entry(self):
        batch = DailyReportBatch(
            employee_id="emp",
            report_date=REPORT_DATE,
            entries=[self.entry(), self.entry(account_id="account-2")],
        )

        errors = batch.validate()

        self.assertEqual([(e.entry, e.code) for e in errors], [(1, DUPLICATE_ENTRY)])

    def test_empty_batch_gets_batch_level_error(self):
        batch = DailyReportBatch(employee_id="emp", report_date=REPORT_DATE)

        errors = batch.validate()

        self.assertEqual(len(errors), 1)
        self.assertIsNone(errors[0].entry)
        self.assertEqual(errors[0].code, BATCH_SIZE)

    def test_add_entry_copies_first_shift_and_stops_at_limit(self):
        batch = DailyReportBatch(employee_id="emp", report_date=REPORT_DATE, entries=[self.entry(shift="2")])

        for _ in range(9):
            added = batch.add_entry()
        self.assertEqual(added.shift, "2")
        self.assertEqual(len(batch.entries), 10)

        with self.assertRaises(BatchLimitExceeded):
            batch.add_entry()
        self.assertEqual(len(batch.entries), 10)

    def test_last_entry_cannot_be_removed(self):
        batch = DailyReportBatch(employee_id="emp", report_date=REPORT_DATE, entries=[self.entry()])

        with self.assertRaises(BatchLimitExceeded):
            batch.remove_entry(0)

    def test_locked_opening_balance_must_match_resolver(self):
        batch = DailyReportBatch(
            employee_id="emp",
            report_date=REPORT_DATE,
            entries=[self.entry(shift="2", opening_balance="0", closing_balance="400000")],
        )

        def resolve(entry, report_date):
            return resolve_opening_balance(
                shift=entry.shift,
                live_status=entry.live_status,
                device_id=entry.device_id,
                report_date=report_date,
                find_prior_closing_balance=lambda *args: Decimal("300000"),
            )

        errors = batch.validate(resolve=resolve)

        self.assertEqual([e.code for e in errors], [OPENING_LOCKED])
        self.assertIn("Rp 300.000", errors[0].message)


class DailyReportFixtureMixin:
    def setUp(self):
        self.client = APIClient()
        self.user_model = get_user_model()

        self.group = Group.objects.create(name="Team A")
        self.other_group = Group.objects.create(name="Team B")

        self.staff_user = self.user_model.objects.create_user(
            username="staff-a",
            password="pass1234",
            full_name="Sari",
            role="staff",
        )
        self.employee = Employee.objects.create(user=self.staff_user, group=self.group)

        self.second_user = self.user_model.objects.create_user(username="staff-b", password="pass1234", role="staff")
        self.second_employee = Employee.objects.create(user=self.second_user, group=self.group)

        self.leader = self.user_model.objects.create_user(username="leader", password="pass1234", role="leader")
        self.viewer = self.user_model.objects.create_user(username="viewer", password="pass1234", role="viewer")

        self.device_a = Device.objects.create(group=self.group, identifier="HP-01")
        self.device_b = Device.objects.create(group=self.group, identifier="HP-02")
        self.foreign_device = Device.objects.create(group=self.other_group, identifier="HP-99")
        self.account = Account.objects.create(group=self.group, username="radiant.shop", platform="shopee")

    def entry_payload(self, **overrides):
        payload = {
            "shift": "1",
            "device_id": str(self.device_a.id),
            "account_id": str(self.account.id),
            "live_status": "smooth",
            "product_category": "Skincare",
            "opening_balance": "0",
            "closing_balance": "500000",
        }
        payload.update(overrides)
        return payload

    def entry(self, **overrides):
        values = {
            "shift": "1",
            "device_id": self.device_a.id,
            "account_id": self.account.id,
            "live_status": LiveStatus.SMOOTH,
            "product_category": "Skincare",
            "opening_balance": "0",
            "closing_balance": "500000",
        }
        values.update(overrides)
        return DailyReportEntry(**values)

    def store_report(self, employee, device, shift, closing, opening="0"):
        return DailyReport.objects.create(
            employee=employee,
            report_date=REPORT_DATE,
            device=device,
            account=self.account,
            shift_number=shift,
            live_status=LiveStatus.SMOOTH,
            product_category="Skincare",
            opening_balance=Decimal(opening),
            closing_balance=Decimal(closing),
            total_sales=Decimal(closing) - Decimal(opening),
        )


class SubmitDailyReportServiceTests(DailyReportFixtureMixin, TestCase):
    def test_prior_closing_balance_is_found_across_employees(self):
        self.store_report(self.second_employee, self.device_a, 1, "300000")

        self.assertEqual(find_prior_closing_balance(self.device_a.id, REPORT_DATE, 1), Decimal("300000.00"))
        self.assertIsNone(find_prior_closing_balance(self.device_b.id, REPORT_DATE, 1))
        self.assertIsNone(find_prior_closing_balance(self.device_a.id, date(2024, 5, 2), 1))

    def test_submit_stores_every_entry_and_returns_total(self):
        result = submit_daily_report(
            user=self.staff_user,
            report_date=REPORT_DATE,
            notes="busy day",
            entries=[
                self.entry(closing_balance="500000"),
                self.entry(device_id=self.device_b.id, closing_balance="250000"),
            ],
        )

        self.assertEqual(result.total_sales, Decimal("750000.00"))
        self.assertTrue(result.check_out_recorded)
        self.assertEqual(len(result.reports), 2)
        self.assertEqual(DailyReport.objects.filter(employee=self.employee, notes="busy day").count(), 2)
        self.assertTrue(AuditLog.objects.filter(action="daily_report.submit", actor=self.staff_user).exists())

    def test_repeat_submission_raises_duplicate(self):
        submit_daily_report(user=self.staff_user, report_date=REPORT_DATE, entries=[self.entry()])

        with self.assertRaises(DuplicateShiftReport):
            submit_daily_report(user=self.staff_user, report_date=REPORT_DATE, entries=[self.entry()])

        self.assertEqual(DailyReport.objects.filter(employee=self.employee).count(), 1)

    def test_database_failure_writes_nothing(self):
        with patch("reports.services.DailyReport.objects.bulk_create", side_effect=OperationalError("disk full")):
            with self.assertRaises(ReportPersistenceFailed) as ctx:
                submit_daily_report(user=self.staff_user, report_date=REPORT_DATE, entries=[self.entry()])

        self.assertEqual(ctx.exception.message, "disk full")
        self.assertFalse(DailyReport.objects.exists())
        self.assertFalse(AuditLog.objects.filter(action="daily_report.submit").exists())

    def test_attendance_receiver_failure_does_not_fail_submission(self):
        with patch("attendance.receivers.record_check_out", side_effect=RuntimeError("attendance down")):
            with self.assertLogs("reports.services", level="ERROR") as logs:
                result = submit_daily_report(user=self.staff_user, report_date=REPORT_DATE, entries=[self.entry()])

        self.assertEqual(len(result.reports), 1)
        self.assertIs(result.check_out_recorded, False)
        self.assertIn("contact your leader", result.message)
        self.assertTrue(DailyReport.objects.filter(employee=self.employee).exists())
        self.assertFalse(AttendanceRecord.objects.filter(employee=self.employee).exists())
        self.assertTrue(any("daily_report_receiver_failed" in entry for entry in logs.output))


class DailyReportApiTests(DailyReportFixtureMixin, TestCase):
    url = "/api/v1/reports/daily/"

    def submit(self, entries, user=None, report_date=REPORT_DATE, **extra):
        self.client.force_authenticate(user=user or self.staff_user)
        payload = {"report_date": report_date.isoformat(), "notes": "", "entries": entries}
        return self.client.post(self.url, payload, format="json", **extra)

    def test_submit_single_shift_one_report(self):
        response = self.submit([self.entry_payload()], HTTP_X_REQUEST_ID="req-daily-1")

        self.assertEqual(response.status_code, 201)
        body = response.json()
        self.assertEqual(body["total_sales"], "500000.00")
        self.assertEqual(body["total_sales_display"], "Rp 500.000")
        self.assertTrue(body["check_out_recorded"])
        self.assertIn("check-out", body["message"])
        self.assertEqual(body["reports"][0]["shift_number"], 1)
        self.assertEqual(body["reports"][0]["employee_name"], "Sari")
        self.assertTrue(AuditLog.objects.filter(action="daily_report.submit", request_id="req-daily-1").exists())

    def test_submission_records_check_out(self):
        AttendanceRecord.objects.create(employee=self.employee, attendance_date=REPORT_DATE, check_in="2024-05-01T01:00:00Z")

        response = self.submit([self.entry_payload()])

        self.assertEqual(response.status_code, 201)
        record = AttendanceRecord.objects.get(employee=self.employee, attendance_date=REPORT_DATE)
        self.assertIsNotNone(record.check_out)
        self.assertTrue(response.json()["check_out_recorded"])

    def test_failed_check_out_is_reported_in_response(self):
        with patch("attendance.receivers.record_check_out", side_effect=RuntimeError("attendance down")):
            with self.assertLogs("reports.services", level="ERROR"):
                response = self.submit([self.entry_payload()])

        self.assertEqual(response.status_code, 201)
        body = response.json()
        self.assertIs(body["check_out_recorded"], False)
        self.assertIn("contact your leader", body["message"])
        self.assertEqual(DailyReport.objects.count(), 1)
        self.assertFalse(AttendanceRecord.objects.exists())

    def test_shift_two_uses_stored_closing_balance(self):
        self.store_report(self.employee, self.device_a, 1, "300000")

        response = self.submit(
            [self.entry_payload(shift="2", opening_balance="300000", closing_balance="450000")]
        )

        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.json()["total_sales"], "150000.00")

    def test_stale_locked_opening_balance_is_rejected(self):
        self.store_report(self.second_employee, self.device_a, 1, "300000")

        response = self.submit([self.entry_payload(shift="2", opening_balance="0", closing_balance="400000")])

        self.assertEqual(response.status_code, 400)
        body = response.json()
        self.assertEqual(body["code"], "daily_report_invalid")
        self.assertEqual(body["errors"][0]["code"], OPENING_LOCKED)
        self.assertFalse(DailyReport.objects.filter(shift_number=2).exists())

    def test_missing_prior_balance_accepts_typed_opening(self):
        response = self.submit([self.entry_payload(shift="2", opening_balance="120000", closing_balance="200000")])

        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.json()["total_sales"], "80000.00")

    def test_dead_relive_forces_zero_opening(self):
        self.store_report(self.employee, self.device_a, 1, "300000")

        rejected = self.submit(
            [self.entry_payload(shift="2", live_status="dead_relive", opening_balance="300000", closing_balance="350000")]
        )
        accepted = self.submit(
            [self.entry_payload(shift="2", live_status="dead_relive", opening_balance="0", closing_balance="50000")]
        )

        self.assertEqual(rejected.status_code, 400)
        self.assertEqual(accepted.status_code, 201)
        self.assertEqual(accepted.json()["total_sales"], "50000.00")

    def test_incomplete_entry_rejects_whole_batch(self):
        response = self.submit(
            [
                self.entry_payload(),
                self.entry_payload(device_id=str(self.device_b.id), account_id=None),
            ]
        )

        self.assertEqual(response.status_code, 400)
        body = response.json()
        self.assertEqual(body["code"], "daily_report_invalid")
        self.assertEqual([(e["entry"], e["code"]) for e in body["errors"]], [(1, INCOMPLETE)])
        self.assertFalse(DailyReport.objects.exists())

    def test_eleventh_entry_is_rejected(self):
        devices = [Device.objects.create(group=self.group, identifier=f"HP-X{i}") for i in range(11)]

        response = self.submit([self.entry_payload(device_id=str(device.id)) for device in devices])

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["code"], "batch_limit_exceeded")
        self.assertFalse(DailyReport.objects.exists())

    def test_oversized_batch_with_invalid_row_still_reports_limit(self):
        entries = [self.entry_payload(device_id=str(self.foreign_device.id))]
        entries += [self.entry_payload(shift=str(n % 3 + 1)) for n in range(10)]

        response = self.submit(entries)

        self.assertEqual(response.status_code, 400)
        body = response.json()
        self.assertEqual(body["code"], "batch_limit_exceeded")
        self.assertEqual(body["errors"], {"entries": [{"count": 11, "limit": 10}]})

    def test_duplicate_submission_returns_conflict(self):
        first = self.submit([self.entry_payload()])
        second = self.submit([self.entry_payload()])

        self.assertEqual(first.status_code, 201)
        self.assertEqual(second.status_code, 409)
        self.assertEqual(second.json()["code"], "duplicate_shift_report")
        self.assertEqual(DailyReport.objects.count(), 1)

    def test_user_without_employee_gets_employee_not_linked(self):
        orphan = self.user_model.objects.create_user(username="orphan", password="pass1234", role="staff")

        response = self.submit([self.entry_payload()], user=orphan)

        self.assertEqual(response.status_code, 403)
        self.assertEqual(response.json()["code"], "employee_not_linked")

    def test_device_outside_group_is_rejected(self):
        response = self.submit([self.entry_payload(device_id=str(self.foreign_device.id))])

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["code"], "validation_error")

    def test_viewer_cannot_submit_and_denial_is_logged(self):
        self.client.force_authenticate(user=self.viewer)
        with self.assertLogs("security.authorization", level="WARNING") as cm:
            response = self.client.post(
                self.url,
                {"report_date": REPORT_DATE.isoformat(), "entries": [self.entry_payload()]},
                format="json",
            )

        self.assertEqual(response.status_code, 403)
        self.assertEqual(response.json()["code"], "permission_denied")
        self.assertTrue(any("permission_denied" in message for message in cm.output))

    def test_staff_list_is_limited_to_own_reports(self):
        own = self.store_report(self.employee, self.device_a, 1, "100000")
        other = self.store_report(self.second_employee, self.device_b, 1, "200000")

        self.client.force_authenticate(user=self.staff_user)
        response = self.client.get(self.url, {"report_date": REPORT_DATE.isoformat()})

        self.assertEqual(response.status_code, 200)
        payload = response.json()
        self.assertEqual(sorted(payload.keys()), ["count", "next", "previous", "results"])
        ids = {item["id"] for item in payload["results"]}
        self.assertIn(str(own.id), ids)
        self.assertNotIn(str(other.id), ids)

    def test_leader_list_includes_all_employees(self):
        self.store_report(self.employee, self.device_a, 1, "100000")
        self.store_report(self.second_employee, self.device_b, 1, "200000")

        self.client.force_authenticate(user=self.leader)
        response = self.client.get(self.url, {"employee_id": str(self.second_employee.id)})

        self.assertEqual(response.status_code, 200)
        results = response.json()["results"]
        self.assertEqual(len(results), 1)
        self.assertEqual(results[0]["total_sales_display"], "Rp 200.000")

    def test_list_rejects_malformed_date(self):
        self.client.force_authenticate(user=self.staff_user)
        response = self.client.get(self.url, {"report_date": "01/05/2024"})

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["code"], "validation_error")


class OpeningBalanceApiTests(DailyReportFixtureMixin, TestCase):
    url = "/api/v1/reports/daily/opening-balance/"

    def test_locked_carry_over(self):
        self.store_report(self.second_employee, self.device_a, 1, "300000")
        self.client.force_authenticate(user=self.staff_user)

        response = self.client.get(
            self.url,
            {"shift": "2", "live_status": "smooth", "device_id": str(self.device_a.id), "report_date": "2024-05-01"},
        )

        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["opening_balance"], "300000.00")
        self.assertEqual(body["opening_balance_display"], "Rp 300.000")
        self.assertFalse(body["editable"])
        self.assertTrue(body["locked"])
        self.assertIsNone(body["warning"])

    def test_device_outside_group_is_not_looked_up(self):
        self.store_report(self.second_employee, self.foreign_device, 1, "900000")
        self.client.force_authenticate(user=self.staff_user)

        response = self.client.get(
            self.url,
            {
                "shift": "2",
                "live_status": "smooth",
                "device_id": str(self.foreign_device.id),
                "report_date": "2024-05-01",
            },
        )

        self.assertEqual(response.status_code, 400)
        body = response.json()
        self.assertEqual(body["code"], "validation_error")
        self.assertIn("device_id", body["errors"])
        self.assertNotIn("opening_balance", body)

    def test_not_found_returns_warning(self):
        self.client.force_authenticate(user=self.staff_user)

        response = self.client.get(
            self.url,
            {"shift": "2", "live_status": "smooth", "device_id": str(self.device_b.id), "report_date": "2024-05-01"},
        )

        body = response.json()
        self.assertEqual(body["opening_balance"], "0.00")
        self.assertTrue(body["editable"])
        self.assertEqual(body["warning_code"], NO_PRIOR_BALANCE_CODE)

    def test_nothing_chosen_is_editable_zero(self):
        self.client.force_authenticate(user=self.staff_user)

        response = self.client.get(self.url)

        body = response.json()
        self.assertEqual(body["opening_balance"], "0.00")
        self.assertTrue(body["editable"])
        self.assertIsNone(body["warning"])


class FormOptionsApiTests(DailyReportFixtureMixin, TestCase):
    url = "/api/v1/reports/daily/form-options/"

    def test_options_list_group_devices_and_accounts(self):
        self.client.force_authenticate(user=self.staff_user)

        response = self.client.get(self.url)

        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["employee_name"], "Sari")
        self.assertEqual(body["group_name"], "Team A")
        self.assertEqual([d["name"] for d in body["devices"]], ["HP-01", "HP-02"])
        self.assertEqual([a["name"] for a in body["accounts"]], ["radiant.shop"])
        self.assertEqual(body["shifts"], [1, 2, 3])
        self.assertEqual(body["max_entries"], 10)
        self.assertIsNone(body["warning"])

    def test_employee_without_group_gets_warning(self):
        self.employee.group = None
        self.employee.save(update_fields=["group"])
        self.client.force_authenticate(user=self.staff_user)

        response = self.client.get(self.url)

        body = response.json()
        self.assertEqual(body["devices"], [])
        self.assertIsNotNone(body["warning"])
