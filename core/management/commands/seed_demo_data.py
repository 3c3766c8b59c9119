from decimal import Decimal

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand
from django.utils import timezone

from core.models import Account, Device, Employee, Group
from reports.models import DailyReport, LiveStatus


class Command(BaseCommand):
    help = "Seed demo group, users, devices and accounts for local development."

    def add_arguments(self, parser):
        parser.add_argument(
            "--with-report",
            action="store_true",
            help="Also store a shift 1 report for today so shift 2 has a balance to carry over.",
        )

    def handle(self, *args, **options):
        User = get_user_model()

        users = {}
        for username, role, password in (
            ("superadmin", User.Role.SUPERADMIN, "superadmin1234"),
            ("admin", User.Role.ADMIN, "admin1234"),
            ("leader", User.Role.LEADER, "leader1234"),
            ("staff", User.Role.STAFF, "staff1234"),
            ("viewer", User.Role.VIEWER, "viewer1234"),
        ):
            user, created = User.objects.get_or_create(
                username=username,
                defaults={
                    "email": f"{username}@example.com",
                    "full_name": username.title(),
                    "role": role,
                    "is_staff": role in {User.Role.SUPERADMIN, User.Role.ADMIN},
                    "is_superuser": role == User.Role.SUPERADMIN,
                    "is_active": True,
                },
            )
            if created:
                user.set_password(password)
                user.save(update_fields=["password"])
            users[role] = user

        group, _ = Group.objects.get_or_create(
            name="Live Team A",
            defaults={"description": "Demo live-commerce team", "leader": users[User.Role.LEADER]},
        )

        employee, _ = Employee.objects.get_or_create(
            user=users[User.Role.STAFF],
            defaults={"group": group, "position": "Host"},
        )

        devices = []
        for number in range(1, 4):
            device, _ = Device.objects.get_or_create(
                identifier=f"HP-{number:02d}",
                defaults={"group": group, "imei": f"35000000000000{number}", "is_active": True},
            )
            devices.append(device)

        accounts = []
        for username, platform in (
            ("radiant.shop", Account.Platform.SHOPEE),
            ("radiant.live", Account.Platform.TIKTOK),
        ):
            account, _ = Account.objects.get_or_create(
                platform=platform,
                username=username,
                defaults={"group": group},
            )
            accounts.append(account)

        if options["with_report"]:
            DailyReport.objects.get_or_create(
                employee=employee,
                report_date=timezone.localdate(),
                device=devices[0],
                shift_number=1,
                defaults={
                    "account": accounts[0],
                    "live_status": LiveStatus.SMOOTH,
                    "product_category": "Skincare",
                    "opening_balance": Decimal("0.00"),
                    "closing_balance": Decimal("300000.00"),
                    "total_sales": Decimal("300000.00"),
                },
            )

        self.stdout.write(self.style.SUCCESS("Demo data seeded successfully."))
        self.stdout.write(
            "Credentials: superadmin/superadmin1234, admin/admin1234, leader/leader1234, "
            "staff/staff1234, viewer/viewer1234"
        )
        self.stdout.write(f"Group: {group.name} | Devices: {', '.join(d.identifier for d in devices)}")
