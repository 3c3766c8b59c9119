from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import ClassVar

from django.conf import settings
from django.utils.translation import gettext as _

from common.utils import format_currency, to_money
from reports.balance import ZERO, OpeningBalance, parse_shift
from reports.exceptions import BatchLimitExceeded
from reports.models import LiveStatus

INCOMPLETE = "incomplete"
INVALID_SHIFT = "invalid_shift"
INVALID_LIVE_STATUS = "invalid_live_status"
INVALID_BALANCE = "invalid_balance"
OPENING_LOCKED = "opening_locked"
DUPLICATE_ENTRY = "duplicate_entry"
BATCH_SIZE = "batch_size"

MIN_ENTRIES = 1


def max_entries() -> int:
    return getattr(settings, "DAILY_REPORT_MAX_ENTRIES", 10)


def max_shift() -> int:
    return getattr(settings, "DAILY_REPORT_MAX_SHIFT", 3)


def _is_blank(value) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


@dataclass
class DailyReportEntry:
    REQUIRED_FIELDS: ClassVar[tuple[str, ...]] = (
        "shift",
        "device_id",
        "account_id",
        "live_status",
        "product_category",
    )

    device_id: object = None
    account_id: object = None
    shift: object = None
    live_status: str | None = None
    product_category: str | None = ""
    opening_balance: Decimal = ZERO
    closing_balance: Decimal = ZERO

    def __post_init__(self):
        self.opening_balance = to_money(self.opening_balance)
        self.closing_balance = to_money(self.closing_balance)

    @property
    def shift_number(self) -> int | None:
        return parse_shift(self.shift)

    @property
    def total_sales(self) -> Decimal:
        return self.closing_balance - self.opening_balance

    def missing_fields(self) -> list[str]:
        return [name for name in self.REQUIRED_FIELDS if _is_blank(getattr(self, name))]


@dataclass(frozen=True)
class EntryError:
    entry: int | None
    code: str
    message: str
    fields: tuple[str, ...] = ()

    def as_dict(self) -> dict:
        return {
            "entry": self.entry,
            "code": self.code,
            "message": self.message,
            "fields": list(self.fields),
        }


EntryResolver = Callable[[DailyReportEntry, date], OpeningBalance]


@dataclass
class DailyReportBatch:
    """All device shift entries one employee submits for one day."""

    employee_id: object
    report_date: date
    notes: str = ""
    entries: list[DailyReportEntry] = field(default_factory=list)

    def add_entry(self, entry: DailyReportEntry | None = None) -> DailyReportEntry:
        limit = max_entries()
        if len(self.entries) >= limit:
            raise BatchLimitExceeded(_("A daily report can hold at most %(limit)d device reports.") % {"limit": limit})
        if entry is None:
            # New rows start on the same shift as the first one.
            entry = DailyReportEntry(shift=self.entries[0].shift if self.entries else None)
        self.entries.append(entry)
        return entry

    def remove_entry(self, index: int) -> DailyReportEntry:
        if len(self.entries) <= MIN_ENTRIES:
            raise BatchLimitExceeded(_("A daily report needs at least one device report."))
        return self.entries.pop(index)

    @property
    def total_sales(self) -> Decimal:
        return sum((entry.total_sales for entry in self.entries), ZERO)

    def validate(self, resolve: EntryResolver | None = None) -> list[EntryError]:
        """Check every entry and return all problems found, in entry order.

        When ``resolve`` is given, entries whose opening balance is locked by the
        shift rules must carry exactly the resolved amount.
        """
        errors: list[EntryError] = []

        count = len(self.entries)
        if count < MIN_ENTRIES or count > max_entries():
            errors.append(
                EntryError(
                    entry=None,
                    code=BATCH_SIZE,
                    message=_("A daily report must contain between %(low)d and %(high)d device reports.")
                    % {"low": MIN_ENTRIES, "high": max_entries()},
                )
            )

        seen: dict[tuple[str, int], int] = {}
        for index, entry in enumerate(self.entries):
            label = index + 1

            missing = entry.missing_fields()
            if missing:
                errors.append(
                    EntryError(
                        entry=index,
                        code=INCOMPLETE,
                        message=_("Device report #%(n)d is incomplete. Please fill in every field.") % {"n": label},
                        fields=tuple(missing),
                    )
                )

            shift_number = entry.shift_number
            if not _is_blank(entry.shift) and (shift_number is None or shift_number > max_shift()):
                errors.append(
                    EntryError(
                        entry=index,
                        code=INVALID_SHIFT,
                        message=_("Device report #%(n)d has an unknown shift.") % {"n": label},
                        fields=("shift",),
                    )
                )
                shift_number = None

            if entry.live_status and entry.live_status not in LiveStatus.values:
                errors.append(
                    EntryError(
                        entry=index,
                        code=INVALID_LIVE_STATUS,
                        message=_("Device report #%(n)d has an unknown live status.") % {"n": label},
                        fields=("live_status",),
                    )
                )

            if entry.opening_balance < 0 or entry.closing_balance < entry.opening_balance:
                errors.append(
                    EntryError(
                        entry=index,
                        code=INVALID_BALANCE,
                        message=_("Device report #%(n)d: closing balance cannot be lower than opening balance.")
                        % {"n": label},
                        fields=("opening_balance", "closing_balance"),
                    )
                )

            if shift_number is not None and not _is_blank(entry.device_id):
                key = (str(entry.device_id), shift_number)
                if key in seen:
                    errors.append(
                        EntryError(
                            entry=index,
                            code=DUPLICATE_ENTRY,
                            message=_("Device report #%(n)d repeats the device and shift of report #%(first)d.")
                            % {"n": label, "first": seen[key] + 1},
                            fields=("device_id", "shift"),
                        )
                    )
                else:
                    seen[key] = index

            if resolve is not None and not missing and shift_number is not None:
                resolved = resolve(entry, self.report_date)
                if resolved.locked and entry.opening_balance != resolved.amount:
                    errors.append(
                        EntryError(
                            entry=index,
                            code=OPENING_LOCKED,
                            message=_("Device report #%(n)d: opening balance must be %(amount)s for this shift.")
                            % {"n": label, "amount": format_currency(resolved.amount)},
                            fields=("opening_balance",),
                        )
                    )

        return errors
