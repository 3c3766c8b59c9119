"""Opening-balance rules for a single device shift entry.

The opening balance of a shift is either forced to zero, carried over from the
previous shift of the same device on the same day, or left for the employee to
type in. The rules are evaluated top to bottom and the first match wins:

1. a dead/relive session always opens at zero (locked);
2. shift 1 always opens at zero (locked);
3. a smooth shift after the first, with a device chosen, carries over the
   closing balance of shift ``n - 1`` (locked). When that balance cannot be
   found the entry opens at zero, stays editable and carries a warning;
4. anything not yet fully chosen opens at zero and stays editable.

Callers re-run :func:`resolve_opening_balance` from scratch whenever the shift,
live status, device or date changes, so a carried-over value never outlives the
inputs it was derived from.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from django.utils.translation import gettext_lazy as _

from common.utils import to_money
from reports.models import LiveStatus

logger = logging.getLogger(__name__)

ZERO = Decimal("0.00")

NO_PRIOR_BALANCE_CODE = "no_prior_balance"
NO_PRIOR_BALANCE_WARNING = _("No prior-shift balance found.")

PriorBalanceLookup = Callable[[object, date, int], "Decimal | None"]


@dataclass(frozen=True)
class OpeningBalance:
    amount: Decimal
    editable: bool
    warning: str | None = None
    warning_code: str | None = None

    @property
    def locked(self) -> bool:
        return not self.editable


def parse_shift(value) -> int | None:
    """Shift numbers arrive as ``"1"`` from forms and ``1`` from code."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = int(str(value).strip())
    except (TypeError, ValueError):
        return None
    return number if number >= 1 else None


def resolve_opening_balance(
    *,
    shift,
    live_status,
    device_id,
    report_date: date | None,
    find_prior_closing_balance: PriorBalanceLookup,
) -> OpeningBalance:
    if live_status == LiveStatus.DEAD_RELIVE:
        return OpeningBalance(amount=ZERO, editable=False)

    shift_number = parse_shift(shift)
    if shift_number == 1:
        return OpeningBalance(amount=ZERO, editable=False)

    if shift_number is None or not device_id or report_date is None or live_status != LiveStatus.SMOOTH:
        return OpeningBalance(amount=ZERO, editable=True)

    try:
        prior_closing = find_prior_closing_balance(device_id, report_date, shift_number - 1)
        if prior_closing is not None:
            prior_closing = to_money(prior_closing)
    except Exception:
        # Lookup problems degrade to manual entry; they never block the employee.
        logger.warning(
            "prior_balance_lookup_failed",
            exc_info=True,
            extra={"device_id": str(device_id), "report_date": report_date, "shift": shift_number},
        )
        prior_closing = None

    if prior_closing is None:
        return OpeningBalance(
            amount=ZERO,
            editable=True,
            warning=str(NO_PRIOR_BALANCE_WARNING),
            warning_code=NO_PRIOR_BALANCE_CODE,
        )

    return OpeningBalance(amount=prior_closing, editable=False)
