from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

from django.conf import settings

MONEY_QUANT = Decimal("0.01")

CURRENCY_SYMBOLS = {
    "IDR": "Rp",
}


def to_money(value):
    if value in (None, ""):
        return Decimal("0.00")
    try:
        return Decimal(str(value)).quantize(MONEY_QUANT, rounding=ROUND_HALF_UP)
    except InvalidOperation as exc:
        raise ValueError(f"Not a money amount: {value!r}") from exc


def format_currency(value, currency=None):
    """Render an amount the way the dashboard shows it, e.g. ``Rp 1.500.000``.

    Whole units only, with ``.`` as the thousands separator (id-ID locale).
    Negative amounts keep a leading minus before the symbol.
    """
    currency = currency or getattr(settings, "CURRENCY_CODE", "IDR")
    symbol = CURRENCY_SYMBOLS.get(currency, currency)
    amount = to_money(value).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    sign = "-" if amount < 0 else ""
    grouped = f"{abs(int(amount)):,}".replace(",", ".")
    return f"{sign}{symbol} {grouped}"

