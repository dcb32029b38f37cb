"""Text formatting helpers for amounts and month labels."""

from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, localcontext

DEFAULT_SYMBOL = "₹"
DEFAULT_GROUPING = "indian"
GROUPINGS = ("indian", "western")

_MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)


@dataclass(frozen=True)
class MoneyFormat:
    """Currency rendering: a symbol prefix and a digit-grouping style.

    ``indian`` groups the last three digits then pairs (``12,34,567``);
    ``western`` groups in threes (``1,234,567``). Fractions are always rounded
    away to whole units, half away from zero.
    """

    symbol: str = DEFAULT_SYMBOL
    grouping: str = DEFAULT_GROUPING

    def __post_init__(self) -> None:
        if self.grouping not in GROUPINGS:
            raise ValueError(f"grouping must be one of {GROUPINGS}, got {self.grouping!r}")


def _group_digits(digits: str, grouping: str) -> str:
    if len(digits) <= 3:
        return digits
    if grouping == "western":
        return f"{int(digits):,}"
    head, tail = digits[:-3], digits[-3:]
    pairs: list[str] = []
    while len(head) > 2:
        pairs.insert(0, head[-2:])
        head = head[:-2]
    if head:
        pairs.insert(0, head)
    return ",".join([*pairs, tail])


def round_half_up(value: float) -> int:
    """Nearest whole number, halves away from zero. Non-finite values give 0.

    Precision grows with the magnitude, so any finite float rounds.
    """

    if not math.isfinite(value):
        return 0
    exact = Decimal(str(value))
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, exact.adjusted() + 2)
        return int(exact.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def format_money(amount: float, fmt: MoneyFormat | None = None) -> str:
    """Render ``amount`` as whole currency units, e.g. ``₹32,403``."""

    fmt = fmt or MoneyFormat()
    whole = round_half_up(amount)
    sign = "-" if whole < 0 else ""
    digits = str(abs(whole))
    return f"{sign}{fmt.symbol}{_group_digits(digits, fmt.grouping)}"


def month_name(month: str) -> str:
    """``"2025-03"`` -> ``"March"``. Anything unparsable is returned unchanged."""

    try:
        idx = int(month.split("-")[1])
    except (IndexError, ValueError, AttributeError):
        return month
    if 1 <= idx <= 12:
        return _MONTH_NAMES[idx - 1]
    return month


__all__ = ["GROUPINGS", "MoneyFormat", "format_money", "month_name", "round_half_up"]
