"""
utils/formatting.py -- Indian-style number and currency rendering.

format_indian_number(1234567.5) -> "12,34,567.5"
format_currency(25_00_000)      -> "₹25.00 L"
format_currency(2_50_00_000)    -> "₹2.50 Cr"
format_currency(50_000)         -> "₹50,000"

Grouping: the last three integer digits form one group, every group to
their left has two digits. Presentation only; the engine never calls these.
"""
from __future__ import annotations

RUPEE = "₹"
LAKH = 100_000
CRORE = 10_000_000


def _group_indian(digits: str) -> str:
    if len(digits) <= 3:
        return digits
    head, last_three = digits[:-3], digits[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    return ",".join(groups) + "," + last_three


def format_indian_number(num: float | int | None) -> str:
    """
    Group ``num`` with Indian commas, keeping any fractional part as is.

    None renders as an empty string; whole floats drop the trailing '.0'.
    """
    if num is None:
        return ""
    if isinstance(num, float) and num.is_integer():
        num = int(num)

    text = str(num)
    sign = ""
    if text.startswith("-"):
        sign, text = "-", text[1:]
    integer, _, decimal = text.partition(".")

    formatted = _group_indian(integer)
    return f"{sign}{formatted}.{decimal}" if decimal else f"{sign}{formatted}"


def format_currency(num: float | int) -> str:
    """
    Rupee amount scaled to crore / lakh above those thresholds.

    Scaling looks at the magnitude; a negative amount renders as "₹-5.00 L".
    """
    sign = "-" if num < 0 else ""
    magnitude = abs(num)
    if magnitude >= CRORE:
        return f"{RUPEE}{sign}{magnitude / CRORE:.2f} Cr"
    if magnitude >= LAKH:
        return f"{RUPEE}{sign}{magnitude / LAKH:.2f} L"
    return f"{RUPEE}{sign}{format_indian_number(round(magnitude))}"
