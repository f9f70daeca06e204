"""
Validation utilities for amounts entered as text
"""
import re
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Dict

from budgie.domain.events import UNALLOCATED


def normalize_decimal_input(value: str) -> str:
    """
    Normalize an amount: strip spaces, decimal comma to dot

    Example:
        >>> normalize_decimal_input(" 100,50 ")
        '100.50'
    """
    return value.strip().replace(",", ".")


def parse_cents(value: str) -> int:
    """
    Parse a decimal amount into integer cents

    Example:
        >>> parse_cents("12.5")
        1250

    Raises:
        ValueError: not a number, or more than 2 decimal places
    """
    normalized = normalize_decimal_input(value)
    if not re.fullmatch(r"-?\d+(\.\d{1,2})?", normalized):
        raise ValueError(f"Invalid amount: {value!r} (at most 2 decimal places)")
    try:
        amount = Decimal(normalized)
    except InvalidOperation as e:
        raise ValueError(f"Invalid amount: {value!r}") from e
    return int((amount * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def parse_amount(value: str) -> Dict[str, int]:
    """
    Parse an amount or an itemization into {target: cents}

    Example:
        >>> parse_amount("20")
        {'_': 2000}
        >>> parse_amount("groceries=12.50,_=3,groceries=1")
        {'groceries': 1350, '_': 300}

    Raises:
        ValueError: malformed entry or amount
    """
    if "=" not in value:
        return {UNALLOCATED: parse_cents(value)}

    itemized: Dict[str, int] = {}
    for entry in value.split(","):
        if not entry.strip():
            continue
        target, sep, subamount = entry.partition("=")
        target = target.strip()
        if not sep or not target:
            raise ValueError(f"Invalid itemization entry: {entry!r}")
        itemized[target] = itemized.get(target, 0) + parse_cents(subamount)
    return itemized
