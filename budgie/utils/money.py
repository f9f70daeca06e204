"""
Money formatting for API responses

Amounts are integer cents everywhere in the core; this module only renders
them.

Usage:
    from budgie.utils.money import format_money

    format_money(123456)   -> "1234.56"
    format_money(-5)       -> "-0.05"
"""


def format_money(cents: int) -> str:
    """
    Render integer cents as a decimal string with two places

    Args:
        cents: Amount in minor units (may be negative)

    Returns:
        "12.34" / "-0.05"
    """
    sign = "-" if cents < 0 else ""
    whole, fraction = divmod(abs(int(cents)), 100)
    return f"{sign}{whole}.{fraction:02d}"
