"""
Rounding and display helpers shared by the cost components
"""
from decimal import Decimal, ROUND_HALF_UP
from typing import Union

Number = Union[int, float]


def round_currency(value: Number) -> int:
    """
    Round to whole ringgit, halves away from zero

    Args:
        value: Amount in RM

    Returns:
        Rounded amount
    """
    return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def format_rm(value: Number) -> str:
    """Format an amount as RM with thousands separators, e.g. RM10,500"""
    if float(value).is_integer():
        return f"RM{int(value):,}"
    return f"RM{value:,.2f}"


def days_label(days: int) -> str:
    return f"{days} day(s)"


def percent_label(rate: float) -> str:
    """0.5 -> '50%'"""
    return f"{round_currency(rate * 100)}%"
