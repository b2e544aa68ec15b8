"""
Utility functions for the ACM Claim Calculator
"""

from .formatting import (
    round_currency,
    format_rm,
    days_label,
    percent_label
)

__all__ = [
    "round_currency",
    "format_rm",
    "days_label",
    "percent_label"
]
