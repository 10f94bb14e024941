"""Shared utilities used across the Saathi dialog core."""

import re
from typing import Union


def extract_digits(value: str) -> str:
    """Concatenate every digit run in a spoken or typed answer.

    Examples:
        >>> extract_digits("call me at 98765 43210")
        '9876543210'
        >>> extract_digits("no number here")
        ''
    """
    return "".join(re.findall(r"\d+", value))


def format_rupees(amount: Union[int, float]) -> str:
    """Render an amount the way it is read out: no decimals for whole rupees.

    Examples:
        >>> format_rupees(770.0)
        '770'
        >>> format_rupees(-12.5)
        '-12.5'
    """
    if float(amount).is_integer():
        return str(int(amount))
    return str(round(float(amount), 2))
