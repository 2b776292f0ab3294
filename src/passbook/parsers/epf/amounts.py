"""Trailing numeric column scanner for passbook table lines.

Passbook rows lose their column alignment once decoded to text, so amounts
are recovered positionally from the right-hand end of a line:

    ... <EPF wage> <EPS wage> <employee> <employer> <pension>

Only the last three are mandatory. Lines with fewer than three trailing
numbers yield all-zero amounts.
"""

import re
from dataclasses import dataclass
from typing import Sequence

NUMERIC_TOKEN_RE = re.compile(r'^[\d,.]+$')
NON_DIGIT_RE = re.compile(r'\D')

MAX_AMOUNT_COLUMNS = 5
MIN_AMOUNT_COLUMNS = 3


@dataclass(frozen=True)
class AmountScan:
    """Amounts found at the end of one line."""
    epf_wage: int = 0
    eps_wage: int = 0
    employee_share: int = 0
    employer_share: int = 0
    pension: int = 0
    has_amounts: bool = False
    end_index: int = -1  # index of the last non-numeric token, -1 if none


def is_numeric_token(token: str) -> bool:
    """True if the token holds only digits, commas and periods."""
    return bool(NUMERIC_TOKEN_RE.match(token))


def parse_amount(token: str) -> int:
    """
    Convert an amount token to whole rupees.

    Every non-digit character is stripped, so "1,23,456" becomes 123456.
    Anything left without digits becomes 0.

    Examples:
        >>> parse_amount("1,800")
        1800
        >>> parse_amount("")
        0
    """
    digits = NON_DIGIT_RE.sub('', token or '')
    return int(digits) if digits else 0


def scan_amounts(tokens: Sequence[str]) -> AmountScan:
    """
    Scan tokens backwards and map trailing numbers to amount columns.

    Args:
        tokens: Whitespace-split tokens of a single line

    Returns:
        AmountScan with the positional column assignment
    """
    values = []
    i = len(tokens) - 1
    while i >= 0 and is_numeric_token(tokens[i]):
        values.insert(0, parse_amount(tokens[i]))
        i -= 1

    count = len(values)
    if count < MIN_AMOUNT_COLUMNS:
        return AmountScan(end_index=i)

    # Only the right-most five numbers can be amount columns
    return AmountScan(
        epf_wage=values[-5] if count >= 5 else 0,
        eps_wage=values[-4] if count >= 4 else 0,
        employee_share=values[-3],
        employer_share=values[-2],
        pension=values[-1],
        has_amounts=True,
        end_index=i,
    )


def scan_line(line: str) -> AmountScan:
    """Convenience wrapper: split a line on whitespace and scan it."""
    return scan_amounts(line.split())
