"""Lexical classification of contribution table lines."""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional

# <Mon-YYYY> <DD-MM-YYYY> marks the start of a table row
ROW_START_RE = re.compile(r'([A-Za-z]{3}-\d{4})\s+(\d{2}-\d{2}-\d{4})')
DATE_TOKEN_RE = re.compile(r'\d{2}-\d{2}-\d{4}')

TRANSACTION_TYPES = ('CR', 'DR')
DEFAULT_TRANSACTION_TYPE = 'CR'


class LineKind(Enum):
    """Kind of physical line inside the contribution table."""
    ROW_START = "ROW_START"
    CONTINUATION = "CONTINUATION"
    BLANK = "BLANK"


@dataclass(frozen=True)
class TableLine:
    """A trimmed table line tagged with its kind."""
    kind: LineKind
    text: str
    match: Optional[re.Match] = None


@dataclass(frozen=True)
class RowStart:
    """Leading columns of a row-start line."""
    wage_month: str
    credit_date: str
    transaction_type: str
    particulars_start: int  # token index where particulars begin


def classify_line(line: str) -> TableLine:
    """Tag a physical line as row start, continuation or blank."""
    text = line.strip()
    if not text:
        return TableLine(LineKind.BLANK, text)

    match = ROW_START_RE.search(text)
    if match:
        return TableLine(LineKind.ROW_START, text, match)
    return TableLine(LineKind.CONTINUATION, text)


def parse_row_start(tokens, match: re.Match) -> RowStart:
    """
    Read wage month, credit date and transaction type from row-start tokens.

    The first token shaped like DD-MM-YYYY is the credit date and the token
    before it is the wage month. A CR/DR marker right after the date is the
    transaction type; without one the type defaults to CR.
    """
    date_index = next(
        (i for i, token in enumerate(tokens) if DATE_TOKEN_RE.search(token)),
        1,
    )

    wage_month = tokens[date_index - 1] if date_index >= 1 else match.group(1)
    credit_date = tokens[date_index] if date_index < len(tokens) else match.group(2)

    next_token = tokens[date_index + 1] if date_index + 1 < len(tokens) else None
    if next_token in TRANSACTION_TYPES:
        return RowStart(wage_month, credit_date, next_token, date_index + 2)
    return RowStart(wage_month, credit_date, DEFAULT_TRANSACTION_TYPE, date_index + 1)
