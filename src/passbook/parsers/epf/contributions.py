"""Contribution table parser.

Walks the member contribution table one physical line at a time:

    NoCurrentRecord --row start--> BuildingRecord
    BuildingRecord  --row start--> emit buffer, BuildingRecord(new)
    BuildingRecord  --continuation--> BuildingRecord(merged)
    end of table: emit any buffered row

Header lines seen before the first row start are ignored.
"""

import logging
from decimal import Decimal
from typing import List, Optional, Iterable, Sequence

from .amounts import scan_amounts, AmountScan
from .classifier import finalize_record, STATUTORY_EMPLOYEE_RATE
from .lines import classify_line, parse_row_start, LineKind, TableLine
from .models import ContributionRecord, RecordBuffer
from .sections import locate_table, TABLE_START_ANCHORS, TABLE_END_ANCHORS

logger = logging.getLogger(__name__)


def _apply_amounts(buffer: RecordBuffer, amounts: AmountScan) -> None:
    buffer.epf_wage = amounts.epf_wage
    buffer.eps_wage = amounts.eps_wage
    buffer.employee_share = amounts.employee_share
    buffer.employer_share = amounts.employer_share
    buffer.pension = amounts.pension


def start_record(line: TableLine) -> RecordBuffer:
    """Build a fresh buffer from a row-start line."""
    tokens = line.text.split()
    row = parse_row_start(tokens, line.match)
    amounts = scan_amounts(tokens)

    if amounts.end_index >= row.particulars_start:
        particulars = " ".join(tokens[row.particulars_start:amounts.end_index + 1])
    else:
        particulars = line.text

    buffer = RecordBuffer(
        wage_month=row.wage_month,
        credit_date=row.credit_date,
        transaction_type=row.transaction_type,
        particulars=particulars,
        raw_line=line.text,
    )
    _apply_amounts(buffer, amounts)
    return buffer


def merge_continuation(buffer: RecordBuffer, line: TableLine) -> None:
    """
    Fold a continuation line into the buffered row.

    Rows whose amount columns wrapped onto a following line still have zero
    employee share and pension; such a line is rescanned and, if it carries
    amounts, they replace the buffered ones. Only the text ahead of those
    amounts joins the particulars.
    """
    if not buffer.has_amounts:
        tokens = line.text.split()
        amounts = scan_amounts(tokens)
        if amounts.has_amounts:
            logger.debug(f"{buffer.wage_month}: amounts recovered from continuation line")
            _apply_amounts(buffer, amounts)
            buffer.append(" ".join(tokens[:amounts.end_index + 1]), line.text)
            return

    buffer.append(line.text, line.text)


class ContributionTableParser:
    """
    Single-pass state machine over contribution table lines.

    A parser instance holds the row being built, so use one per table.
    parse_contributions() does this for you.
    """

    def __init__(self, statutory_rate: Decimal = STATUTORY_EMPLOYEE_RATE):
        self.statutory_rate = statutory_rate
        self.records: List[ContributionRecord] = []
        self._current: Optional[RecordBuffer] = None

    def feed(self, raw_line: str) -> None:
        """Process one physical line."""
        line = classify_line(raw_line)

        if line.kind == LineKind.BLANK:
            return

        if line.kind == LineKind.ROW_START:
            self._emit()
            self._current = start_record(line)
        elif self._current is not None:
            merge_continuation(self._current, line)

    def finish(self) -> List[ContributionRecord]:
        """Flush the buffered row and return every record in table order."""
        self._emit()
        return self.records

    def _emit(self) -> None:
        if self._current is not None:
            self.records.append(finalize_record(self._current, self.statutory_rate))
            self._current = None


def parse_table_lines(
    lines: Iterable[str],
    statutory_rate: Decimal = STATUTORY_EMPLOYEE_RATE,
) -> List[ContributionRecord]:
    """Parse already-isolated table lines into records."""
    parser = ContributionTableParser(statutory_rate)
    for line in lines:
        parser.feed(line)
    return parser.finish()


def parse_contributions(
    text: str,
    start_anchors: Sequence[str] = TABLE_START_ANCHORS,
    end_anchors: Sequence[str] = TABLE_END_ANCHORS,
    statutory_rate: Decimal = STATUTORY_EMPLOYEE_RATE,
) -> List[ContributionRecord]:
    """
    Extract contribution records from full passbook text.

    Args:
        text: Decoded passbook text
        start_anchors: Table start anchors, in priority order
        end_anchors: Table end anchors, in priority order
        statutory_rate: Employee share rate for missing-share correction

    Returns:
        Records in table order; empty when the table is absent
    """
    section = locate_table(text, start_anchors, end_anchors)
    if section is None:
        return []

    records = parse_table_lines(section.text.split('\n'), statutory_rate)
    logger.debug(f"Contribution table yielded {len(records)} records")
    return records
