"""Taxable data pane extraction."""

import logging
import re

from .amounts import parse_amount
from .models import TaxableData, TaxableMonth
from .sections import locate_taxable_section, TAXABLE_ANCHOR

logger = logging.getLogger(__name__)

# <Mon-YYYY> <monthly contribution> <non-taxable balance> <taxable balance>
TAXABLE_ROW_RE = re.compile(r'^([A-Za-z]{3}-\d{4})\s+([\d,]+)\s+([\d,]+)\s+([\d,]+)')
# Closing Balance [as on DD/MM/YYYY] <non-taxable> <taxable>. The detailed
# pane's three-figure "Closing Balance as on ..." line can also appear in the
# taxable pane and must not match.
TAXABLE_CLOSING_RE = re.compile(
    r'^Closing Balance(?:\s+as on\s+\d{2}/\d{2}/\d{4})?\s+([\d,]+)\s+([\d,]+)$',
    re.IGNORECASE
)


def parse_taxable_data(text: str, anchor: str = TAXABLE_ANCHOR) -> TaxableData:
    """
    Extract the monthly taxable/non-taxable breakdown.

    Args:
        text: Decoded passbook text
        anchor: Phrase that opens the taxable pane

    Returns:
        TaxableData; empty breakdown and zero closing balance when the pane
        is absent
    """
    section = locate_taxable_section(text, anchor)
    if section is None:
        return TaxableData()

    months = []
    closing_non_taxable = closing_taxable = 0

    for line in section.split('\n'):
        trimmed = line.strip()

        m = TAXABLE_ROW_RE.match(trimmed)
        if m:
            months.append(TaxableMonth(
                month=m.group(1),
                monthly_contribution=parse_amount(m.group(2)),
                non_taxable_balance=parse_amount(m.group(3)),
                taxable_balance=parse_amount(m.group(4)),
            ))
            continue

        m = TAXABLE_CLOSING_RE.match(trimmed)
        if m:
            closing_non_taxable = parse_amount(m.group(1))
            closing_taxable = parse_amount(m.group(2))

    logger.debug(f"Taxable data: {len(months)} monthly rows")
    return TaxableData(
        monthly_breakdown=months,
        closing_taxable=closing_taxable,
        closing_non_taxable=closing_non_taxable,
    )
