"""Balance summary extraction.

Each summary figure sits on one anchor-labelled line followed by the
employee, employer and pension amounts. A missing line yields a zeroed
default so callers never have to null-check; parse_summary() records which
lines were missing in Summary.missing_fields.
"""

import logging
import re
from typing import Optional, Tuple

from passbook.core.settings import DefaultsConfig

from .amounts import parse_amount
from .models import Summary, Balance, ShareAmounts, Withdrawals, InterestDetails
from .sections import find_first_anchor, TAXABLE_ANCHOR

logger = logging.getLogger(__name__)

_SHARES = r'\s+([\d,]+)\s+([\d,]+)\s+([\d,]+)'

SUMMARY_PATTERNS = {
    'opening': re.compile(r'Opening Balance as on 31/03/(\d{4})' + _SHARES, re.IGNORECASE),
    'contributions': re.compile(r'Total Contributions.*?' + _SHARES, re.IGNORECASE),
    'transfer_ins': re.compile(r'Total Transfer-Ins.*?' + _SHARES, re.IGNORECASE),
    'withdrawals': re.compile(
        r'Total Withdrawals\s+for the year\[\s*(\d{4})\]' + _SHARES, re.IGNORECASE
    ),
    'closing': re.compile(r'Closing Balance as on 31/03/(\d{4})' + _SHARES, re.IGNORECASE),
}

# Yearly interest posting. Group 1 catches an "OB" prefix: the
# "OB Int. Updated upto" line restates the opening balance and is skipped.
INTEREST_RE = re.compile(
    r'(\bOB\s+)?\bInt\.\s+Updated\s+upto\s+(\d{2}/\d{2}/\d{4})' + _SHARES,
    re.IGNORECASE
)

# Order in which missing lines are reported
SUMMARY_FIELDS = ('opening', 'contributions', 'transfer_ins', 'withdrawals', 'interest', 'closing')

DEFAULT_OPENING_AS_ON = DefaultsConfig.opening_as_on
DEFAULT_CLOSING_AS_ON = DefaultsConfig.closing_as_on
DEFAULT_WITHDRAWAL_YEAR = DefaultsConfig.withdrawal_year
DEFAULT_INTEREST_STATUS = DefaultsConfig.interest_status


def _shares(match: re.Match, first_group: int = 1) -> ShareAmounts:
    return ShareAmounts(
        employee=parse_amount(match.group(first_group)),
        employer=parse_amount(match.group(first_group + 1)),
        pension=parse_amount(match.group(first_group + 2)),
    )


def _search(text: str, key: str) -> Optional[re.Match]:
    m = SUMMARY_PATTERNS[key].search(text)
    if not m:
        logger.debug(f"Summary line '{key}' not found, using default")
    return m


def _balance(m: Optional[re.Match], default_as_on: str) -> Balance:
    if not m:
        return Balance(as_on=default_as_on)
    return Balance(as_on=f"31/03/{m.group(1)}", shares=_shares(m, 2))


def _withdrawals(m: Optional[re.Match], default_year: str) -> Withdrawals:
    if not m:
        return Withdrawals(year=default_year)
    return Withdrawals(year=m.group(1), shares=_shares(m, 2))


def _interest(m: Optional[re.Match], default_status: str) -> InterestDetails:
    if not m:
        return InterestDetails(status=default_status)
    return InterestDetails(status=f"Updated upto {m.group(2)}", shares=_shares(m, 3))


def find_interest(text: str, taxable_anchor: str = TAXABLE_ANCHOR) -> Optional[re.Match]:
    """
    Return the final yearly interest line from the detailed pane, if any.

    Matches inside the taxable data pane and "OB Int." lines are excluded.
    The last remaining match wins, since some passbooks print the detailed
    pane twice.
    """
    taxable_idx = find_first_anchor(text, (taxable_anchor,))
    matches = [
        m for m in INTEREST_RE.finditer(text)
        if m.group(1) is None and (taxable_idx is None or m.start() < taxable_idx)
    ]
    if not matches:
        logger.debug("Yearly interest line not found, using default")
        return None
    return matches[-1]


def parse_opening_balance(text: str, default_as_on: str = DEFAULT_OPENING_AS_ON) -> Balance:
    return _balance(_search(text, 'opening'), default_as_on)


def parse_closing_balance(text: str, default_as_on: str = DEFAULT_CLOSING_AS_ON) -> Balance:
    return _balance(_search(text, 'closing'), default_as_on)


def parse_total(text: str, key: str) -> ShareAmounts:
    """Parse a 'Total Contributions' / 'Total Transfer-Ins' line."""
    m = _search(text, key)
    return _shares(m) if m else ShareAmounts()


def parse_withdrawals(text: str, default_year: str = DEFAULT_WITHDRAWAL_YEAR) -> Withdrawals:
    return _withdrawals(_search(text, 'withdrawals'), default_year)


def parse_interest(
    text: str,
    default_status: str = DEFAULT_INTEREST_STATUS,
    taxable_anchor: str = TAXABLE_ANCHOR,
) -> InterestDetails:
    return _interest(find_interest(text, taxable_anchor), default_status)


def parse_summary(
    text: str,
    defaults: Optional[Tuple[str, str, str, str]] = None,
    taxable_anchor: str = TAXABLE_ANCHOR,
) -> Summary:
    """
    Extract the balance summary block.

    Args:
        text: Decoded passbook text
        defaults: Optional (opening_as_on, closing_as_on, withdrawal_year,
            interest_status) overrides for the zeroed defaults
        taxable_anchor: Phrase opening the taxable pane, excluded from the
            interest search

    Returns:
        Summary with every field populated and the names of any lines that
        fell back to defaults in missing_fields
    """
    opening_as_on, closing_as_on, withdrawal_year, interest_status = defaults or (
        DEFAULT_OPENING_AS_ON, DEFAULT_CLOSING_AS_ON, DEFAULT_WITHDRAWAL_YEAR, DEFAULT_INTEREST_STATUS
    )

    matches = {key: _search(text, key) for key in SUMMARY_PATTERNS}
    matches['interest'] = find_interest(text, taxable_anchor)
    contributions = matches['contributions']
    transfer_ins = matches['transfer_ins']

    return Summary(
        opening_balance=_balance(matches['opening'], opening_as_on),
        closing_balance=_balance(matches['closing'], closing_as_on),
        total_contributions=_shares(contributions) if contributions else ShareAmounts(),
        total_transfer_ins=_shares(transfer_ins) if transfer_ins else ShareAmounts(),
        total_withdrawals=_withdrawals(matches['withdrawals'], withdrawal_year),
        interest_details=_interest(matches['interest'], interest_status),
        missing_fields=tuple(key for key in SUMMARY_FIELDS if matches[key] is None),
    )
