"""Contribution row classification and amount correction."""

import logging
import re
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

from passbook.core.settings import STATUTORY_EMPLOYEE_RATE

from .models import ContributionType, ContributionRecord, RecordBuffer

logger = logging.getLogger(__name__)

# Any of these marks a transfer from a previous employer's account
TRANSFER_IN_RE = re.compile(r'TRANSFER IN|VDR|INTEREST', re.IGNORECASE)
INTEREST_RE = re.compile(r'INTEREST', re.IGNORECASE)
ARREAR_RE = re.compile(r'Arrear', re.IGNORECASE)
OLD_MEMBER_ID_RE = re.compile(r'Old Member Id[\s:\-]+([A-Z0-9]{10,})', re.IGNORECASE)

WHITESPACE_RE = re.compile(r'\s+')


def classify_particulars(particulars: str) -> ContributionType:
    """
    Classify a row from its particulars text.

    Examples:
        >>> classify_particulars("Cont. For Due-Month 042024")
        <ContributionType.REGULAR: 'regular'>
        >>> classify_particulars("Claim: TRANSFER IN (Interest)")
        <ContributionType.TRANSFER_IN_INTEREST: 'transfer_in_interest'>
    """
    if TRANSFER_IN_RE.search(particulars):
        if INTEREST_RE.search(particulars):
            return ContributionType.TRANSFER_IN_INTEREST
        return ContributionType.TRANSFER_IN
    if ARREAR_RE.search(particulars):
        return ContributionType.ARREARS
    return ContributionType.REGULAR


def extract_old_member_id(particulars: str) -> Optional[str]:
    """Return the previous member id quoted in transfer particulars, if any."""
    match = OLD_MEMBER_ID_RE.search(particulars)
    return match.group(1) if match else None


def expected_employee_share(epf_wage: int, rate: Decimal = STATUTORY_EMPLOYEE_RATE) -> int:
    """Employee share at the statutory rate, rounded half up to whole rupees."""
    return int((Decimal(epf_wage) * rate).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def finalize_record(
    buffer: RecordBuffer,
    statutory_rate: Decimal = STATUTORY_EMPLOYEE_RATE,
) -> ContributionRecord:
    """
    Turn a buffered row into an immutable ContributionRecord.

    Regular rows that carry an EPF wage but no employee share get the share
    filled in at the statutory rate. The total contribution is derived from
    the three shares on the record, never read from the source.

    Args:
        buffer: Row accumulated by the table parser
        statutory_rate: Employee share rate used for the correction

    Returns:
        ContributionRecord
    """
    contribution_type = classify_particulars(buffer.particulars)

    old_member_id = None
    if contribution_type.is_transfer_in:
        old_member_id = extract_old_member_id(buffer.particulars)

    employee_share = buffer.employee_share
    if contribution_type == ContributionType.REGULAR and buffer.epf_wage > 0 and employee_share == 0:
        expected = expected_employee_share(buffer.epf_wage, statutory_rate)
        if expected > 0:
            logger.debug(
                f"{buffer.wage_month}: employee share missing, using {expected} "
                f"at {statutory_rate} of {buffer.epf_wage}"
            )
            employee_share = expected

    return ContributionRecord(
        wage_month=buffer.wage_month,
        credit_date=buffer.credit_date,
        transaction_type=buffer.transaction_type,
        particulars=WHITESPACE_RE.sub(' ', buffer.particulars).strip(),
        contribution_type=contribution_type,
        epf_wage=buffer.epf_wage,
        eps_wage=buffer.eps_wage,
        employee_share=employee_share,
        employer_share=buffer.employer_share,
        pension=buffer.pension,
        old_member_id=old_member_id,
        raw_line=buffer.raw_line,
    )
