"""Passbook header extraction (establishment, member, UAN, DOB, FY)."""

import re
from typing import Optional

from passbook.core.settings import DefaultsConfig

from .models import MemberInfo

DEFAULT_FINANCIAL_YEAR = DefaultsConfig.financial_year

# Header anchors. Labels may be followed by ':', '-' or a '|' column separator.
HEADER_PATTERNS = {
    'establishment': re.compile(
        r'Establishment ID/Name\s*[:\-|]?\s*([A-Z0-9]+)\s*/\s*([^\n]+)', re.IGNORECASE
    ),
    'member': re.compile(
        r'Member ID/Name\s*[:\-|]?\s*([A-Z0-9]+)\s*/\s*([^\n]+)', re.IGNORECASE
    ),
    'uan': re.compile(r'UAN\s*[:\-|]?\s*(\d{12})', re.IGNORECASE),
    'dob': re.compile(r'Date of Birth\s*[:\-|]?\s*(\d{2}[\-/]\d{2}[\-/]\d{4})', re.IGNORECASE),
}

FY_RE = re.compile(r'(\d{4}-\d{4})')

PIPE_RE = re.compile(r'\s*\|\s*')
MULTISPACE_RE = re.compile(r'\s{2,}')


def clean_text_field(value: Optional[str]) -> Optional[str]:
    """Strip stray pipes and collapse whitespace in a header value."""
    if not value:
        return value
    value = PIPE_RE.sub(' ', value)
    value = MULTISPACE_RE.sub(' ', value)
    return value.strip()


def parse_member_info(text: str, default_financial_year: str = DEFAULT_FINANCIAL_YEAR) -> MemberInfo:
    """
    Extract the fixed header fields of a passbook.

    Missing fields are left as None; the financial year falls back to
    ``default_financial_year``.

    Args:
        text: Decoded passbook text

    Returns:
        MemberInfo
    """
    establishment_id = establishment_name = None
    m = HEADER_PATTERNS['establishment'].search(text)
    if m:
        establishment_id = m.group(1).strip()
        establishment_name = clean_text_field(m.group(2))

    member_id = member_name = None
    m = HEADER_PATTERNS['member'].search(text)
    if m:
        member_id = m.group(1).strip()
        member_name = clean_text_field(m.group(2))

    m = HEADER_PATTERNS['uan'].search(text)
    uan = m.group(1) if m else None

    m = HEADER_PATTERNS['dob'].search(text)
    date_of_birth = m.group(1) if m else None

    m = FY_RE.search(text)
    financial_year = m.group(1) if m else default_financial_year

    return MemberInfo(
        establishment_id=establishment_id,
        establishment_name=establishment_name,
        member_id=member_id,
        member_name=member_name,
        uan=uan,
        date_of_birth=date_of_birth,
        financial_year=financial_year,
    )
