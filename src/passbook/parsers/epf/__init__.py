"""EPF (Employee Provident Fund) parser module.

Provides parser for EPFO Member Passbook PDF files.
"""

from .models import (
    ContributionType,
    MemberInfo,
    ContributionRecord,
    Summary,
    TaxableData,
    Insights,
    Metadata,
    ParseResult,
)
from .parser import EPFPassbookParser, parse_passbook_text
from .pdf_extractor import extract_text

__all__ = [
    "EPFPassbookParser",
    "parse_passbook_text",
    "extract_text",
    "ContributionType",
    "MemberInfo",
    "ContributionRecord",
    "Summary",
    "TaxableData",
    "Insights",
    "Metadata",
    "ParseResult",
]
