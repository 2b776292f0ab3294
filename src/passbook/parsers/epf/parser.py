"""EPF Passbook parser.

Sequences header, contribution table, summary and taxable pane extraction
into one ParseResult. The parser holds nothing but immutable settings, so a
single instance may be shared and called concurrently.
"""

import logging
import re
from datetime import datetime, timezone
from typing import Callable, Optional

from passbook.core.exceptions import InvalidInputError
from passbook.core.settings import ParserSettings

from .contributions import parse_contributions
from .insights import calculate_insights
from .member_info import parse_member_info
from .models import ParseResult, Metadata
from .pdf_extractor import extract_text, PDFSource
from .sections import find_first_anchor
from .summary import parse_summary
from .taxable import parse_taxable_data

logger = logging.getLogger(__name__)

PRINTED_ON_RE = re.compile(r'Printed on\s*[:\-]\s*(\d{2}-\d{2}-\d{4}\s+\d{2}:\d{2}:\d{2})')

SUMMARY_WARNINGS = {
    'opening': "Opening balance not found",
    'contributions': "Total contributions not found",
    'transfer_ins': "Total transfer-ins not found",
    'withdrawals': "Total withdrawals not found",
    'interest': "Yearly interest not found",
    'closing': "Closing balance not found",
}


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def format_timestamp(moment: datetime) -> str:
    """ISO-8601 UTC with milliseconds and a trailing Z."""
    moment = moment.astimezone(timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def extract_print_date(text: str) -> Optional[str]:
    """Return the 'Printed on' timestamp, if the passbook carries one."""
    m = PRINTED_ON_RE.search(text)
    return m.group(1) if m else None


class EPFPassbookParser:
    """
    Parser for EPFO Member Passbook text.

    Extracts member info, the contribution table, balance summary, taxable
    data and roll-up insights.

    Examples:
        >>> parser = EPFPassbookParser()
        >>> result = parser.parse(Path("epf_passbook.pdf"))
        >>> print(f"UAN: {result.member_info.uan}")
        >>> print(f"Records: {len(result.contributions)}")
    """

    def __init__(
        self,
        settings: Optional[ParserSettings] = None,
        clock: Callable[[], datetime] = _utc_now,
    ):
        """
        Initialize EPF passbook parser.

        Args:
            settings: Anchors, defaults and correction rate (defaults if None)
            clock: Source of the parsedAt timestamp
        """
        self.settings = settings or ParserSettings()
        self.clock = clock

    def parse(self, source: PDFSource, password: Optional[str] = None) -> ParseResult:
        """
        Extract text from a passbook PDF and parse it.

        Args:
            source: Raw PDF bytes or a path to the PDF
            password: PDF password (if encrypted)

        Returns:
            ParseResult

        Raises:
            ExtractionError: If the PDF cannot be decoded
        """
        text = extract_text(source, password=password)
        return self.parse_text(text)

    def parse_text(self, text: str) -> ParseResult:
        """
        Parse decoded passbook text.

        Missing sections degrade to zeroed defaults and are reported in
        ParseResult.warnings.

        Args:
            text: Decoded passbook text

        Returns:
            ParseResult

        Raises:
            InvalidInputError: If text is not a str
        """
        if not isinstance(text, str):
            raise InvalidInputError(type(text))

        settings = self.settings
        anchors = settings.anchors
        defaults = settings.defaults
        warnings = []

        logger.info("Starting EPF passbook parsing")

        member_info = parse_member_info(text, defaults.financial_year)
        if member_info.uan is None:
            warnings.append("UAN not found in passbook header")

        if find_first_anchor(text, anchors.table_start) is None:
            warnings.append("Contribution table not found")
        contributions = parse_contributions(
            text,
            start_anchors=anchors.table_start,
            end_anchors=anchors.table_end,
            statutory_rate=settings.statutory_employee_rate,
        )

        summary = parse_summary(
            text,
            (defaults.opening_as_on, defaults.closing_as_on,
             defaults.withdrawal_year, defaults.interest_status),
            anchors.taxable,
        )
        warnings.extend(SUMMARY_WARNINGS[key] for key in summary.missing_fields)

        taxable_data = parse_taxable_data(text, anchors.taxable)
        if find_first_anchor(text, (anchors.taxable,)) is None:
            warnings.append("Taxable data section not found")

        insights = calculate_insights(contributions)

        metadata = Metadata(
            parsed_at=format_timestamp(self.clock()),
            total_records=len(contributions),
            pdf_type=defaults.pdf_type,
            printed_on=extract_print_date(text) or defaults.printed_on,
        )

        for warning in warnings:
            logger.debug(warning)
        logger.info(f"EPF passbook parsed: {len(contributions)} contribution records")

        return ParseResult(
            success=True,
            member_info=member_info,
            contributions=contributions,
            summary=summary,
            taxable_data=taxable_data,
            insights=insights,
            metadata=metadata,
            warnings=warnings,
        )


def parse_passbook_text(text: str, settings: Optional[ParserSettings] = None) -> ParseResult:
    """Parse decoded passbook text with a throwaway parser."""
    return EPFPassbookParser(settings).parse_text(text)
