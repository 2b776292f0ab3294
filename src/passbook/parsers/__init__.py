"""
Passbook parsers.

Supports parsing of:
- EPF member passbooks (EPFO portal PDF)
"""

from .epf import EPFPassbookParser, ParseResult, parse_passbook_text

__all__ = [
    "EPFPassbookParser",
    "ParseResult",
    "parse_passbook_text",
]
