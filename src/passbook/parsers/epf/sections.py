"""Locate the contribution table and taxable pane inside passbook text."""

import re
import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from passbook.core.settings import AnchorConfig

logger = logging.getLogger(__name__)

# Tried in order; the first anchor present wins
TABLE_START_ANCHORS = AnchorConfig.table_start
TABLE_END_ANCHORS = AnchorConfig.table_end
TAXABLE_ANCHOR = AnchorConfig.taxable


@dataclass(frozen=True)
class TableSection:
    """Offsets of the contribution table within the full text."""
    start: int
    end: int
    text: str


def find_first_anchor(text: str, anchors: Sequence[str], start: int = 0) -> Optional[int]:
    """
    Return the offset of the first anchor in ``anchors`` that occurs in text.

    Anchors are tried in priority order and matched case-insensitively.
    This is not the earliest-offset match: a later anchor in the list is only
    consulted when every earlier one is absent.

    Args:
        text: Text to search
        anchors: Ordered anchor phrases
        start: Offset to search from

    Returns:
        Offset of the winning anchor, or None if no anchor is present
    """
    for anchor in anchors:
        match = re.compile(re.escape(anchor), re.IGNORECASE).search(text, start)
        if match:
            return match.start()
    return None


def locate_table(
    text: str,
    start_anchors: Sequence[str] = TABLE_START_ANCHORS,
    end_anchors: Sequence[str] = TABLE_END_ANCHORS,
) -> Optional[TableSection]:
    """
    Find the contribution table boundaries.

    Returns:
        TableSection, or None when no start anchor is present
    """
    start = find_first_anchor(text, start_anchors)
    if start is None:
        logger.warning("Could not find contribution table start marker")
        return None

    end = find_first_anchor(text, end_anchors, start)
    if end is None:
        end = len(text)

    logger.debug(f"Contribution table located at [{start}:{end}]")
    return TableSection(start=start, end=end, text=text[start:end])


def locate_taxable_section(text: str, anchor: str = TAXABLE_ANCHOR) -> Optional[str]:
    """Return text from the taxable data anchor to end-of-text, or None."""
    idx = find_first_anchor(text, (anchor,))
    if idx is None:
        logger.debug("Taxable data section not present")
        return None
    return text[idx:]
