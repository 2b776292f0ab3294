"""
Shared pytest fixtures for passbook tests.

Provides sample passbook text, a fixed clock and common utilities.
"""

import pytest
import sys
from pathlib import Path
from datetime import datetime, timezone

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from passbook.parsers.epf.parser import EPFPassbookParser


FIXED_NOW = datetime(2025, 6, 1, 9, 30, 0, tzinfo=timezone.utc)


@pytest.fixture
def fixtures_path():
    """Get path to test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def sample_text(fixtures_path):
    """Decoded text of a representative EPF passbook."""
    return (fixtures_path / "epf_passbook_sample.txt").read_text(encoding="utf-8")


@pytest.fixture
def fixed_clock():
    """Clock that always returns FIXED_NOW."""
    return lambda: FIXED_NOW


@pytest.fixture
def parser(fixed_clock):
    """Parser with default settings and a fixed clock."""
    return EPFPassbookParser(clock=fixed_clock)


@pytest.fixture
def sample_result(parser, sample_text):
    """ParseResult for the sample passbook."""
    return parser.parse_text(sample_text)
