"""Tests for table line classification."""

from passbook.parsers.epf.lines import (
    classify_line, parse_row_start, LineKind, ROW_START_RE
)


class TestClassifyLine:
    """Tests for row-start / continuation / blank tagging."""

    def test_row_start(self):
        line = classify_line("  Apr-2024 10-05-2024 CR Cont. For Due-Month 1 2 3  ")

        assert line.kind == LineKind.ROW_START
        assert line.text == "Apr-2024 10-05-2024 CR Cont. For Due-Month 1 2 3"
        assert line.match.group(1) == "Apr-2024"
        assert line.match.group(2) == "10-05-2024"

    def test_row_start_mid_line(self):
        """Test the month/date pair may appear after leading text."""
        assert classify_line("1 Apr-2024 10-05-2024 CR x").kind == LineKind.ROW_START

    def test_continuation(self):
        assert classify_line("MHBAN00987650000054321 25,000 10,000 0").kind == LineKind.CONTINUATION

    def test_month_without_date_is_continuation(self):
        assert classify_line("Apr-2024 CR something").kind == LineKind.CONTINUATION

    def test_blank(self):
        assert classify_line("").kind == LineKind.BLANK
        assert classify_line("   \t ").kind == LineKind.BLANK

    def test_short_year_date_not_row_start(self):
        """Test two-digit-year dates do not start a row."""
        assert ROW_START_RE.search("Apr-2024 10-05-24 CR") is None


class TestParseRowStart:
    """Tests for leading column extraction."""

    def test_with_type_marker(self):
        line = classify_line("Apr-2024 10-05-2024 DR Claim 1 2 3")
        row = parse_row_start(line.text.split(), line.match)

        assert row.wage_month == "Apr-2024"
        assert row.credit_date == "10-05-2024"
        assert row.transaction_type == "DR"
        assert row.particulars_start == 3

    def test_without_type_marker_defaults_to_cr(self):
        line = classify_line("Apr-2024 10-05-2024 Claim 1 2 3")
        row = parse_row_start(line.text.split(), line.match)

        assert row.transaction_type == "CR"
        assert row.particulars_start == 2

    def test_lowercase_marker_is_not_a_type(self):
        line = classify_line("Apr-2024 10-05-2024 cr Claim")
        row = parse_row_start(line.text.split(), line.match)

        assert row.transaction_type == "CR"
        assert row.particulars_start == 2

    def test_leading_token_before_month(self):
        line = classify_line("7 Apr-2024 10-05-2024 CR Claim")
        row = parse_row_start(line.text.split(), line.match)

        assert row.wage_month == "Apr-2024"
        assert row.particulars_start == 4

    def test_line_ends_at_date(self):
        line = classify_line("Apr-2024 10-05-2024")
        row = parse_row_start(line.text.split(), line.match)

        assert row.transaction_type == "CR"
        assert row.particulars_start == 2
