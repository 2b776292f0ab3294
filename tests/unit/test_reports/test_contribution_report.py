"""
Tests for the contribution report.

Covers DataFrame views of a parsed passbook and the Excel export.
"""

import pandas as pd
import pytest

from passbook.reports.contribution_report import (
    contributions_to_frame,
    summarize_by_category,
    taxable_to_frame,
    balances_to_frame,
    write_excel_report,
    CONTRIBUTION_COLUMNS,
    CATEGORY_COLUMNS,
)


@pytest.fixture
def empty_result(parser):
    return parser.parse_text("")


class TestContributionsFrame:
    """Tests for contributions_to_frame."""

    def test_rows_in_passbook_order(self, sample_result):
        df = contributions_to_frame(sample_result)

        assert list(df.columns) == CONTRIBUTION_COLUMNS
        assert len(df) == 8
        assert list(df["Wage Month"])[:3] == ["Apr-2024", "May-2024", "Jun-2024"]
        assert df["Total"].sum() == sum(c.total_contribution for c in sample_result.contributions)

    def test_empty(self, empty_result):
        df = contributions_to_frame(empty_result)

        assert df.empty
        assert list(df.columns) == CONTRIBUTION_COLUMNS


class TestSummarizeByCategory:
    """Tests for summarize_by_category."""

    def test_sample(self, sample_result):
        df = summarize_by_category(sample_result)

        assert list(df.columns) == CATEGORY_COLUMNS
        assert list(df["Category"]) == ["transfer_in", "regular", "transfer_in_interest", "arrears"]
        regular = df[df["Category"] == "regular"].iloc[0]
        assert regular["Records"] == 5
        assert regular["Total"] == 29400

    def test_empty(self, empty_result):
        df = summarize_by_category(empty_result)

        assert df.empty
        assert list(df.columns) == CATEGORY_COLUMNS


class TestOtherFrames:

    def test_taxable(self, sample_result):
        df = taxable_to_frame(sample_result)

        assert list(df["Month"]) == ["Apr-2024", "May-2024"]
        assert df.iloc[-1]["Non-Taxable Balance"] == 153600

    def test_balances(self, sample_result):
        df = balances_to_frame(sample_result)

        assert len(df) == 6
        assert df.iloc[0]["Item"] == "Opening Balance (31/03/2024)"
        assert df.iloc[-1]["Item"] == "Closing Balance (31/03/2025)"
        assert df.iloc[-1]["Total"] == 342290


class TestWriteExcelReport:
    """Tests for write_excel_report."""

    def test_sheets_written(self, sample_result, tmp_path):
        output = tmp_path / "reports" / "passbook.xlsx"

        path = write_excel_report(sample_result, output)

        assert path.exists()
        sheets = pd.read_excel(path, sheet_name=None)
        assert list(sheets) == ["Member", "Contributions", "By Category", "Balances", "Taxable Data"]
        assert len(sheets["Contributions"]) == 8

    def test_empty_result(self, empty_result, tmp_path):
        path = write_excel_report(empty_result, tmp_path / "empty.xlsx")

        sheets = pd.read_excel(path, sheet_name=None)
        assert sheets["Contributions"].empty
