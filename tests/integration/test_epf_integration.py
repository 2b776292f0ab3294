"""EPF passbook integration tests.

End-to-end runs over the bundled sample text, plus optional runs against a
real passbook PDF (skipped unless EPF_TEST_PASSBOOK is set).
"""

import json

from passbook.core.settings import ParserSettings
from passbook.parsers.epf import EPFPassbookParser, ContributionType


class TestSamplePassbook:
    """Full parse of the sample passbook text."""

    def test_contribution_records(self, sample_result):
        records = sample_result.contributions

        assert [c.wage_month for c in records] == [
            "Apr-2024", "May-2024", "Jun-2024", "Jun-2024",
            "Jul-2024", "Aug-2024", "Sep-2024", "Oct-2024",
        ]
        assert [c.contribution_type for c in records] == [
            ContributionType.REGULAR,
            ContributionType.REGULAR,
            ContributionType.TRANSFER_IN,
            ContributionType.TRANSFER_IN_INTEREST,
            ContributionType.ARREARS,
            ContributionType.REGULAR,
            ContributionType.REGULAR,
            ContributionType.REGULAR,
        ]

    def test_wrapped_transfer_row(self, sample_result):
        transfer = sample_result.contributions[2]

        assert transfer.employee_share == 25000
        assert transfer.employer_share == 10000
        assert transfer.pension == 0
        assert transfer.old_member_id == "MHBAN00987650000054321"
        assert "MHBAN00987650000054321" in transfer.raw_line

    def test_corrected_employee_share(self, sample_result):
        august = sample_result.contributions[5]

        assert august.employee_share == 1800
        assert august.total_contribution == 3600

    def test_wrapped_particulars(self, sample_result):
        september = sample_result.contributions[6]

        assert september.particulars == "Cont. For Due-Month 102024"
        assert september.total_contribution == 3600

    def test_withdrawal_row(self, sample_result):
        october = sample_result.contributions[7]

        assert october.transaction_type == "DR"
        assert october.total_contribution == 15000

    def test_insights(self, sample_result):
        assert sample_result.insights.to_dict() == {
            "totalContributionRecords": 8,
            "regularContributions": {"count": 5, "totalAmount": 29400},
            "transferIns": {"count": 2, "totalAmount": 38500},
            "missingMonths": [],
            "accountStatus": "Active",
        }

    def test_closing_balance(self, sample_result):
        closing = sample_result.summary.to_dict()["closingBalance"]

        assert closing["totalEPF"] == 335874
        assert closing["totalCorpus"] == 342290

    def test_round_trips_through_json(self, sample_result):
        assert json.loads(sample_result.to_json()) == sample_result.to_dict()

    def test_case_variant_anchors(self, parser, sample_text):
        shouted = sample_text.replace("EPF Wages", "EPF WAGES").replace(
            "Total Contributions", "TOTAL CONTRIBUTIONS"
        )
        assert len(parser.parse_text(shouted).contributions) == 8

    def test_custom_anchor_settings(self, fixed_clock, sample_text):
        settings = ParserSettings.from_dict({"anchors": {"table_end": ["Total Transfer-Ins"]}})
        parser = EPFPassbookParser(settings, clock=fixed_clock)

        assert len(parser.parse_text(sample_text).contributions) == 8


class TestRealPassbook:
    """Parse a real EPFO passbook PDF."""

    def test_epf_parse_basic(self, epf_file, epf_password):
        result = EPFPassbookParser().parse(epf_file, password=epf_password)

        assert result.success
        assert result.member_info.uan is not None, "UAN not extracted"
        assert len(result.contributions) > 0, "No contributions extracted"

        print(f"\n✓ Parsed {epf_file.name}")
        print(f"  UAN: {result.member_info.uan}")
        print(f"  Records: {len(result.contributions)}")

    def test_epf_totals_consistent(self, epf_file, epf_password):
        result = EPFPassbookParser().parse(epf_file, password=epf_password)

        for c in result.contributions:
            assert c.total_contribution == c.employee_share + c.employer_share + c.pension
        assert result.insights.total_contribution_records == len(result.contributions)
