"""Roll-up statistics over parsed contribution records."""

from typing import Sequence

from .models import ContributionRecord, ContributionType, Insights


def calculate_insights(contributions: Sequence[ContributionRecord]) -> Insights:
    """
    Count and total regular contributions and transfer-ins in one pass.

    Arrears rows are counted in totalContributionRecords only.
    """
    regular_count = regular_amount = 0
    transfer_count = transfer_amount = 0

    for record in contributions:
        if record.contribution_type == ContributionType.REGULAR:
            regular_count += 1
            regular_amount += record.total_contribution
        elif record.contribution_type.is_transfer_in:
            transfer_count += 1
            transfer_amount += record.total_contribution

    return Insights(
        total_contribution_records=len(contributions),
        regular_count=regular_count,
        regular_amount=regular_amount,
        transfer_in_count=transfer_count,
        transfer_in_amount=transfer_amount,
    )
