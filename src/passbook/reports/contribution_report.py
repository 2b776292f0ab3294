"""Contribution report: DataFrame views and Excel export of a parsed passbook."""

import logging
from pathlib import Path

import pandas as pd

from passbook.parsers.epf.models import ParseResult

logger = logging.getLogger(__name__)

CONTRIBUTION_COLUMNS = [
    "Wage Month", "Credit Date", "Type", "Particulars", "Category",
    "EPF Wages", "EPS Wages", "Employee", "Employer", "Pension", "Total",
]
CATEGORY_COLUMNS = ["Category", "Records", "Total"]
TAXABLE_COLUMNS = ["Month", "Monthly Contribution", "Non-Taxable Balance", "Taxable Balance"]


def contributions_to_frame(result: ParseResult) -> pd.DataFrame:
    """One row per contribution record, in passbook order."""
    rows = [
        {
            "Wage Month": c.wage_month,
            "Credit Date": c.credit_date,
            "Type": c.transaction_type,
            "Particulars": c.particulars,
            "Category": c.contribution_type.value,
            "EPF Wages": c.epf_wage,
            "EPS Wages": c.eps_wage,
            "Employee": c.employee_share,
            "Employer": c.employer_share,
            "Pension": c.pension,
            "Total": c.total_contribution,
        }
        for c in result.contributions
    ]
    return pd.DataFrame(rows, columns=CONTRIBUTION_COLUMNS)


def summarize_by_category(result: ParseResult) -> pd.DataFrame:
    """Record count and total contribution per category."""
    df = contributions_to_frame(result)
    if df.empty:
        return pd.DataFrame(columns=CATEGORY_COLUMNS)

    category_df = df.groupby("Category").agg({
        "Wage Month": "count",
        "Total": "sum",
    }).reset_index()
    category_df.columns = CATEGORY_COLUMNS
    return category_df.sort_values("Total", ascending=False).reset_index(drop=True)


def taxable_to_frame(result: ParseResult) -> pd.DataFrame:
    """Monthly taxable/non-taxable breakdown."""
    rows = [
        {
            "Month": m.month,
            "Monthly Contribution": m.monthly_contribution,
            "Non-Taxable Balance": m.non_taxable_balance,
            "Taxable Balance": m.taxable_balance,
        }
        for m in result.taxable_data.monthly_breakdown
    ]
    return pd.DataFrame(rows, columns=TAXABLE_COLUMNS)


def balances_to_frame(result: ParseResult) -> pd.DataFrame:
    """Opening balance, yearly movements and closing balance as rows."""
    summary = result.summary
    lines = [
        (f"Opening Balance ({summary.opening_balance.as_on})", summary.opening_balance.shares),
        ("Total Contributions", summary.total_contributions),
        ("Total Transfer-Ins", summary.total_transfer_ins),
        (f"Total Withdrawals ({summary.total_withdrawals.year})", summary.total_withdrawals.shares),
        (f"Interest ({summary.interest_details.status})", summary.interest_details.shares),
        (f"Closing Balance ({summary.closing_balance.as_on})", summary.closing_balance.shares),
    ]
    return pd.DataFrame(
        [
            {
                "Item": label,
                "Employee": shares.employee,
                "Employer": shares.employer,
                "Pension": shares.pension,
                "Total": shares.total,
            }
            for label, shares in lines
        ]
    )


def write_excel_report(result: ParseResult, output_path: Path) -> Path:
    """
    Write the passbook as a multi-sheet Excel workbook.

    Sheets: Member, Contributions, By Category, Balances, Taxable Data.

    Args:
        result: Parsed passbook
        output_path: Destination .xlsx path

    Returns:
        The written path
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    member = result.member_info.to_dict()
    member_df = pd.DataFrame({"Field": list(member.keys()), "Value": list(member.values())})

    with pd.ExcelWriter(output_path, engine="openpyxl") as writer:
        member_df.to_excel(writer, sheet_name="Member", index=False)
        contributions_to_frame(result).to_excel(writer, sheet_name="Contributions", index=False)
        summarize_by_category(result).to_excel(writer, sheet_name="By Category", index=False)
        balances_to_frame(result).to_excel(writer, sheet_name="Balances", index=False)
        taxable_to_frame(result).to_excel(writer, sheet_name="Taxable Data", index=False)

    logger.info(f"Wrote passbook report to {output_path}")
    return output_path
