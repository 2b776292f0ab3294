"""Tabular reports over parsed passbooks."""

from .contribution_report import (
    contributions_to_frame,
    summarize_by_category,
    taxable_to_frame,
    balances_to_frame,
    write_excel_report,
)

__all__ = [
    "contributions_to_frame",
    "summarize_by_category",
    "taxable_to_frame",
    "balances_to_frame",
    "write_excel_report",
]
