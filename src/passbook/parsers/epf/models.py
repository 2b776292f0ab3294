"""EPF passbook data models.

Every model serializes to the camelCase wire shape consumed by downstream
persistence/API layers via ``to_dict()``. Amounts are whole rupees.
"""

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, List, Dict, Any, Tuple

from passbook.core.settings import DefaultsConfig


class ContributionType(Enum):
    """Category of a passbook contribution row."""
    REGULAR = "regular"
    TRANSFER_IN = "transfer_in"
    TRANSFER_IN_INTEREST = "transfer_in_interest"
    ARREARS = "arrears"

    @property
    def is_transfer_in(self) -> bool:
        return self in (ContributionType.TRANSFER_IN, ContributionType.TRANSFER_IN_INTEREST)


@dataclass(frozen=True)
class MemberInfo:
    """Passbook header: establishment, member and UAN details."""
    establishment_id: Optional[str] = None
    establishment_name: Optional[str] = None
    member_id: Optional[str] = None
    member_name: Optional[str] = None
    uan: Optional[str] = None
    date_of_birth: Optional[str] = None
    financial_year: str = DefaultsConfig.financial_year

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "establishmentId": self.establishment_id,
            "establishmentName": self.establishment_name,
            "memberId": self.member_id,
            "memberName": self.member_name,
            "uan": self.uan,
            "dateOfBirth": self.date_of_birth,
            "financialYear": self.financial_year,
        }


@dataclass
class RecordBuffer:
    """
    Mutable row under construction while walking the contribution table.

    Amount fields are overwritten wholesale when a continuation line
    supplies the numeric columns.
    """
    wage_month: str
    credit_date: str
    transaction_type: str
    particulars: str
    raw_line: str
    epf_wage: int = 0
    eps_wage: int = 0
    employee_share: int = 0
    employer_share: int = 0
    pension: int = 0

    @property
    def has_amounts(self) -> bool:
        return not (self.employee_share == 0 and self.pension == 0)

    def append(self, particulars_text: str, raw_text: str) -> None:
        """Append a continuation line, one space apart."""
        if particulars_text:
            self.particulars = f"{self.particulars} {particulars_text}"
        self.raw_line = f"{self.raw_line} {raw_text}"


@dataclass(frozen=True)
class ContributionRecord:
    """One logical row of the member contribution table."""
    wage_month: str
    credit_date: str
    transaction_type: str
    particulars: str
    contribution_type: ContributionType
    epf_wage: int = 0
    eps_wage: int = 0
    employee_share: int = 0
    employer_share: int = 0
    pension: int = 0
    old_member_id: Optional[str] = None
    raw_line: str = ""

    @property
    def total_contribution(self) -> int:
        return self.employee_share + self.employer_share + self.pension

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "wageMonth": self.wage_month,
            "creditDate": self.credit_date,
            "transactionType": self.transaction_type,
            "particulars": self.particulars,
            "contributionType": self.contribution_type.value,
            "oldMemberId": self.old_member_id,
            "wages": {"epf": self.epf_wage, "eps": self.eps_wage},
            "contributions": {
                "employee": self.employee_share,
                "employer": self.employer_share,
                "pension": self.pension,
            },
            "totalContribution": self.total_contribution,
            "rawLine": self.raw_line,
        }


@dataclass(frozen=True)
class ShareAmounts:
    """Employee / employer / pension split shared by most summary lines."""
    employee: int = 0
    employer: int = 0
    pension: int = 0

    @property
    def total(self) -> int:
        return self.employee + self.employer + self.pension

    def to_dict(self) -> Dict[str, int]:
        return {"employee": self.employee, "employer": self.employer, "pension": self.pension}


@dataclass(frozen=True)
class Balance:
    """Opening or closing balance as on a date."""
    as_on: str
    shares: ShareAmounts = field(default_factory=ShareAmounts)

    def to_dict(self, with_totals: bool = False) -> Dict[str, Any]:
        data = {"asOn": self.as_on, **self.shares.to_dict()}
        if with_totals:
            data["totalEPF"] = self.shares.employee + self.shares.employer
            data["totalCorpus"] = self.shares.total
        return data


@dataclass(frozen=True)
class Withdrawals:
    """Total withdrawals for a year."""
    year: str
    shares: ShareAmounts = field(default_factory=ShareAmounts)

    def to_dict(self) -> Dict[str, Any]:
        return {"year": self.year, **self.shares.to_dict(), "total": self.shares.total}


@dataclass(frozen=True)
class InterestDetails:
    """Interest posted for the year."""
    status: str
    shares: ShareAmounts = field(default_factory=ShareAmounts)

    def to_dict(self) -> Dict[str, Any]:
        return {"status": self.status, **self.shares.to_dict()}


@dataclass(frozen=True)
class Summary:
    """
    Balance summary block printed below the contribution table.

    missing_fields names the lines that were not found and hold their
    zeroed defaults. It is not serialized.
    """
    opening_balance: Balance
    closing_balance: Balance
    total_contributions: ShareAmounts = field(default_factory=ShareAmounts)
    total_transfer_ins: ShareAmounts = field(default_factory=ShareAmounts)
    total_withdrawals: Withdrawals = field(
        default_factory=lambda: Withdrawals(year=DefaultsConfig.withdrawal_year)
    )
    interest_details: InterestDetails = field(
        default_factory=lambda: InterestDetails(status=DefaultsConfig.interest_status)
    )
    missing_fields: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "openingBalance": self.opening_balance.to_dict(),
            "totalContributions": {
                "amount": self.total_contributions.total,
                "details": self.total_contributions.to_dict(),
            },
            "totalTransferIns": {
                "amount": self.total_transfer_ins.total,
                "details": self.total_transfer_ins.to_dict(),
            },
            "totalWithdrawals": self.total_withdrawals.to_dict(),
            "interestDetails": self.interest_details.to_dict(),
            "closingBalance": self.closing_balance.to_dict(with_totals=True),
        }


@dataclass(frozen=True)
class TaxableMonth:
    """One month of the taxable data pane."""
    month: str
    monthly_contribution: int = 0
    non_taxable_balance: int = 0
    taxable_balance: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "month": self.month,
            "monthlyContribution": self.monthly_contribution,
            "nonTaxableBalance": self.non_taxable_balance,
            "taxableBalance": self.taxable_balance,
        }


@dataclass(frozen=True)
class TaxableData:
    """Tax-year breakdown of balances into taxable and non-taxable portions."""
    monthly_breakdown: List[TaxableMonth] = field(default_factory=list)
    closing_taxable: int = 0
    closing_non_taxable: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "monthlyBreakdown": [m.to_dict() for m in self.monthly_breakdown],
            "closingBalance": {
                "taxable": self.closing_taxable,
                "nonTaxable": self.closing_non_taxable,
            },
        }


@dataclass(frozen=True)
class Insights:
    """Statistics rolled up over the finished contribution list."""
    total_contribution_records: int = 0
    regular_count: int = 0
    regular_amount: int = 0
    transfer_in_count: int = 0
    transfer_in_amount: int = 0
    # Reserved: no missing-month detection is performed
    missing_months: List[str] = field(default_factory=list)
    account_status: str = "Active"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalContributionRecords": self.total_contribution_records,
            "regularContributions": {
                "count": self.regular_count,
                "totalAmount": self.regular_amount,
            },
            "transferIns": {
                "count": self.transfer_in_count,
                "totalAmount": self.transfer_in_amount,
            },
            "missingMonths": list(self.missing_months),
            "accountStatus": self.account_status,
        }


@dataclass(frozen=True)
class Metadata:
    """Parse bookkeeping."""
    parsed_at: str
    total_records: int
    pdf_type: str = DefaultsConfig.pdf_type
    printed_on: str = DefaultsConfig.printed_on

    def to_dict(self) -> Dict[str, Any]:
        return {
            "parsedAt": self.parsed_at,
            "totalRecords": self.total_records,
            "pdfType": self.pdf_type,
            "printedOn": self.printed_on,
        }


@dataclass
class ParseResult:
    """Result of parsing an EPF passbook."""
    success: bool
    member_info: MemberInfo
    contributions: List[ContributionRecord]
    summary: Summary
    taxable_data: TaxableData
    insights: Insights
    metadata: Metadata
    warnings: List[str] = field(default_factory=list)

    def add_warning(self, warning: str):
        """Add a warning message."""
        self.warnings.append(warning)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the wire shape. Warnings are not serialized."""
        return {
            "success": self.success,
            "memberInfo": self.member_info.to_dict(),
            "contributions": [c.to_dict() for c in self.contributions],
            "summary": self.summary.to_dict(),
            "taxableData": self.taxable_data.to_dict(),
            "insights": self.insights.to_dict(),
            "metadata": self.metadata.to_dict(),
        }

    def to_json(self, indent: Optional[int] = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)
