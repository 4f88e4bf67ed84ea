"""
Domain: Reference data snapshots.

Clients, products and investment profiles are owned outside the workflows.
The workflows only read them; these types are immutable snapshots of a single
lookup.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Optional


class RiskLevel(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"

    @property
    def rank(self) -> int:
        """Total order used by risk comparison: Low(1) < Medium(2) < High(3)."""

        return _RISK_RANK[self]


_RISK_RANK = {
    RiskLevel.LOW: 1,
    RiskLevel.MEDIUM: 2,
    RiskLevel.HIGH: 3,
}


class KycStatus(str, Enum):
    COMPLETED = "Completed"
    PENDING = "Pending"
    EXPIRED = "Expired"
    NOT_STARTED = "Not Started"


class AmlStatus(str, Enum):
    PASS = "Pass"
    PENDING = "Pending"
    FAIL = "Fail"


class InvestmentGroup(str, Enum):
    CONSERVATIVE = "Conservative"
    MODERATE = "Moderate"
    AGGRESSIVE = "Aggressive"


@dataclass(frozen=True, slots=True)
class InvestmentProfile:
    """
    A client's investment profile.

    `risk` is the numeric risk tolerance; `investment_group` is the declared
    suitability group. They feed two different suitability rules.
    """

    client_id: str
    kyc: KycStatus
    aml: AmlStatus
    total_aum: Decimal
    investment_group: InvestmentGroup
    risk: RiskLevel
    client_name: Optional[str] = None
    last_review_date: Optional[str] = None
    next_review_date: Optional[str] = None


@dataclass(frozen=True, slots=True)
class Product:
    product_code: str
    name: str
    risk_level: RiskLevel
    min_investment: Decimal
    category: str = ""
    expected_return: str = ""
    description: str = ""


@dataclass(frozen=True, slots=True)
class Client:
    client_id: str
    name: str
    email: str
    phone: str = ""
    address: str = ""
    cif: Optional[str] = None


@dataclass(frozen=True, slots=True)
class Employee:
    employee_id: str
    name: str
    position: str = ""
    department: str = ""
    email: str = ""


@dataclass(frozen=True, slots=True)
class Template:
    template_id: str
    name: str
    category: str = ""
    description: str = ""
    created_date: Optional[str] = None
    updated_date: Optional[str] = None
