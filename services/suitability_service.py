"""
Suitability service for KYC, AML and risk matching.

Two suitability rules coexist and are deliberately kept apart:
- check_suitability compares the client's numeric risk tolerance with the
  product's risk level (client risk must be >= product risk). Operators use it
  to ask "may this client buy this product?".
- compute_kyc_and_suitability checks the product's risk level against the
  allow-list of the client's declared investment group. Offer creation stores
  its result on the offer.

Both are read-only: they look up reference data and never write anything.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import FrozenSet, Mapping, Optional

from domain.offer import CheckResult
from domain.reference import AmlStatus, InvestmentGroup, KycStatus, RiskLevel
from repositories.reference_repository import get_investment_profile, get_product

# Product risk levels each investment group may hold.
GROUP_ALLOWED_RISKS: Mapping[InvestmentGroup, FrozenSet[RiskLevel]] = {
    InvestmentGroup.CONSERVATIVE: frozenset({RiskLevel.LOW}),
    InvestmentGroup.MODERATE: frozenset({RiskLevel.LOW, RiskLevel.MEDIUM}),
    InvestmentGroup.AGGRESSIVE: frozenset({RiskLevel.LOW, RiskLevel.MEDIUM, RiskLevel.HIGH}),
}


@dataclass(frozen=True, slots=True)
class SuitabilityResult:
    """
    Outcome of a risk-tolerance suitability check.

    `reason` is shown to operators and names the exact cause of a failure.
    """

    is_suitable: bool
    client_risk: Optional[RiskLevel]
    product_risk: Optional[RiskLevel]
    reason: str


@dataclass(frozen=True, slots=True)
class ComplianceChecks:
    """KYC and suitability results stored on an offer at creation."""

    kyc_status: CheckResult
    suitability_status: CheckResult


def compare_risk(client_risk: RiskLevel, product_risk: RiskLevel) -> bool:
    """
    Return True if a client with `client_risk` may invest in a `product_risk` product.

    Example:
        compare_risk(RiskLevel.MEDIUM, RiskLevel.LOW)   # True
        compare_risk(RiskLevel.MEDIUM, RiskLevel.HIGH)  # False
    """

    return client_risk.rank >= product_risk.rank


def check_suitability(client_id: str, product_id: str) -> SuitabilityResult:
    """
    Check whether a client's risk tolerance permits a product.

    Fails softly: missing data, incomplete KYC and failed AML screening all
    produce `is_suitable=False` with an explanatory reason rather than an
    exception. Storage failures still raise StorageIOError.

    Checks, in order:
    1. Investment profile exists for the client
    2. Product exists
    3. KYC is Completed
    4. AML screening is Pass
    5. Client risk >= product risk
    """

    profile = get_investment_profile(client_id)
    if profile is None:
        return SuitabilityResult(
            is_suitable=False,
            client_risk=None,
            product_risk=None,
            reason=f"Investment data not found for client {client_id}",
        )

    product = get_product(product_id)
    if product is None:
        return SuitabilityResult(
            is_suitable=False,
            client_risk=profile.risk,
            product_risk=None,
            reason=f"Product not found: {product_id}",
        )

    if profile.kyc is not KycStatus.COMPLETED:
        return SuitabilityResult(
            is_suitable=False,
            client_risk=profile.risk,
            product_risk=product.risk_level,
            reason=f"KYC not completed for client (status: {profile.kyc.value})",
        )

    if profile.aml is not AmlStatus.PASS:
        return SuitabilityResult(
            is_suitable=False,
            client_risk=profile.risk,
            product_risk=product.risk_level,
            reason=f"AML check not passed for client (status: {profile.aml.value})",
        )

    is_suitable = compare_risk(profile.risk, product.risk_level)
    if is_suitable:
        reason = (
            f"Client risk level ({profile.risk.value}) is suitable for "
            f"product risk level ({product.risk_level.value})"
        )
    else:
        reason = (
            f"Client risk level ({profile.risk.value}) is too low for product risk level "
            f"({product.risk_level.value}). Client can only invest in products with risk "
            f"level up to {profile.risk.value}."
        )

    return SuitabilityResult(
        is_suitable=is_suitable,
        client_risk=profile.risk,
        product_risk=product.risk_level,
        reason=reason,
    )


def compute_kyc_and_suitability(client_id: str, product_risk_level: RiskLevel) -> ComplianceChecks:
    """
    Compute the compliance results recorded on a new offer.

    - KYC passes only if KYC is Completed AND AML screening is Pass.
    - Suitability passes if `product_risk_level` is in the allow-list of the
      client's investment group.
    - A client without an investment profile fails both.
    """

    profile = get_investment_profile(client_id)
    if profile is None:
        return ComplianceChecks(kyc_status=CheckResult.FAIL, suitability_status=CheckResult.FAIL)

    kyc_passed = profile.kyc is KycStatus.COMPLETED and profile.aml is AmlStatus.PASS
    suitable = product_risk_level in GROUP_ALLOWED_RISKS.get(profile.investment_group, frozenset())

    return ComplianceChecks(
        kyc_status=CheckResult.PASS if kyc_passed else CheckResult.FAIL,
        suitability_status=CheckResult.PASS if suitable else CheckResult.FAIL,
    )


def get_investment_group(client_id: str) -> Optional[InvestmentGroup]:
    """Declared investment group for a client, or None if the client has no profile."""

    profile = get_investment_profile(client_id)
    if profile is None:
        return None
    return profile.investment_group


__all__ = [
    "GROUP_ALLOWED_RISKS",
    "SuitabilityResult",
    "ComplianceChecks",
    "compare_risk",
    "check_suitability",
    "compute_kyc_and_suitability",
    "get_investment_group",
]
