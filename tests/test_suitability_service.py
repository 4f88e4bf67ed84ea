"""
Tests for `services/suitability_service.py`.

Covers contract rules:
- compare_risk: client risk must be >= product risk (Low < Medium < High).
- check_suitability fails softly with a reason naming the cause, in order:
  missing profile, missing product, KYC, AML, risk mismatch.
- compute_kyc_and_suitability: KYC needs Completed AND Pass; suitability uses
  the investment group allow-list; a missing profile fails both.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from domain.offer import CheckResult
from domain.reference import InvestmentGroup, RiskLevel
from repositories.record_store import StorageIOError
from services.suitability_service import (
    check_suitability,
    compare_risk,
    compute_kyc_and_suitability,
    get_investment_group,
)


@pytest.mark.parametrize(
    "client_risk,product_risk,expected",
    [
        (RiskLevel.LOW, RiskLevel.LOW, True),
        (RiskLevel.LOW, RiskLevel.MEDIUM, False),
        (RiskLevel.LOW, RiskLevel.HIGH, False),
        (RiskLevel.MEDIUM, RiskLevel.LOW, True),
        (RiskLevel.MEDIUM, RiskLevel.MEDIUM, True),
        (RiskLevel.MEDIUM, RiskLevel.HIGH, False),
        (RiskLevel.HIGH, RiskLevel.LOW, True),
        (RiskLevel.HIGH, RiskLevel.MEDIUM, True),
        (RiskLevel.HIGH, RiskLevel.HIGH, True),
    ],
)
def test_compare_risk(client_risk: RiskLevel, product_risk: RiskLevel, expected: bool) -> None:
    assert compare_risk(client_risk, product_risk) is expected


def test_suitable_pair(workspace: Path) -> None:
    result = check_suitability("CLI-001", "PROD-002")

    assert result.is_suitable is True
    assert result.client_risk is RiskLevel.MEDIUM
    assert result.product_risk is RiskLevel.LOW
    assert result.reason == "Client risk level (Medium) is suitable for product risk level (Low)"


def test_risk_mismatch_reason(workspace: Path) -> None:
    """Medium-risk client vs High-risk product."""

    result = check_suitability("CLI-001", "PROD-003")

    assert result.is_suitable is False
    assert result.client_risk is RiskLevel.MEDIUM
    assert result.product_risk is RiskLevel.HIGH
    assert result.reason == (
        "Client risk level (Medium) is too low for product risk level (High). "
        "Client can only invest in products with risk level up to Medium."
    )


def test_missing_profile(workspace: Path) -> None:
    result = check_suitability("CLI-999", "PROD-001")

    assert result.is_suitable is False
    assert result.client_risk is None
    assert result.product_risk is None
    assert result.reason == "Investment data not found for client CLI-999"


def test_missing_product(workspace: Path) -> None:
    result = check_suitability("CLI-001", "PROD-999")

    assert result.is_suitable is False
    assert result.client_risk is RiskLevel.MEDIUM
    assert result.reason == "Product not found: PROD-999"


def test_kyc_not_completed(workspace: Path) -> None:
    result = check_suitability("CLI-003", "PROD-002")

    assert result.is_suitable is False
    assert result.reason == "KYC not completed for client (status: Pending)"


def test_aml_not_passed(workspace: Path) -> None:
    """AML Fail blocks even a High-risk client from a Low-risk product."""

    result = check_suitability("CLI-004", "PROD-002")

    assert result.is_suitable is False
    assert result.reason == "AML check not passed for client (status: Fail)"


@pytest.mark.parametrize(
    "client_id,product_risk,kyc,suitability",
    [
        ("CLI-001", RiskLevel.MEDIUM, CheckResult.PASS, CheckResult.PASS),
        ("CLI-001", RiskLevel.HIGH, CheckResult.PASS, CheckResult.FAIL),
        ("CLI-008", RiskLevel.LOW, CheckResult.PASS, CheckResult.PASS),
        ("CLI-008", RiskLevel.MEDIUM, CheckResult.PASS, CheckResult.FAIL),
        ("CLI-002", RiskLevel.HIGH, CheckResult.PASS, CheckResult.PASS),
        ("CLI-003", RiskLevel.LOW, CheckResult.FAIL, CheckResult.PASS),
        ("CLI-004", RiskLevel.MEDIUM, CheckResult.FAIL, CheckResult.PASS),
        ("CLI-999", RiskLevel.LOW, CheckResult.FAIL, CheckResult.FAIL),
    ],
)
def test_compute_kyc_and_suitability(
    workspace: Path,
    client_id: str,
    product_risk: RiskLevel,
    kyc: CheckResult,
    suitability: CheckResult,
) -> None:
    checks = compute_kyc_and_suitability(client_id, product_risk)

    assert checks.kyc_status is kyc
    assert checks.suitability_status is suitability


def test_get_investment_group(workspace: Path) -> None:
    assert get_investment_group("CLI-008") is InvestmentGroup.CONSERVATIVE
    assert get_investment_group("CLI-999") is None


def test_missing_reference_file_raises(workspace: Path) -> None:
    (workspace / "reference" / "investments.json").unlink()

    with pytest.raises(StorageIOError):
        check_suitability("CLI-001", "PROD-001")
