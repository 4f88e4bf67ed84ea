"""
Pytest configuration.

Adds the project root to the Python path so tests can import domain,
repositories, services and api, and provides isolated storage: every test
that asks for `workspace` gets an empty DB directory and a small reference
data set under tmp_path.
"""

import json
import sys
from pathlib import Path

import pytest

# Add the project root to the Python path
# so tests can import domain, repositories, etc.
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))


INVESTMENTS = [
    {"client_id": "CLI-001", "client_name": "Moderate Medium", "kyc": "Completed", "aml": "Pass",
     "total_aum": 2500000, "investment_group": "Moderate", "risk": "Medium"},
    {"client_id": "CLI-002", "client_name": "Aggressive High", "kyc": "Completed", "aml": "Pass",
     "total_aum": 12000000, "investment_group": "Aggressive", "risk": "High"},
    {"client_id": "CLI-003", "client_name": "KYC Pending", "kyc": "Pending", "aml": "Pass",
     "total_aum": 800000, "investment_group": "Moderate", "risk": "Medium"},
    {"client_id": "CLI-004", "client_name": "AML Fail", "kyc": "Completed", "aml": "Fail",
     "total_aum": 4300000, "investment_group": "Aggressive", "risk": "High"},
    {"client_id": "CLI-008", "client_name": "Conservative Low", "kyc": "Completed", "aml": "Pass",
     "total_aum": 600000, "investment_group": "Conservative", "risk": "Low"},
]

PRODUCTS = [
    {"product_code": "PROD-001", "name": "Growth Fund A", "category": "Mutual Fund",
     "risk_level": "Medium", "expected_return": "5-7%", "min_investment": 100000},
    {"product_code": "PROD-002", "name": "Conservative Bond Fund", "category": "Bond Fund",
     "risk_level": "Low", "expected_return": "2-3%", "min_investment": 50000},
    {"product_code": "PROD-003", "name": "Equity Growth Portfolio", "category": "Equity",
     "risk_level": "High", "expected_return": "8-10%", "min_investment": 500000},
]

CLIENTS = [
    {"client_id": "CLI-001", "name": "Moderate Medium", "cif": "0001", "email": "c1@example.com",
     "phone": "000-000-0001", "address": "Bangkok"},
]

EMPLOYEES = [
    {"employee_id": "EMP-001", "name": "Relationship Manager", "position": "RM",
     "department": "Wealth", "email": "emp1@example.com"},
]

TEMPLATES = [
    {"template_id": "TPL-001", "name": "Standard Proposal", "category": "Proposal",
     "description": "Default proposal layout"},
]


def _write_json(path: Path, data) -> None:
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")


@pytest.fixture
def workspace(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point storage at tmp_path: empty DB directory plus seeded reference data."""

    db_dir = tmp_path / "db"
    reference_dir = tmp_path / "reference"
    db_dir.mkdir()
    reference_dir.mkdir()

    _write_json(reference_dir / "investments.json", INVESTMENTS)
    _write_json(reference_dir / "products.json", PRODUCTS)
    _write_json(reference_dir / "clients.json", CLIENTS)
    _write_json(reference_dir / "employees.json", EMPLOYEES)
    _write_json(reference_dir / "templates.json", TEMPLATES)

    monkeypatch.setenv("OFFER_DB_DIR", str(db_dir))
    monkeypatch.setenv("OFFER_REFERENCE_DIR", str(reference_dir))
    return tmp_path
