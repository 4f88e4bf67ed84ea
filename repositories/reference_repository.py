"""
Reference data repository (read-only).

Clients, products, investment profiles, employees and templates are owned
outside the inquiry/offer workflows and shipped as static JSON files. This
module only reads them; every call reads the file fresh, so there is no cache
to invalidate and no staleness guarantee either.
"""

from __future__ import annotations

import json
import logging
from decimal import Decimal
from typing import Any, List, Mapping, Optional

from domain.reference import (
    AmlStatus,
    Client,
    Employee,
    InvestmentGroup,
    InvestmentProfile,
    KycStatus,
    Product,
    RiskLevel,
    Template,
)
from repositories.record_store import StorageIOError
from repositories.storage import get_reference_dir

logger = logging.getLogger(__name__)

_CLIENTS_FILE = "clients.json"
_PRODUCTS_FILE = "products.json"
_INVESTMENTS_FILE = "investments.json"
_EMPLOYEES_FILE = "employees.json"
_TEMPLATES_FILE = "templates.json"


def _read_reference(file_name: str) -> List[Mapping[str, Any]]:
    """
    Load one reference collection.

    Raises:
        StorageIOError: if the file is missing, unreadable or not a JSON array.
    """

    path = get_reference_dir() / file_name
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        logger.error("Reference data file not found: %s", path)
        raise StorageIOError(f"Reference data file not found: {path}") from e
    except OSError as e:
        logger.error("Error reading reference data %s: %s", path, e)
        raise StorageIOError(f"Failed to read {path}: {e}") from e
    except ValueError as e:
        logger.error("Malformed reference data in %s: %s", path, e)
        raise StorageIOError(f"Malformed data in {path}: {e}") from e

    if not isinstance(data, list):
        raise StorageIOError(f"Malformed data in {path}: expected a list of records")
    return data


def _row_to_profile(row: Mapping[str, Any]) -> InvestmentProfile:
    return InvestmentProfile(
        client_id=str(row["client_id"]),
        client_name=row.get("client_name"),
        kyc=KycStatus(str(row["kyc"])),
        aml=AmlStatus(str(row["aml"])),
        total_aum=Decimal(str(row.get("total_aum", 0))),
        investment_group=InvestmentGroup(str(row["investment_group"])),
        risk=RiskLevel(str(row["risk"])),
        last_review_date=row.get("last_review_date"),
        next_review_date=row.get("next_review_date"),
    )


def _row_to_product(row: Mapping[str, Any]) -> Product:
    return Product(
        product_code=str(row["product_code"]),
        name=str(row["name"]),
        category=str(row.get("category", "")),
        risk_level=RiskLevel(str(row["risk_level"])),
        expected_return=str(row.get("expected_return", "")),
        min_investment=Decimal(str(row.get("min_investment", 0))),
        description=str(row.get("description", "")),
    )


def list_investment_profiles() -> List[InvestmentProfile]:
    return [_row_to_profile(row) for row in _read_reference(_INVESTMENTS_FILE)]


def get_investment_profile(client_id: str) -> Optional[InvestmentProfile]:
    """
    Fetch the investment profile for a client.

    Returns:
        InvestmentProfile or None if the client has no profile
    """

    for row in _read_reference(_INVESTMENTS_FILE):
        if row.get("client_id") == client_id:
            return _row_to_profile(row)
    return None


def list_products() -> List[Product]:
    return [_row_to_product(row) for row in _read_reference(_PRODUCTS_FILE)]


def get_product(product_code: str) -> Optional[Product]:
    """
    Fetch a product by its code (e.g. "PROD-001").

    Returns:
        Product or None if not found
    """

    for row in _read_reference(_PRODUCTS_FILE):
        if row.get("product_code") == product_code:
            return _row_to_product(row)
    return None


def list_clients() -> List[Client]:
    return [
        Client(
            client_id=str(row["client_id"]),
            name=str(row["name"]),
            cif=row.get("cif"),
            email=str(row.get("email", "")),
            phone=str(row.get("phone", "")),
            address=str(row.get("address", "")),
        )
        for row in _read_reference(_CLIENTS_FILE)
    ]


def list_employees() -> List[Employee]:
    return [
        Employee(
            employee_id=str(row["employee_id"]),
            name=str(row["name"]),
            position=str(row.get("position", "")),
            department=str(row.get("department", "")),
            email=str(row.get("email", "")),
        )
        for row in _read_reference(_EMPLOYEES_FILE)
    ]


def list_templates() -> List[Template]:
    return [
        Template(
            template_id=str(row["template_id"]),
            name=str(row["name"]),
            category=str(row.get("category", "")),
            description=str(row.get("description", "")),
            created_date=row.get("created_date"),
            updated_date=row.get("updated_date"),
        )
        for row in _read_reference(_TEMPLATES_FILE)
    ]


__all__ = [
    "list_investment_profiles",
    "get_investment_profile",
    "list_products",
    "get_product",
    "list_clients",
    "list_employees",
    "list_templates",
]
