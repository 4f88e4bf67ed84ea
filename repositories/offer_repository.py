"""
Offer repository (persistence).

This module provides *only* persistence operations for the Offer domain
entity. It does not enforce business rules (transitions, compliance gates);
it only stores and fetches offer records. Offers are never removed here:
soft deletion is a status change made by the workflow.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Any, List, Mapping, Optional

from domain.offer import CheckResult, Offer, OfferStatus
from repositories.record_store import RecordStore, parse_stored_datetime, stored_text
from repositories.storage import open_store

# File name for offer records under the configured DB directory.
_OFFERS_FILE: str = "offers.json"


def _store() -> RecordStore:
    return open_store(_OFFERS_FILE)


def _optional_datetime(row: Mapping[str, Any], key: str) -> Optional[datetime]:
    value = row.get(key)
    return parse_stored_datetime(value) if value else None


def _offer_to_row(offer: Offer) -> dict[str, Any]:
    """Convert a domain Offer to a stored record."""

    return {
        "id": offer.offer_id,
        "inquiry_id": offer.inquiry_id,
        "client_id": offer.client_id,
        "product_id": offer.product_id,
        "investment_amount": str(offer.investment_amount),
        "expected_return": offer.expected_return,
        "maturity_date": offer.maturity_date,
        "proposal_remarks": offer.proposal_remarks,
        "status": offer.status.value,
        "created_by": offer.created_by,

        # KYC & suitability, fixed at creation
        "kyc_status": offer.kyc_status.value,
        "suitability_status": offer.suitability_status.value,

        # Dates
        "created_at": offer.created_at,
        "updated_at": offer.updated_at,
        "expiry_date": offer.expiry_date,
        "sent_at": offer.sent_at,
        "accepted_at": offer.accepted_at,
        "approved_at": offer.approved_at,

        # Acceptance / approval
        "accepted_by": offer.accepted_by,
        "payment_method": offer.payment_method,
        "otp_verified": offer.otp_verified,
        "approved_by": offer.approved_by,
    }


def _row_to_offer(row: Mapping[str, Any]) -> Offer:
    """Convert a stored record into a domain Offer."""

    return Offer(
        offer_id=str(row["id"]),
        inquiry_id=row.get("inquiry_id") or None,
        client_id=str(stored_text(row["client_id"])),
        product_id=str(stored_text(row["product_id"])),
        investment_amount=Decimal(str(row["investment_amount"])),
        expected_return=str(stored_text(row.get("expected_return", ""))),
        maturity_date=parse_stored_datetime(row["maturity_date"]),
        proposal_remarks=str(stored_text(row.get("proposal_remarks")) or ""),
        status=OfferStatus(str(row["status"])),
        created_by=str(stored_text(row["created_by"])),
        kyc_status=CheckResult(str(row["kyc_status"])),
        suitability_status=CheckResult(str(row["suitability_status"])),
        created_at=parse_stored_datetime(row["created_at"]),
        updated_at=parse_stored_datetime(row["updated_at"]),
        expiry_date=parse_stored_datetime(row["expiry_date"]),
        sent_at=_optional_datetime(row, "sent_at"),
        accepted_at=_optional_datetime(row, "accepted_at"),
        approved_at=_optional_datetime(row, "approved_at"),
        accepted_by=stored_text(row.get("accepted_by")) or None,
        payment_method=stored_text(row.get("payment_method")) or None,
        otp_verified=bool(row.get("otp_verified", False)),
        approved_by=stored_text(row.get("approved_by")) or None,
    )


def insert_offer(offer: Offer) -> Offer:
    """
    Append an Offer to the collection.

    Raises:
    - StorageIOError if the backing file cannot be read or written.
    """

    _store().create(_offer_to_row(offer))
    return offer


def get_offer_by_id(offer_id: str) -> Optional[Offer]:
    """
    Fetch an Offer by ID.

    Returns:
    - Offer if found
    - None if no record exists for the given ID
    """

    row = _store().find_one(lambda r: r.get("id") == offer_id)
    if row is None:
        return None
    return _row_to_offer(row)


def list_offers_by_filter(
    status: Optional[str] = None,
    client_id: Optional[str] = None,
    created_by: Optional[str] = None,
) -> List[Offer]:
    """
    List Offers in insertion order, optionally filtered.

    Args:
    - status: filter by status value (exact match, e.g. "Sent")
    - client_id: filter by client reference
    - created_by: filter by creator identifier
    """

    def matches(row: Mapping[str, Any]) -> bool:
        if status is not None and row.get("status") != status:
            return False
        if client_id is not None and stored_text(row.get("client_id")) != client_id:
            return False
        if created_by is not None and stored_text(row.get("created_by")) != created_by:
            return False
        return True

    return [_row_to_offer(row) for row in _store().find_many(matches)]


def list_offers_by_inquiry(inquiry_id: str) -> List[Offer]:
    """Offers created by converting the given inquiry."""

    return [_row_to_offer(row) for row in _store().find_many(lambda r: r.get("inquiry_id") == inquiry_id)]


def list_offer_ids() -> List[str]:
    """Identifiers of every stored offer (used for sequence derivation)."""

    return [str(row["id"]) for row in _store().read_all()]


def replace_offer(offer: Offer) -> Optional[Offer]:
    """
    Overwrite the stored record with the same ID.

    Returns:
    - the Offer if a record was replaced
    - None if no record exists for its ID
    """

    row = _store().update(lambda r: r.get("id") == offer.offer_id, _offer_to_row(offer))
    if row is None:
        return None
    return offer


__all__ = [
    "insert_offer",
    "get_offer_by_id",
    "list_offers_by_filter",
    "list_offers_by_inquiry",
    "list_offer_ids",
    "replace_offer",
]
