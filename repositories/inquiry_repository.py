"""
Inquiry repository (persistence).

This module provides *only* persistence operations for the Inquiry domain
entity. No business rules (status transitions, identifier sequencing) belong
here.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, List, Mapping, Optional

from domain.inquiry import Inquiry, InquirySource, InquiryStatus
from repositories.record_store import RecordStore, parse_stored_datetime, stored_text
from repositories.storage import open_store

# File name for inquiry records under the configured DB directory.
_INQUIRIES_FILE: str = "inquiries.json"


def _store() -> RecordStore:
    return open_store(_INQUIRIES_FILE)


def _inquiry_to_row(inquiry: Inquiry) -> dict[str, Any]:
    """Convert a domain Inquiry to a stored record."""

    return {
        "id": inquiry.inquiry_id,
        "source": inquiry.source.value,
        "client_id": inquiry.client_id,
        "product_id": inquiry.product_id,
        "requested_amount": str(inquiry.requested_amount),
        "additional_remark": inquiry.additional_remark,
        "status": inquiry.status.value,
        "created_by": inquiry.created_by,
        "created_at": inquiry.created_at,
        "updated_at": inquiry.updated_at,
    }


def _row_to_inquiry(row: Mapping[str, Any]) -> Inquiry:
    """Convert a stored record into a domain Inquiry."""

    return Inquiry(
        inquiry_id=str(row["id"]),
        source=InquirySource(str(row["source"])),
        client_id=str(stored_text(row["client_id"])),
        product_id=str(stored_text(row["product_id"])),
        requested_amount=Decimal(str(row["requested_amount"])),
        additional_remark=stored_text(row.get("additional_remark")) or None,
        status=InquiryStatus(str(row["status"])),
        created_by=str(stored_text(row["created_by"])),
        created_at=parse_stored_datetime(row["created_at"]),
        updated_at=parse_stored_datetime(row["updated_at"]),
    )


def insert_inquiry(inquiry: Inquiry) -> Inquiry:
    """
    Append an Inquiry to the collection.

    Raises:
    - StorageIOError if the backing file cannot be read or written.
    """

    _store().create(_inquiry_to_row(inquiry))
    return inquiry


def get_inquiry_by_id(inquiry_id: str) -> Optional[Inquiry]:
    """
    Fetch an Inquiry by ID.

    Returns:
    - Inquiry if found
    - None if no record exists for the given ID
    """

    row = _store().find_one(lambda r: r.get("id") == inquiry_id)
    if row is None:
        return None
    return _row_to_inquiry(row)


def list_inquiries_by_filter(
    status: Optional[str] = None,
    client_id: Optional[str] = None,
    source: Optional[str] = None,
) -> List[Inquiry]:
    """
    List Inquiries in insertion order, optionally filtered.

    Args:
    - status: filter by status value (exact match, e.g. "Pending")
    - client_id: filter by client reference
    - source: filter by source channel value (e.g. "Web")
    """

    def matches(row: Mapping[str, Any]) -> bool:
        if status is not None and row.get("status") != status:
            return False
        if client_id is not None and stored_text(row.get("client_id")) != client_id:
            return False
        if source is not None and row.get("source") != source:
            return False
        return True

    return [_row_to_inquiry(row) for row in _store().find_many(matches)]


def list_inquiry_ids() -> List[str]:
    """Identifiers of every stored inquiry (used for sequence derivation)."""

    return [str(row["id"]) for row in _store().read_all()]


def replace_inquiry(inquiry: Inquiry) -> Optional[Inquiry]:
    """
    Overwrite the stored record with the same ID.

    Returns:
    - the Inquiry if a record was replaced
    - None if no record exists for its ID
    """

    row = _store().update(lambda r: r.get("id") == inquiry.inquiry_id, _inquiry_to_row(inquiry))
    if row is None:
        return None
    return inquiry


def delete_inquiry(inquiry_id: str) -> bool:
    """Remove the record with the given ID; True if one was removed."""

    return _store().delete(lambda r: r.get("id") == inquiry_id)


__all__ = [
    "insert_inquiry",
    "get_inquiry_by_id",
    "list_inquiries_by_filter",
    "list_inquiry_ids",
    "replace_inquiry",
    "delete_inquiry",
]
