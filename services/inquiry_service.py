"""
Inquiry workflow service.

Handles:
- Inquiry identifier generation (INQ-YYYYMMDD-NNN, derived from stored inquiries)
- Creation, patching and hard deletion
- Conversion of a Pending inquiry into an Offer

Conversion order matters: the offer is created and persisted first, and only
then is the inquiry marked Converted. If offer creation fails the inquiry
stays Pending and the error propagates.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import List, Optional

from domain.errors import InvalidOperationError, NotFoundError
from domain.identifiers import INQUIRY_PREFIX, next_daily_id
from domain.inquiry import (
    Inquiry,
    InquirySource,
    InquiryStatus,
    InquiryUpdate,
    NewInquiry,
)
from domain.offer import Offer
from domain.reference import RiskLevel
from domain.time import utc_now
from repositories import inquiry_repository
from repositories.reference_repository import get_product
from services.offer_service import create_offer_from_inquiry

logger = logging.getLogger(__name__)

# Product risk assumed when an inquiry references a product missing from reference data.
DEFAULT_PRODUCT_RISK = RiskLevel.MEDIUM


def generate_inquiry_id(now: Optional[datetime] = None) -> str:
    """
    Next inquiry identifier for today's UTC date.

    Scans stored inquiry identifiers with today's prefix and takes one more
    than the highest sequence found.
    """

    return next_daily_id(INQUIRY_PREFIX, inquiry_repository.list_inquiry_ids(), now or utc_now())


def list_inquiries(
    status: Optional[InquiryStatus] = None,
    client_id: Optional[str] = None,
    source: Optional[InquirySource] = None,
) -> List[Inquiry]:
    return inquiry_repository.list_inquiries_by_filter(
        status=status.value if status is not None else None,
        client_id=client_id,
        source=source.value if source is not None else None,
    )


def get_inquiry(inquiry_id: str) -> Inquiry:
    """
    Fetch an inquiry.

    Raises:
        NotFoundError: if no inquiry has this ID
    """

    inquiry = inquiry_repository.get_inquiry_by_id(inquiry_id)
    if inquiry is None:
        raise NotFoundError("Inquiry", inquiry_id)
    return inquiry


def create_inquiry(new: NewInquiry) -> Inquiry:
    """
    Create and persist an inquiry.

    Status defaults to Draft when the caller does not supply one.
    """

    now = utc_now()
    inquiry = Inquiry(
        inquiry_id=generate_inquiry_id(now),
        source=new.source,
        client_id=new.client_id,
        product_id=new.product_id,
        requested_amount=new.requested_amount,
        additional_remark=new.additional_remark,
        status=new.status or InquiryStatus.DRAFT,
        created_by=new.created_by,
        created_at=now,
        updated_at=now,
    )
    return inquiry_repository.insert_inquiry(inquiry)


def update_inquiry(inquiry_id: str, patch: InquiryUpdate) -> Inquiry:
    """
    Apply a patch to an inquiry and stamp its update time.

    The update timestamp moves on every successful call, even when only
    non-status fields change.

    Raises:
        NotFoundError: if no inquiry has this ID
        InvalidTransitionError: if the status change is not allowed
        InvalidOperationError: if the inquiry is in a terminal state
    """

    inquiry = get_inquiry(inquiry_id)
    updated = inquiry.apply(patch, utc_now())

    saved = inquiry_repository.replace_inquiry(updated)
    if saved is None:
        raise NotFoundError("Inquiry", inquiry_id)

    if saved.status is not inquiry.status:
        logger.info("Inquiry %s: %s -> %s", inquiry_id, inquiry.status.value, saved.status.value)
    return saved


def delete_inquiry(inquiry_id: str) -> bool:
    """Remove an inquiry regardless of its status; True if one was removed."""

    return inquiry_repository.delete_inquiry(inquiry_id)


def convert_inquiry_to_offer(inquiry_id: str) -> Offer:
    """
    Convert a Pending inquiry into a Proposal offer.

    The product's risk level is looked up in reference data for the offer's
    suitability check (Medium if the product is unknown).

    Raises:
        NotFoundError: if no inquiry has this ID
        InvalidOperationError: if the inquiry is not Pending
    """

    inquiry = get_inquiry(inquiry_id)
    if inquiry.status is not InquiryStatus.PENDING:
        raise InvalidOperationError(
            f"Only pending inquiries can be converted to offers (inquiry {inquiry_id} is {inquiry.status.value})"
        )

    product = get_product(inquiry.product_id)
    if product is None:
        logger.warning(
            "Product %s not found for inquiry %s; assuming %s risk",
            inquiry.product_id,
            inquiry_id,
            DEFAULT_PRODUCT_RISK.value,
        )
        product_risk = DEFAULT_PRODUCT_RISK
    else:
        product_risk = product.risk_level

    offer = create_offer_from_inquiry(inquiry, product_risk)
    update_inquiry(inquiry_id, InquiryUpdate(status=InquiryStatus.CONVERTED))

    logger.info("Converted inquiry %s to offer %s", inquiry_id, offer.offer_id)
    return offer


__all__ = [
    "DEFAULT_PRODUCT_RISK",
    "generate_inquiry_id",
    "list_inquiries",
    "get_inquiry",
    "create_inquiry",
    "update_inquiry",
    "delete_inquiry",
    "convert_inquiry_to_offer",
]
