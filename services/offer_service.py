"""
Offer workflow service.

Handles:
- Offer identifier generation (OFF-YYYYMMDD-NNN, derived from stored offers)
- Offer creation from a converted inquiry, with KYC/suitability computed once
- Manual offer creation (caller states the compliance results)
- Patching and soft deletion (forced transition to Rejected)
- Send / accept / confirm, each gated on the stored compliance results

Email delivery and OTP verification are simulated.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import List, Optional

from domain.errors import ClientMismatchError, ComplianceError, NotFoundError
from domain.identifiers import OFFER_PREFIX, next_daily_id
from domain.inquiry import Inquiry
from domain.offer import DEFAULT_EXPECTED_RETURN, NewOffer, Offer, OfferStatus, OfferUpdate
from domain.reference import RiskLevel
from domain.time import add_years, utc_now
from repositories.offer_repository import (
    get_offer_by_id,
    insert_offer,
    list_offer_ids,
    list_offers_by_filter,
    replace_offer,
)
from services.suitability_service import compute_kyc_and_suitability

logger = logging.getLogger(__name__)

OFFER_VALIDITY_DAYS = 30
DEFAULT_MATURITY_YEARS = 1


def generate_offer_id(now: Optional[datetime] = None) -> str:
    """
    Next offer identifier for today's UTC date.

    The sequence continues from the highest stored offer identifier for the
    same day, so it does not restart when the process does.
    """

    return next_daily_id(OFFER_PREFIX, list_offer_ids(), now or utc_now())


def list_offers(
    status: Optional[OfferStatus] = None,
    client_id: Optional[str] = None,
    created_by: Optional[str] = None,
) -> List[Offer]:
    return list_offers_by_filter(
        status=status.value if status is not None else None,
        client_id=client_id,
        created_by=created_by,
    )


def get_offer(offer_id: str) -> Offer:
    """
    Fetch an offer.

    Raises:
        NotFoundError: if no offer has this ID
    """

    offer = get_offer_by_id(offer_id)
    if offer is None:
        raise NotFoundError("Offer", offer_id)
    return offer


def _save(offer: Offer) -> Offer:
    saved = replace_offer(offer)
    if saved is None:
        raise NotFoundError("Offer", offer.offer_id)
    return saved


def create_offer_from_inquiry(
    inquiry: Inquiry,
    product_risk_level: RiskLevel = RiskLevel.MEDIUM,
) -> Offer:
    """
    Create a Proposal offer from an inquiry.

    Copies client, product, requested amount and remark from the inquiry and
    computes KYC/suitability for the client against `product_risk_level`.
    Those results are stored on the offer and never recomputed.

    Defaults:
    - expected return "0% p.a." (to be refined in the proposal)
    - maturity one year from now
    - expiry 30 days from now
    """

    now = utc_now()
    checks = compute_kyc_and_suitability(inquiry.client_id, product_risk_level)

    offer = Offer(
        offer_id=generate_offer_id(now),
        inquiry_id=inquiry.inquiry_id,
        client_id=inquiry.client_id,
        product_id=inquiry.product_id,
        investment_amount=inquiry.requested_amount,
        maturity_date=add_years(now, DEFAULT_MATURITY_YEARS),
        proposal_remarks=inquiry.additional_remark or "",
        expected_return=DEFAULT_EXPECTED_RETURN,
        status=OfferStatus.PROPOSAL,
        created_by=inquiry.created_by,
        kyc_status=checks.kyc_status,
        suitability_status=checks.suitability_status,
        created_at=now,
        updated_at=now,
        expiry_date=now + timedelta(days=OFFER_VALIDITY_DAYS),
    )

    insert_offer(offer)
    logger.info(
        "Created offer %s from inquiry %s (KYC: %s, suitability: %s, product risk: %s)",
        offer.offer_id,
        inquiry.inquiry_id,
        offer.kyc_status.value,
        offer.suitability_status.value,
        product_risk_level.value,
    )
    return offer


def create_offer(new: NewOffer) -> Offer:
    """
    Create an offer directly, without an originating inquiry.

    No compliance checks run here; `new` carries the KYC and suitability
    results and the initial status.
    """

    now = utc_now()
    offer = Offer(
        offer_id=generate_offer_id(now),
        client_id=new.client_id,
        product_id=new.product_id,
        investment_amount=new.investment_amount,
        expected_return=new.expected_return,
        maturity_date=new.maturity_date,
        proposal_remarks=new.proposal_remarks,
        status=new.status,
        created_by=new.created_by,
        kyc_status=new.kyc_status,
        suitability_status=new.suitability_status,
        created_at=now,
        updated_at=now,
        expiry_date=new.expiry_date or now + timedelta(days=OFFER_VALIDITY_DAYS),
    )
    return insert_offer(offer)


def update_offer(offer_id: str, patch: OfferUpdate) -> Offer:
    """
    Apply a patch to an offer and stamp its update time.

    Raises:
        NotFoundError: if no offer has this ID
        InvalidTransitionError: if the status change is not allowed
        InvalidOperationError: if the offer is terminal, or the status change
            belongs to send / accept / confirm
    """

    offer = get_offer(offer_id)
    updated = offer.apply(patch, utc_now())
    saved = _save(updated)
    if saved.status is not offer.status:
        logger.info("Offer %s: %s -> %s", offer_id, offer.status.value, saved.status.value)
    return saved


def delete_offer(offer_id: str) -> Offer:
    """
    Soft-delete an offer by moving it to Rejected.

    The record is kept. Raises the same errors as update_offer.
    """

    return update_offer(offer_id, OfferUpdate(status=OfferStatus.REJECTED))


def send_to_client(offer_id: str) -> Offer:
    """
    Send an offer to its client (simulated email).

    Raises:
        NotFoundError: if no offer has this ID
        InvalidOperationError: if the offer is not in Wait
        ComplianceError: if KYC or suitability is not Pass
    """

    offer = get_offer(offer_id)
    try:
        sent = offer.send(utc_now())
    except ComplianceError:
        logger.warning(
            "Blocked sending offer %s (KYC: %s, suitability: %s)",
            offer_id,
            offer.kyc_status.value,
            offer.suitability_status.value,
        )
        raise

    saved = _save(sent)
    logger.info("Offer %s sent to client %s (email simulated)", offer_id, offer.client_id)
    return saved


def accept_offer(offer_id: str, client_id: str, payment_method: str) -> Offer:
    """
    Record the client's acceptance (simulated OTP verification).

    Raises:
        NotFoundError: if no offer has this ID
        InvalidOperationError: if the offer is not Sent
        ClientMismatchError: if `client_id` is not the offer's client
    """

    offer = get_offer(offer_id)
    try:
        accepted = offer.accept(client_id, payment_method, utc_now())
    except ClientMismatchError:
        logger.warning("Client %s attempted to accept offer %s owned by %s", client_id, offer_id, offer.client_id)
        raise

    saved = _save(accepted)
    logger.info("Offer %s accepted by %s via %s (OTP simulated)", offer_id, client_id, payment_method)
    return saved


def confirm_order(offer_id: str, approved_by: str) -> Offer:
    """
    Final approval of an accepted offer.

    Raises:
        NotFoundError: if no offer has this ID
        InvalidOperationError: if the offer is not Accepted
        ComplianceError: if KYC or suitability is not Pass
        PreconditionError: if no accepting client is recorded
    """

    offer = get_offer(offer_id)
    try:
        confirmed = offer.confirm(approved_by, utc_now())
    except ComplianceError:
        logger.warning("Blocked confirming offer %s: compliance checks not passed", offer_id)
        raise

    saved = _save(confirmed)
    logger.info("Offer %s confirmed by %s", offer_id, approved_by)
    return saved


__all__ = [
    "OFFER_VALIDITY_DAYS",
    "generate_offer_id",
    "list_offers",
    "get_offer",
    "create_offer_from_inquiry",
    "create_offer",
    "update_offer",
    "delete_offer",
    "send_to_client",
    "accept_offer",
    "confirm_order",
]
