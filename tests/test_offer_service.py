"""
Tests for `services/offer_service.py` against a temporary record store.

Covers contract rules:
- The offer ID sequence continues from stored offers of the same day.
- Manual creation takes the caller's compliance results and defaults expiry
  to 30 days.
- Soft delete moves the offer to Rejected and keeps it.
- send / accept / confirm persist on success; a blocked call leaves the
  stored offer untouched.
- Status changes outside the transition table raise and leave the stored
  offer unchanged.
- The full workflow Proposal -> Wait -> Sent -> Accepted -> Confirmed.
- Free-text fields shaped like stored timestamps come back as the same text.
"""

from __future__ import annotations

import json
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from pathlib import Path

import pytest

from domain.errors import (
    ClientMismatchError,
    ComplianceError,
    InvalidOperationError,
    InvalidTransitionError,
    NotFoundError,
)
from domain.identifiers import OFFER_PREFIX, date_prefix
from domain.offer import CheckResult, NewOffer, OfferStatus, OfferUpdate
from domain.time import utc_now
from services import offer_service

MATURITY = datetime(2027, 1, 1, tzinfo=timezone.utc)


def _create(
    kyc: CheckResult = CheckResult.PASS,
    suitability: CheckResult = CheckResult.PASS,
    status: OfferStatus = OfferStatus.PROPOSAL,
    client_id: str = "CLI-001",
):
    return offer_service.create_offer(
        NewOffer(
            client_id=client_id,
            product_id="PROD-001",
            investment_amount=Decimal("250000"),
            maturity_date=MATURITY,
            created_by="EMP-001",
            status=status,
            kyc_status=kyc,
            suitability_status=suitability,
        )
    )


def _waiting(**kwargs):
    offer = _create(**kwargs)
    return offer_service.update_offer(offer.offer_id, OfferUpdate(status=OfferStatus.WAIT))


def test_manual_create_defaults(workspace: Path) -> None:
    offer = offer_service.create_offer(
        NewOffer(
            client_id="CLI-001",
            product_id="PROD-001",
            investment_amount=Decimal("250000"),
            maturity_date=MATURITY,
            created_by="EMP-001",
        )
    )

    assert offer.status is OfferStatus.PROPOSAL
    assert offer.kyc_status is CheckResult.FAIL
    assert offer.suitability_status is CheckResult.FAIL
    assert offer.inquiry_id is None
    assert offer.expiry_date == offer.created_at + timedelta(days=offer_service.OFFER_VALIDITY_DAYS)
    assert offer_service.get_offer(offer.offer_id) == offer


def test_id_sequence_continues_from_stored_offers(workspace: Path) -> None:
    """A fresh process sees existing offers and does not reuse their numbers."""

    today = date_prefix(OFFER_PREFIX, utc_now())
    offers_file = workspace / "db" / "offers.json"
    offers_file.write_text(json.dumps([{"id": f"{today}-041"}, {"id": "OFF-20000101-900"}]), encoding="utf-8")

    assert offer_service.generate_offer_id() == f"{today}-042"


def test_update_patches_fields(workspace: Path) -> None:
    offer = _create()
    updated = offer_service.update_offer(
        offer.offer_id,
        OfferUpdate(expected_return="5-7%", proposal_remarks="quarterly coupon"),
    )

    assert updated.expected_return == "5-7%"
    assert updated.proposal_remarks == "quarterly coupon"
    assert offer_service.get_offer(offer.offer_id).expected_return == "5-7%"


def test_update_cannot_reach_gated_status(workspace: Path) -> None:
    offer = _waiting(kyc=CheckResult.FAIL)

    with pytest.raises(InvalidOperationError):
        offer_service.update_offer(offer.offer_id, OfferUpdate(status=OfferStatus.SENT))

    assert offer_service.get_offer(offer.offer_id).status is OfferStatus.WAIT


def test_soft_delete_keeps_record_as_rejected(workspace: Path) -> None:
    offer = _create()

    deleted = offer_service.delete_offer(offer.offer_id)

    assert deleted.status is OfferStatus.REJECTED
    assert offer_service.get_offer(offer.offer_id).status is OfferStatus.REJECTED
    with pytest.raises(InvalidTransitionError):
        offer_service.delete_offer(offer.offer_id)


def test_send_blocked_by_suitability_leaves_offer_waiting(workspace: Path) -> None:
    offer = _waiting(suitability=CheckResult.FAIL)

    with pytest.raises(ComplianceError):
        offer_service.send_to_client(offer.offer_id)

    stored = offer_service.get_offer(offer.offer_id)
    assert stored.status is OfferStatus.WAIT
    assert stored.sent_at is None


def test_send_requires_wait(workspace: Path) -> None:
    offer = _create()

    with pytest.raises(InvalidOperationError):
        offer_service.send_to_client(offer.offer_id)


def test_accept_by_other_client_is_rejected(workspace: Path) -> None:
    offer = offer_service.send_to_client(_waiting().offer_id)

    with pytest.raises(ClientMismatchError):
        offer_service.accept_offer(offer.offer_id, "CLI-002", "Bank Transfer")

    assert offer_service.get_offer(offer.offer_id).status is OfferStatus.SENT


def test_full_workflow(workspace: Path) -> None:
    offer = _waiting()

    sent = offer_service.send_to_client(offer.offer_id)
    assert sent.status is OfferStatus.SENT
    assert sent.sent_at is not None

    accepted = offer_service.accept_offer(offer.offer_id, "CLI-001", "Bank Transfer")
    assert accepted.status is OfferStatus.ACCEPTED
    assert accepted.otp_verified is True

    confirmed = offer_service.confirm_order(offer.offer_id, "EMP-002")
    assert confirmed.status is OfferStatus.CONFIRMED
    assert confirmed.approved_by == "EMP-002"

    stored = offer_service.get_offer(offer.offer_id)
    assert stored == confirmed
    assert stored.accepted_by == "CLI-001"
    assert stored.payment_method == "Bank Transfer"

    with pytest.raises(InvalidOperationError):
        offer_service.update_offer(offer.offer_id, OfferUpdate(proposal_remarks="after the fact"))


def test_list_filters(workspace: Path) -> None:
    a = _create(client_id="CLI-001")
    b = _waiting(client_id="CLI-002")

    assert [o.offer_id for o in offer_service.list_offers()] == [a.offer_id, b.offer_id]
    assert [o.offer_id for o in offer_service.list_offers(status=OfferStatus.WAIT)] == [b.offer_id]
    assert [o.offer_id for o in offer_service.list_offers(client_id="CLI-001")] == [a.offer_id]
    assert [o.offer_id for o in offer_service.list_offers(created_by="EMP-001")] == [a.offer_id, b.offer_id]


def test_unknown_offer_raises_not_found(workspace: Path) -> None:
    with pytest.raises(NotFoundError, match="Offer not found: OFF-20990101-001"):
        offer_service.send_to_client("OFF-20990101-001")


@pytest.mark.parametrize(
    "current,target",
    [
        (OfferStatus.PROPOSAL, OfferStatus.EXPIRED),
        (OfferStatus.PROPOSAL, OfferStatus.CONFIRMED),
        (OfferStatus.DRAFT, OfferStatus.PROPOSAL),
        (OfferStatus.WAIT, OfferStatus.ACCEPTED),
        (OfferStatus.WAIT, OfferStatus.DRAFT),
        (OfferStatus.SENT, OfferStatus.WAIT),
        (OfferStatus.ACCEPTED, OfferStatus.SENT),
    ],
)
def test_out_of_table_transition_leaves_stored_offer_unchanged(
    workspace: Path,
    current: OfferStatus,
    target: OfferStatus,
) -> None:
    offer = _create(status=current)

    with pytest.raises(InvalidTransitionError):
        offer_service.update_offer(offer.offer_id, OfferUpdate(status=target, proposal_remarks="ignored"))

    stored = offer_service.get_offer(offer.offer_id)
    assert stored == offer
    assert stored.status is current
    assert stored.updated_at == offer.updated_at


def test_timestamp_shaped_text_fields_round_trip(workspace: Path) -> None:
    """Offer free-text fields in the stored timestamp format come back as the same strings."""

    offer = offer_service.create_offer(
        NewOffer(
            client_id="CLI-001",
            product_id="PROD-001",
            investment_amount=Decimal("250000"),
            maturity_date=MATURITY,
            created_by="EMP-001",
            expected_return="2025-02-30T00:00:00.000Z",
            proposal_remarks="2025-01-01T00:00:00.000Z",
            status=OfferStatus.WAIT,
            kyc_status=CheckResult.PASS,
            suitability_status=CheckResult.PASS,
        )
    )
    offer_service.send_to_client(offer.offer_id)
    accepted = offer_service.accept_offer(offer.offer_id, "CLI-001", "2025-06-01T12:00:00.000Z")

    stored = offer_service.get_offer(offer.offer_id)
    assert stored == accepted
    assert stored.expected_return == "2025-02-30T00:00:00.000Z"
    assert stored.proposal_remarks == "2025-01-01T00:00:00.000Z"
    assert stored.payment_method == "2025-06-01T12:00:00.000Z"
