"""
Offers API Endpoints.

Endpoints for managing offers and moving them through send, acceptance and
final confirmation.
"""

from typing import Optional

from fastapi import APIRouter, Query

from api.errors import translate_errors
from api.models import (
    AcceptOfferRequest,
    ConfirmOrderRequest,
    DataResponse,
    ListResponse,
    OfferCreateRequest,
    OfferResponse,
    OfferUpdateRequest,
    to_utc,
)
from domain.offer import NewOffer, OfferStatus, OfferUpdate
from services import offer_service

router = APIRouter()


@router.get(
    "/offers",
    response_model=ListResponse[OfferResponse],
    summary="List Offers",
    description="List all offers with optional filters for status, client and creator."
)
def list_offers(
    status: Optional[OfferStatus] = Query(None, description="Filter by status (e.g., 'Sent')"),
    client_id: Optional[str] = Query(None, description="Filter by client ID"),
    created_by: Optional[str] = Query(None, description="Filter by creator employee ID"),
):
    with translate_errors("list offers"):
        offers = offer_service.list_offers(status=status, client_id=client_id, created_by=created_by)

    return ListResponse[OfferResponse](
        data=[OfferResponse.from_domain(offer) for offer in offers],
        total=len(offers),
    )


@router.get(
    "/offers/{offer_id}",
    response_model=DataResponse[OfferResponse],
    summary="Get Offer"
)
def get_offer(offer_id: str):
    with translate_errors("fetch offer"):
        offer = offer_service.get_offer(offer_id)

    return DataResponse[OfferResponse](data=OfferResponse.from_domain(offer))


@router.post(
    "/offers",
    response_model=DataResponse[OfferResponse],
    status_code=201,
    summary="Create Offer",
    description="Create an offer directly. No KYC/suitability checks run; the request states the results."
)
def create_offer(request: OfferCreateRequest):
    with translate_errors("create offer"):
        offer = offer_service.create_offer(
            NewOffer(
                client_id=request.client_id,
                product_id=request.product_id,
                investment_amount=request.investment_amount,
                expected_return=request.expected_return,
                maturity_date=to_utc(request.maturity_date),
                proposal_remarks=request.proposal_remarks,
                status=request.status,
                created_by=request.created_by,
                kyc_status=request.kyc_status,
                suitability_status=request.suitability_status,
                expiry_date=to_utc(request.expiry_date),
            )
        )

    return DataResponse[OfferResponse](
        data=OfferResponse.from_domain(offer),
        message="Offer created successfully",
    )


@router.put(
    "/offers/{offer_id}",
    response_model=DataResponse[OfferResponse],
    summary="Update Offer"
)
def update_offer(offer_id: str, request: OfferUpdateRequest):
    """
    Update an offer.

    **Status workflow:**
    - Proposal → Draft, Wait, Rejected
    - Draft → Wait, Rejected
    - Wait → Sent (via `/send`), Rejected
    - Sent → Accepted (via `/accept`), Rejected, Expired
    - Accepted → Confirmed (via `/confirm`), Rejected

    Returns **409** for a status change outside the workflow and **400** for
    changes that must go through a dedicated endpoint or target a final offer.
    """
    with translate_errors("update offer"):
        offer = offer_service.update_offer(
            offer_id,
            OfferUpdate(
                client_id=request.client_id,
                product_id=request.product_id,
                investment_amount=request.investment_amount,
                expected_return=request.expected_return,
                maturity_date=to_utc(request.maturity_date),
                proposal_remarks=request.proposal_remarks,
                expiry_date=to_utc(request.expiry_date),
                status=request.status,
            ),
        )

    return DataResponse[OfferResponse](
        data=OfferResponse.from_domain(offer),
        message="Offer updated successfully",
    )


@router.delete(
    "/offers/{offer_id}",
    response_model=DataResponse[OfferResponse],
    summary="Delete Offer",
    description="Soft delete: the offer is moved to Rejected and kept."
)
def delete_offer(offer_id: str):
    with translate_errors("delete offer"):
        offer = offer_service.delete_offer(offer_id)

    return DataResponse[OfferResponse](
        data=OfferResponse.from_domain(offer),
        message="Offer deleted successfully",
    )


@router.post(
    "/offers/{offer_id}/send",
    response_model=DataResponse[OfferResponse],
    summary="Send Offer to Client",
    description="Move a Wait offer to Sent. Requires KYC and suitability Pass. Email delivery is simulated."
)
def send_offer(offer_id: str):
    with translate_errors("send offer"):
        offer = offer_service.send_to_client(offer_id)

    return DataResponse[OfferResponse](
        data=OfferResponse.from_domain(offer),
        message="Offer sent to client",
    )


@router.post(
    "/offers/{offer_id}/accept",
    response_model=DataResponse[OfferResponse],
    summary="Accept Offer",
    description="Record client acceptance of a Sent offer. OTP verification is simulated."
)
def accept_offer(offer_id: str, request: AcceptOfferRequest):
    """
    Accept an offer on behalf of its client.

    Returns **403** if `client_id` is not the offer's client.
    """
    with translate_errors("accept offer"):
        offer = offer_service.accept_offer(offer_id, request.client_id, request.payment_method)

    return DataResponse[OfferResponse](
        data=OfferResponse.from_domain(offer),
        message="Offer accepted",
    )


@router.post(
    "/offers/{offer_id}/confirm",
    response_model=DataResponse[OfferResponse],
    summary="Confirm Order",
    description="Final approval of an Accepted offer. Requires KYC and suitability Pass and a recorded acceptance."
)
def confirm_offer(offer_id: str, request: ConfirmOrderRequest):
    with translate_errors("confirm order"):
        offer = offer_service.confirm_order(offer_id, request.approved_by)

    return DataResponse[OfferResponse](
        data=OfferResponse.from_domain(offer),
        message="Order confirmed",
    )
