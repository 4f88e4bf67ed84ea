"""
Inquiries API Endpoints.

Endpoints for managing client inquiries and converting them into offers.
"""

from typing import Optional

from fastapi import APIRouter, HTTPException, Query

from api.errors import translate_errors
from api.models import (
    DataResponse,
    InquiryCreateRequest,
    InquiryResponse,
    InquiryUpdateRequest,
    ListResponse,
    MessageResponse,
    OfferResponse,
)
from domain.inquiry import InquirySource, InquiryStatus, InquiryUpdate, NewInquiry
from services import inquiry_service

router = APIRouter()


@router.get(
    "/inquiries",
    response_model=ListResponse[InquiryResponse],
    summary="List Inquiries",
    description="List all inquiries with optional filters for status, client and source channel."
)
def list_inquiries(
    status: Optional[InquiryStatus] = Query(None, description="Filter by status (e.g., 'Pending')"),
    client_id: Optional[str] = Query(None, description="Filter by client ID (e.g., 'CLI-001')"),
    source: Optional[InquirySource] = Query(None, description="Filter by source channel (e.g., 'Web')"),
):
    with translate_errors("list inquiries"):
        inquiries = inquiry_service.list_inquiries(status=status, client_id=client_id, source=source)

    return ListResponse[InquiryResponse](
        data=[InquiryResponse.from_domain(inquiry) for inquiry in inquiries],
        total=len(inquiries),
    )


@router.get(
    "/inquiries/{inquiry_id}",
    response_model=DataResponse[InquiryResponse],
    summary="Get Inquiry"
)
def get_inquiry(inquiry_id: str):
    with translate_errors("fetch inquiry"):
        inquiry = inquiry_service.get_inquiry(inquiry_id)

    return DataResponse[InquiryResponse](data=InquiryResponse.from_domain(inquiry))


@router.post(
    "/inquiries",
    response_model=DataResponse[InquiryResponse],
    status_code=201,
    summary="Create Inquiry",
    description="Create a new inquiry. The ID is assigned as INQ-YYYYMMDD-NNN; status defaults to Draft."
)
def create_inquiry(request: InquiryCreateRequest):
    with translate_errors("create inquiry"):
        inquiry = inquiry_service.create_inquiry(
            NewInquiry(
                source=request.source,
                client_id=request.client_id,
                product_id=request.product_id,
                requested_amount=request.requested_amount,
                additional_remark=request.additional_remark,
                status=request.status,
                created_by=request.created_by,
            )
        )

    return DataResponse[InquiryResponse](
        data=InquiryResponse.from_domain(inquiry),
        message="Inquiry created successfully",
    )


@router.put(
    "/inquiries/{inquiry_id}",
    response_model=DataResponse[InquiryResponse],
    summary="Update Inquiry"
)
def update_inquiry(inquiry_id: str, request: InquiryUpdateRequest):
    """
    Update an inquiry.

    **Status workflow:**
    - Draft → Pending, Cancelled
    - Pending → Draft, Converted, Rejected, Cancelled
    - Converted, Rejected and Cancelled are final: any update is refused

    An invalid status change returns **409** and leaves the inquiry unchanged.
    """
    with translate_errors("update inquiry"):
        inquiry = inquiry_service.update_inquiry(
            inquiry_id,
            InquiryUpdate(
                source=request.source,
                client_id=request.client_id,
                product_id=request.product_id,
                requested_amount=request.requested_amount,
                additional_remark=request.additional_remark,
                status=request.status,
            ),
        )

    return DataResponse[InquiryResponse](
        data=InquiryResponse.from_domain(inquiry),
        message="Inquiry updated successfully",
    )


@router.delete(
    "/inquiries/{inquiry_id}",
    response_model=MessageResponse,
    summary="Delete Inquiry",
    description="Permanently remove an inquiry, whatever its status."
)
def delete_inquiry(inquiry_id: str):
    with translate_errors("delete inquiry"):
        deleted = inquiry_service.delete_inquiry(inquiry_id)

    if not deleted:
        raise HTTPException(status_code=404, detail=f"Inquiry not found: {inquiry_id}")
    return MessageResponse(message="Inquiry deleted successfully")


@router.post(
    "/inquiries/{inquiry_id}/convert",
    response_model=DataResponse[OfferResponse],
    status_code=201,
    summary="Convert Inquiry to Offer",
    description="Create a Proposal offer from a Pending inquiry and mark the inquiry Converted."
)
def convert_inquiry(inquiry_id: str):
    """
    Convert a Pending inquiry into an offer.

    KYC and suitability are computed for the client against the product's
    risk level and stored on the new offer.

    Returns **400** if the inquiry is not Pending.
    """
    with translate_errors("convert inquiry"):
        offer = inquiry_service.convert_inquiry_to_offer(inquiry_id)

    return DataResponse[OfferResponse](
        data=OfferResponse.from_domain(offer),
        message="Inquiry converted to offer successfully",
    )
