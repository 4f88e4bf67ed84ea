"""
Suitability API Endpoints.

Endpoints for checking whether a client may invest in a product.
"""

from fastapi import APIRouter, HTTPException, Query

from api.errors import translate_errors
from api.models import DataResponse, InvestmentGroupResponse, SuitabilityCheckResponse
from services import suitability_service

router = APIRouter()


@router.get(
    "/suitability/check",
    response_model=DataResponse[SuitabilityCheckResponse],
    summary="Check Suitability",
    description="Compare a client's risk level with a product's risk level, after KYC and AML checks."
)
def check_suitability(
    client_id: str = Query(..., min_length=1, description="Client ID (e.g., 'CLI-001')"),
    product_id: str = Query(..., min_length=1, description="Product ID (e.g., 'PROD-001')"),
):
    """
    Check suitability of a product for a client.

    **Rule:** client risk level must be >= product risk level
    (Low < Medium < High). KYC must be Completed and AML screening Pass.

    A failed check is still a **200** response with `is_suitable: false` and a
    `reason` naming the cause.
    """
    with translate_errors("check suitability"):
        result = suitability_service.check_suitability(client_id, product_id)

    return DataResponse[SuitabilityCheckResponse](
        data=SuitabilityCheckResponse(
            is_suitable=result.is_suitable,
            client_risk=result.client_risk,
            product_risk=result.product_risk,
            reason=result.reason,
        )
    )


@router.get(
    "/suitability/investment-group/{client_id}",
    response_model=DataResponse[InvestmentGroupResponse],
    summary="Get Investment Group",
    description="Declared investment group (Conservative / Moderate / Aggressive) of a client."
)
def get_investment_group(client_id: str):
    with translate_errors("get investment group"):
        group = suitability_service.get_investment_group(client_id)

    if group is None:
        raise HTTPException(
            status_code=404,
            detail=f"Investment data not found for client {client_id}"
        )

    return DataResponse[InvestmentGroupResponse](
        data=InvestmentGroupResponse(client_id=client_id, investment_group=group)
    )
