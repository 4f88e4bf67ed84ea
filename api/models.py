"""
API Request and Response Models.

Pydantic models for validating API requests and serializing responses.
Successful responses share an envelope: ``{"success": true, "data": ...}``,
with ``total`` on lists and an optional ``message``.
"""

from datetime import datetime, timezone
from decimal import Decimal
from typing import Generic, List, Optional, TypeVar

from pydantic import AwareDatetime, BaseModel, Field

from domain.inquiry import Inquiry, InquirySource, InquiryStatus
from domain.offer import CheckResult, Offer, OfferStatus
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
from domain.time import truncate_to_millis

T = TypeVar("T")


def to_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Normalize an aware request datetime to UTC at millisecond precision."""

    if value is None:
        return None
    return truncate_to_millis(value.astimezone(timezone.utc))


# ============================================================================
# Envelopes
# ============================================================================

class DataResponse(BaseModel, Generic[T]):
    """Single-record envelope."""
    success: bool = True
    data: T
    message: Optional[str] = None


class ListResponse(BaseModel, Generic[T]):
    """List envelope."""
    success: bool = True
    data: List[T]
    total: int


class MessageResponse(BaseModel):
    """Envelope for operations that return no record."""
    success: bool = True
    message: str


# ============================================================================
# Inquiry Models
# ============================================================================

class InquiryCreateRequest(BaseModel):
    """Request to create an inquiry."""
    source: InquirySource
    client_id: str = Field(..., min_length=1)
    product_id: str = Field(..., min_length=1)
    requested_amount: Decimal = Field(..., gt=0, description="Requested investment amount")
    additional_remark: Optional[str] = None
    status: Optional[InquiryStatus] = Field(None, description="Initial status (default: Draft)")
    created_by: str = Field(..., min_length=1, description="Employee ID of the creator")

    class Config:
        json_schema_extra = {
            "example": {
                "source": "Web",
                "client_id": "CLI-001",
                "product_id": "PROD-001",
                "requested_amount": "500000",
                "additional_remark": "Prefers quarterly coupon",
                "created_by": "EMP-001"
            }
        }


class InquiryUpdateRequest(BaseModel):
    """Partial update of an inquiry. Omitted fields are left unchanged."""
    source: Optional[InquirySource] = None
    client_id: Optional[str] = None
    product_id: Optional[str] = None
    requested_amount: Optional[Decimal] = Field(None, gt=0)
    additional_remark: Optional[str] = None
    status: Optional[InquiryStatus] = None

    class Config:
        json_schema_extra = {
            "example": {
                "status": "Pending"
            }
        }


class InquiryResponse(BaseModel):
    """Inquiry in API responses."""
    id: str
    source: InquirySource
    client_id: str
    product_id: str
    requested_amount: Decimal
    additional_remark: Optional[str] = None
    status: InquiryStatus
    created_by: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_domain(cls, inquiry: Inquiry) -> "InquiryResponse":
        return cls(
            id=inquiry.inquiry_id,
            source=inquiry.source,
            client_id=inquiry.client_id,
            product_id=inquiry.product_id,
            requested_amount=inquiry.requested_amount,
            additional_remark=inquiry.additional_remark,
            status=inquiry.status,
            created_by=inquiry.created_by,
            created_at=inquiry.created_at,
            updated_at=inquiry.updated_at,
        )


# ============================================================================
# Offer Models
# ============================================================================

class OfferCreateRequest(BaseModel):
    """Request to create an offer directly (no originating inquiry, no automatic checks)."""
    client_id: str = Field(..., min_length=1)
    product_id: str = Field(..., min_length=1)
    investment_amount: Decimal = Field(..., gt=0)
    expected_return: str = "0% p.a."
    maturity_date: AwareDatetime
    proposal_remarks: str = ""
    status: OfferStatus = OfferStatus.PROPOSAL
    created_by: str = Field(..., min_length=1)
    kyc_status: CheckResult = CheckResult.FAIL
    suitability_status: CheckResult = CheckResult.FAIL
    expiry_date: Optional[AwareDatetime] = None

    class Config:
        json_schema_extra = {
            "example": {
                "client_id": "CLI-002",
                "product_id": "PROD-003",
                "investment_amount": "1000000",
                "expected_return": "8-10%",
                "maturity_date": "2027-01-01T00:00:00.000Z",
                "proposal_remarks": "Direct proposal",
                "created_by": "EMP-002",
                "kyc_status": "Pass",
                "suitability_status": "Pass"
            }
        }


class OfferUpdateRequest(BaseModel):
    """Partial update of an offer. Omitted fields are left unchanged."""
    client_id: Optional[str] = None
    product_id: Optional[str] = None
    investment_amount: Optional[Decimal] = Field(None, gt=0)
    expected_return: Optional[str] = None
    maturity_date: Optional[AwareDatetime] = None
    proposal_remarks: Optional[str] = None
    expiry_date: Optional[AwareDatetime] = None
    status: Optional[OfferStatus] = Field(
        None,
        description="Sent, Accepted and Confirmed are only reachable through their dedicated endpoints"
    )


class AcceptOfferRequest(BaseModel):
    """Client acceptance of a sent offer."""
    client_id: str = Field(..., min_length=1)
    payment_method: str = Field(..., min_length=1)

    class Config:
        json_schema_extra = {
            "example": {
                "client_id": "CLI-001",
                "payment_method": "Bank Transfer"
            }
        }


class ConfirmOrderRequest(BaseModel):
    """Final approval of an accepted offer."""
    approved_by: str = Field(..., min_length=1)


class OfferResponse(BaseModel):
    """Offer in API responses."""
    id: str
    inquiry_id: Optional[str] = None
    client_id: str
    product_id: str
    investment_amount: Decimal
    expected_return: str
    maturity_date: datetime
    proposal_remarks: str
    status: OfferStatus
    created_by: str
    kyc_status: CheckResult
    suitability_status: CheckResult
    created_at: datetime
    updated_at: datetime
    expiry_date: datetime
    sent_at: Optional[datetime] = None
    accepted_at: Optional[datetime] = None
    approved_at: Optional[datetime] = None
    accepted_by: Optional[str] = None
    payment_method: Optional[str] = None
    otp_verified: bool = False
    approved_by: Optional[str] = None

    @classmethod
    def from_domain(cls, offer: Offer) -> "OfferResponse":
        return cls(
            id=offer.offer_id,
            inquiry_id=offer.inquiry_id,
            client_id=offer.client_id,
            product_id=offer.product_id,
            investment_amount=offer.investment_amount,
            expected_return=offer.expected_return,
            maturity_date=offer.maturity_date,
            proposal_remarks=offer.proposal_remarks,
            status=offer.status,
            created_by=offer.created_by,
            kyc_status=offer.kyc_status,
            suitability_status=offer.suitability_status,
            created_at=offer.created_at,
            updated_at=offer.updated_at,
            expiry_date=offer.expiry_date,
            sent_at=offer.sent_at,
            accepted_at=offer.accepted_at,
            approved_at=offer.approved_at,
            accepted_by=offer.accepted_by,
            payment_method=offer.payment_method,
            otp_verified=offer.otp_verified,
            approved_by=offer.approved_by,
        )


# ============================================================================
# Suitability Models
# ============================================================================

class SuitabilityCheckResponse(BaseModel):
    """Result of a risk-tolerance suitability check."""
    is_suitable: bool
    client_risk: Optional[RiskLevel] = None
    product_risk: Optional[RiskLevel] = None
    reason: str

    class Config:
        json_schema_extra = {
            "example": {
                "is_suitable": False,
                "client_risk": "Medium",
                "product_risk": "High",
                "reason": "Client risk level (Medium) is too low for product risk level (High). "
                          "Client can only invest in products with risk level up to Medium."
            }
        }


class InvestmentGroupResponse(BaseModel):
    client_id: str
    investment_group: InvestmentGroup


# ============================================================================
# Reference Data Models
# ============================================================================

class ClientResponse(BaseModel):
    id: str
    name: str
    cif: Optional[str] = None
    email: str
    phone: str
    address: str

    @classmethod
    def from_domain(cls, client: Client) -> "ClientResponse":
        return cls(
            id=client.client_id,
            name=client.name,
            cif=client.cif,
            email=client.email,
            phone=client.phone,
            address=client.address,
        )


class ProductResponse(BaseModel):
    id: str
    name: str
    category: str
    risk_level: RiskLevel
    expected_return: str
    min_investment: Decimal
    description: str

    @classmethod
    def from_domain(cls, product: Product) -> "ProductResponse":
        return cls(
            id=product.product_code,
            name=product.name,
            category=product.category,
            risk_level=product.risk_level,
            expected_return=product.expected_return,
            min_investment=product.min_investment,
            description=product.description,
        )


class InvestmentProfileResponse(BaseModel):
    client_id: str
    client_name: Optional[str] = None
    kyc: KycStatus
    aml: AmlStatus
    total_aum: Decimal
    investment_group: InvestmentGroup
    risk: RiskLevel
    last_review_date: Optional[str] = None
    next_review_date: Optional[str] = None

    @classmethod
    def from_domain(cls, profile: InvestmentProfile) -> "InvestmentProfileResponse":
        return cls(
            client_id=profile.client_id,
            client_name=profile.client_name,
            kyc=profile.kyc,
            aml=profile.aml,
            total_aum=profile.total_aum,
            investment_group=profile.investment_group,
            risk=profile.risk,
            last_review_date=profile.last_review_date,
            next_review_date=profile.next_review_date,
        )


class EmployeeResponse(BaseModel):
    id: str
    name: str
    position: str
    department: str
    email: str

    @classmethod
    def from_domain(cls, employee: Employee) -> "EmployeeResponse":
        return cls(
            id=employee.employee_id,
            name=employee.name,
            position=employee.position,
            department=employee.department,
            email=employee.email,
        )


class TemplateResponse(BaseModel):
    id: str
    name: str
    category: str
    description: str
    created_date: Optional[str] = None
    updated_date: Optional[str] = None

    @classmethod
    def from_domain(cls, template: Template) -> "TemplateResponse":
        return cls(
            id=template.template_id,
            name=template.name,
            category=template.category,
            description=template.description,
            created_date=template.created_date,
            updated_date=template.updated_date,
        )


# ============================================================================
# Error Models
# ============================================================================

class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str
    detail: Optional[str] = None
    status_code: int

    class Config:
        json_schema_extra = {
            "example": {
                "error": "Conflict",
                "detail": "Invalid inquiry status transition from Draft to Converted",
                "status_code": 409
            }
        }
