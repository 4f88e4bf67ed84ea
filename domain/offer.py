"""
Domain: Offer entity and its status workflow.

An Offer is a formal investment proposal for a client. Its lifecycle:

    Proposal -> Draft | Wait | Rejected
    Draft    -> Wait | Rejected
    Wait     -> Sent | Rejected
    Sent     -> Accepted | Rejected | Expired
    Accepted -> Confirmed | Rejected

Confirmed, Rejected and Expired are terminal.

Rules implemented here:
- KYC and suitability results are fixed when the offer is created; later
  transitions consult them and never recompute them.
- Sending and confirming require both results to be Pass.
- Only the offer's own client may accept it; OTP verification is simulated.
- Confirming requires a recorded acceptance.
- Sent, Accepted and Confirmed carry gate checks and metadata, so a generic
  patch cannot move an offer into them.

This module is pure: no I/O, no clock. Callers pass `now` explicitly.
"""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, FrozenSet, Mapping, Optional

from .errors import (
    ClientMismatchError,
    ComplianceError,
    InvalidOperationError,
    InvalidTransitionError,
    PreconditionError,
)
from .time import require_utc_timestamp


class OfferStatus(str, Enum):
    PROPOSAL = "Proposal"
    DRAFT = "Draft"
    WAIT = "Wait"
    SENT = "Sent"
    ACCEPTED = "Accepted"
    CONFIRMED = "Confirmed"
    REJECTED = "Rejected"
    EXPIRED = "Expired"


class CheckResult(str, Enum):
    PASS = "Pass"
    FAIL = "Fail"


OFFER_TRANSITIONS: Mapping[OfferStatus, FrozenSet[OfferStatus]] = {
    OfferStatus.PROPOSAL: frozenset({OfferStatus.DRAFT, OfferStatus.WAIT, OfferStatus.REJECTED}),
    OfferStatus.DRAFT: frozenset({OfferStatus.WAIT, OfferStatus.REJECTED}),
    OfferStatus.WAIT: frozenset({OfferStatus.SENT, OfferStatus.REJECTED}),
    OfferStatus.SENT: frozenset({OfferStatus.ACCEPTED, OfferStatus.REJECTED, OfferStatus.EXPIRED}),
    OfferStatus.ACCEPTED: frozenset({OfferStatus.CONFIRMED, OfferStatus.REJECTED}),
    OfferStatus.CONFIRMED: frozenset(),
    OfferStatus.REJECTED: frozenset(),
    OfferStatus.EXPIRED: frozenset(),
}

TERMINAL_OFFER_STATUSES: FrozenSet[OfferStatus] = frozenset(
    status for status, targets in OFFER_TRANSITIONS.items() if not targets
)

# Reached only through send / accept / confirm.
GATED_OFFER_STATUSES: FrozenSet[OfferStatus] = frozenset(
    {OfferStatus.SENT, OfferStatus.ACCEPTED, OfferStatus.CONFIRMED}
)

DEFAULT_EXPECTED_RETURN = "0% p.a."


def can_transition(current: OfferStatus, target: OfferStatus) -> bool:
    """True iff `current -> target` is listed in the offer transition table."""

    return target in OFFER_TRANSITIONS[current]


def _require_positive_amount(name: str, value: Decimal) -> None:
    if value <= 0:
        raise ValueError(f"{name} must be positive")


@dataclass(frozen=True, slots=True)
class NewOffer:
    """
    Caller-supplied data for a manually created offer.

    No compliance checks run on this path: the caller states the KYC and
    suitability results. `expiry_date` defaults to 30 days after creation.
    """

    client_id: str
    product_id: str
    investment_amount: Decimal
    maturity_date: datetime
    created_by: str
    expected_return: str = DEFAULT_EXPECTED_RETURN
    proposal_remarks: str = ""
    status: OfferStatus = OfferStatus.PROPOSAL
    kyc_status: CheckResult = CheckResult.FAIL
    suitability_status: CheckResult = CheckResult.FAIL
    expiry_date: Optional[datetime] = None

    def __post_init__(self) -> None:
        _require_positive_amount("investment_amount", self.investment_amount)
        require_utc_timestamp("maturity_date", self.maturity_date)
        if self.expiry_date is not None:
            require_utc_timestamp("expiry_date", self.expiry_date)


@dataclass(frozen=True, slots=True)
class OfferUpdate:
    """
    Patch for an existing offer.

    Only fields that are not None are applied. Compliance results and the
    transition metadata are not patchable.
    """

    client_id: Optional[str] = None
    product_id: Optional[str] = None
    investment_amount: Optional[Decimal] = None
    expected_return: Optional[str] = None
    maturity_date: Optional[datetime] = None
    proposal_remarks: Optional[str] = None
    expiry_date: Optional[datetime] = None
    status: Optional[OfferStatus] = None

    def __post_init__(self) -> None:
        if self.investment_amount is not None:
            _require_positive_amount("investment_amount", self.investment_amount)
        if self.maturity_date is not None:
            require_utc_timestamp("maturity_date", self.maturity_date)
        if self.expiry_date is not None:
            require_utc_timestamp("expiry_date", self.expiry_date)

    def changes(self) -> Dict[str, Any]:
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not None
        }


@dataclass(frozen=True, slots=True)
class Offer:
    """
    Pure domain entity for an Offer.

    Immutability:
    - Instances are frozen; every change produces a new Offer.
    """

    offer_id: str
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
    inquiry_id: Optional[str] = None

    # Transition metadata
    sent_at: Optional[datetime] = None
    accepted_at: Optional[datetime] = None
    accepted_by: Optional[str] = None
    payment_method: Optional[str] = None
    otp_verified: bool = False
    approved_at: Optional[datetime] = None
    approved_by: Optional[str] = None

    def __post_init__(self) -> None:
        for name in ("maturity_date", "created_at", "updated_at", "expiry_date"):
            require_utc_timestamp(name, getattr(self, name))
        for name in ("sent_at", "accepted_at", "approved_at"):
            value = getattr(self, name)
            if value is not None:
                require_utc_timestamp(name, value)
        _require_positive_amount("investment_amount", self.investment_amount)
        if self.updated_at < self.created_at:
            raise ValueError("updated_at must be >= created_at")

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_OFFER_STATUSES

    @property
    def compliance_passed(self) -> bool:
        return self.kyc_status is CheckResult.PASS and self.suitability_status is CheckResult.PASS

    def _transition(self, target: OfferStatus, now: datetime, **changes: Any) -> "Offer":
        require_utc_timestamp("now", now)
        if not can_transition(self.status, target):
            raise InvalidTransitionError("Offer", self.status.value, target.value)
        return replace(self, **changes, status=target, updated_at=max(now, self.updated_at))

    def apply(self, patch: OfferUpdate, now: datetime) -> "Offer":
        """
        Return a new Offer with `patch` merged in and `updated_at` stamped.

        Raises:
        - InvalidTransitionError for status changes outside the transition
          table (including any status on a terminal offer).
        - InvalidOperationError for patches on terminal offers, or status
          changes that belong to send / accept / confirm.
        """

        require_utc_timestamp("now", now)
        changes = patch.changes()
        target = changes.pop("status", None)

        if target is not None and (self.is_terminal or target != self.status):
            if not can_transition(self.status, target):
                raise InvalidTransitionError("Offer", self.status.value, target.value)
            if target in GATED_OFFER_STATUSES:
                raise InvalidOperationError(
                    f"Offer status {target.value} can only be reached through its dedicated operation"
                )
            return replace(self, **changes, status=target, updated_at=max(now, self.updated_at))

        if self.is_terminal:
            raise InvalidOperationError(
                f"Offer {self.offer_id} is {self.status.value} and can no longer be modified"
            )
        return replace(self, **changes, updated_at=max(now, self.updated_at))

    def reject(self, now: datetime) -> "Offer":
        return self._transition(OfferStatus.REJECTED, now)

    def send(self, now: datetime) -> "Offer":
        """Wait -> Sent, gated on both compliance results."""

        if self.status is not OfferStatus.WAIT:
            raise InvalidOperationError("Only offers in Wait status can be sent to client")
        if not self.compliance_passed:
            raise ComplianceError("Cannot send offer: KYC or Suitability check failed")
        return self._transition(OfferStatus.SENT, now, sent_at=now)

    def accept(self, client_id: str, payment_method: str, now: datetime) -> "Offer":
        """Sent -> Accepted by the offer's own client."""

        if self.status is not OfferStatus.SENT:
            raise InvalidOperationError("Only sent offers can be accepted")
        if client_id != self.client_id:
            raise ClientMismatchError(
                f"Client ID mismatch: offer {self.offer_id} belongs to {self.client_id}, not {client_id}"
            )
        return self._transition(
            OfferStatus.ACCEPTED,
            now,
            accepted_at=now,
            accepted_by=client_id,
            payment_method=payment_method,
            otp_verified=True,
        )

    def confirm(self, approved_by: str, now: datetime) -> "Offer":
        """Accepted -> Confirmed, final approval."""

        if self.status is not OfferStatus.ACCEPTED:
            raise InvalidOperationError("Only accepted offers can be confirmed")
        if self.kyc_status is not CheckResult.PASS:
            raise ComplianceError("Cannot confirm: KYC check failed")
        if self.suitability_status is not CheckResult.PASS:
            raise ComplianceError("Cannot confirm: Suitability check failed")
        if not self.accepted_by:
            raise PreconditionError("Cannot confirm: Client has not accepted the offer")
        return self._transition(
            OfferStatus.CONFIRMED,
            now,
            approved_at=now,
            approved_by=approved_by,
        )


__all__ = [
    "OfferStatus",
    "CheckResult",
    "OFFER_TRANSITIONS",
    "TERMINAL_OFFER_STATUSES",
    "GATED_OFFER_STATUSES",
    "DEFAULT_EXPECTED_RETURN",
    "can_transition",
    "NewOffer",
    "OfferUpdate",
    "Offer",
]
