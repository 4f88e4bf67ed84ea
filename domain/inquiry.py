"""
Domain: Inquiry entity and its status workflow.

An Inquiry is a client's initial request to invest a given amount in a given
product. Its lifecycle:

    Draft <-> Pending
    Draft   -> Cancelled
    Pending -> Converted | Rejected | Cancelled

Converted, Rejected and Cancelled are terminal: once an inquiry reaches one of
them, neither its status nor any other field may change.

This module is pure: no I/O, no clock. Callers pass `now` explicitly.
"""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, FrozenSet, Mapping, Optional

from .errors import InvalidOperationError, InvalidTransitionError
from .time import require_utc_timestamp


class InquiryStatus(str, Enum):
    DRAFT = "Draft"
    PENDING = "Pending"
    CONVERTED = "Converted"
    REJECTED = "Rejected"
    CANCELLED = "Cancelled"


class InquirySource(str, Enum):
    API = "API"
    WEB = "Web"
    MOBILE = "Mobile"
    EMAIL = "Email"
    PHONE = "Phone"
    WALK_IN = "Walk-in"


INQUIRY_TRANSITIONS: Mapping[InquiryStatus, FrozenSet[InquiryStatus]] = {
    InquiryStatus.DRAFT: frozenset({InquiryStatus.PENDING, InquiryStatus.CANCELLED}),
    InquiryStatus.PENDING: frozenset(
        {
            InquiryStatus.DRAFT,
            InquiryStatus.CONVERTED,
            InquiryStatus.REJECTED,
            InquiryStatus.CANCELLED,
        }
    ),
    InquiryStatus.CONVERTED: frozenset(),
    InquiryStatus.REJECTED: frozenset(),
    InquiryStatus.CANCELLED: frozenset(),
}

TERMINAL_INQUIRY_STATUSES: FrozenSet[InquiryStatus] = frozenset(
    status for status, targets in INQUIRY_TRANSITIONS.items() if not targets
)


def can_transition(current: InquiryStatus, target: InquiryStatus) -> bool:
    """True iff `current -> target` is listed in the inquiry transition table."""

    return target in INQUIRY_TRANSITIONS[current]


def _require_positive_amount(name: str, value: Decimal) -> None:
    if value <= 0:
        raise ValueError(f"{name} must be positive")


@dataclass(frozen=True, slots=True)
class NewInquiry:
    """Caller-supplied data for creating an inquiry (identifier and timestamps are assigned)."""

    source: InquirySource
    client_id: str
    product_id: str
    requested_amount: Decimal
    created_by: str
    additional_remark: Optional[str] = None
    status: Optional[InquiryStatus] = None

    def __post_init__(self) -> None:
        _require_positive_amount("requested_amount", self.requested_amount)


@dataclass(frozen=True, slots=True)
class InquiryUpdate:
    """
    Patch for an existing inquiry.

    Only fields that are not None are applied. Identifier, creator and
    timestamps are not patchable.
    """

    source: Optional[InquirySource] = None
    client_id: Optional[str] = None
    product_id: Optional[str] = None
    requested_amount: Optional[Decimal] = None
    additional_remark: Optional[str] = None
    status: Optional[InquiryStatus] = None

    def __post_init__(self) -> None:
        if self.requested_amount is not None:
            _require_positive_amount("requested_amount", self.requested_amount)

    def changes(self) -> Dict[str, Any]:
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not None
        }


@dataclass(frozen=True, slots=True)
class Inquiry:
    """
    Pure domain entity for an Inquiry.

    Immutability:
    - Instances are frozen; every change produces a new Inquiry via `apply`.
    """

    inquiry_id: str
    source: InquirySource
    client_id: str
    product_id: str
    requested_amount: Decimal
    status: InquiryStatus
    created_by: str
    created_at: datetime
    updated_at: datetime
    additional_remark: Optional[str] = None

    def __post_init__(self) -> None:
        require_utc_timestamp("created_at", self.created_at)
        require_utc_timestamp("updated_at", self.updated_at)
        _require_positive_amount("requested_amount", self.requested_amount)
        if self.updated_at < self.created_at:
            raise ValueError("updated_at must be >= created_at")

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_INQUIRY_STATUSES

    def apply(self, patch: InquiryUpdate, now: datetime) -> "Inquiry":
        """
        Return a new Inquiry with `patch` merged in and `updated_at` stamped.

        Raises:
        - InvalidTransitionError if the patch changes status along an edge not
          in the transition table, or names any status on a terminal inquiry.
        - InvalidOperationError if the inquiry is terminal.
        """

        require_utc_timestamp("now", now)

        if patch.status is not None and (self.is_terminal or patch.status != self.status):
            if not can_transition(self.status, patch.status):
                raise InvalidTransitionError("Inquiry", self.status.value, patch.status.value)
        elif self.is_terminal:
            raise InvalidOperationError(
                f"Inquiry {self.inquiry_id} is {self.status.value} and can no longer be modified"
            )

        # updated_at never moves backwards, even if the clock does.
        return replace(self, **patch.changes(), updated_at=max(now, self.updated_at))


__all__ = [
    "InquiryStatus",
    "InquirySource",
    "INQUIRY_TRANSITIONS",
    "TERMINAL_INQUIRY_STATUSES",
    "can_transition",
    "NewInquiry",
    "InquiryUpdate",
    "Inquiry",
]
