"""
Domain: Workflow error taxonomy.

Every error here is synchronous and final: none of them describes a transient
condition, so callers must not retry. The HTTP layer maps each class to a
response status.
"""

from __future__ import annotations


class WorkflowError(Exception):
    """Base class for inquiry/offer workflow failures."""


class NotFoundError(WorkflowError):
    """Raised when no record exists for the given identifier."""

    def __init__(self, kind: str, record_id: str) -> None:
        self.kind = kind
        self.record_id = record_id
        super().__init__(f"{kind} not found: {record_id}")


class InvalidTransitionError(WorkflowError):
    """Raised when a status change is not permitted from the current state."""

    def __init__(self, kind: str, current: str, target: str) -> None:
        self.kind = kind
        self.current = current
        self.target = target
        super().__init__(f"Invalid {kind.lower()} status transition from {current} to {target}")


class InvalidOperationError(WorkflowError):
    """Raised when an operation's preconditions on the record state are unmet."""


class ComplianceError(WorkflowError):
    """Raised when the KYC or suitability gate blocks a transition."""


class ClientMismatchError(WorkflowError):
    """Raised when an offer is accepted by a client other than its own."""


class PreconditionError(WorkflowError):
    """Raised when a required earlier step has not been recorded."""


__all__ = [
    "WorkflowError",
    "NotFoundError",
    "InvalidTransitionError",
    "InvalidOperationError",
    "ComplianceError",
    "ClientMismatchError",
    "PreconditionError",
]
