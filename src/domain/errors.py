"""Document Engine Errors

Every failure the engine can report carries a stable ``code`` and the
structured context (offending field, edge, statuses) a caller needs to
render a precise message.
"""

from typing import Any, Dict, Optional


class DocumentError(Exception):
    """Base class for business-document errors"""

    code = "DOCUMENT_ERROR"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    @property
    def details(self) -> Dict[str, Any]:
        return {}


class ValidationError(DocumentError):
    """Malformed or out-of-range input; raised before any persistence"""

    code = "VALIDATION_ERROR"

    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field

    @property
    def details(self) -> Dict[str, Any]:
        return {"field": self.field}


class InvalidTransitionError(DocumentError):
    """Requested edge is not in the kind's transition table"""

    code = "INVALID_TRANSITION"

    def __init__(self, kind: str, from_status: str, to_status: str):
        super().__init__(
            f"Cannot move {kind} from '{from_status}' to '{to_status}'"
        )
        self.kind = kind
        self.from_status = from_status
        self.to_status = to_status

    @property
    def details(self) -> Dict[str, Any]:
        return {
            "kind": self.kind,
            "from_status": self.from_status,
            "to_status": self.to_status,
        }


class AlreadyFinalizedError(DocumentError):
    """Transition requested against a terminal status"""

    code = "ALREADY_FINALIZED"

    def __init__(self, kind: str, status: str, requested_status: Optional[str] = None):
        super().__init__(f"This {kind} is already {status}")
        self.kind = kind
        self.status = status
        self.requested_status = requested_status

    @property
    def details(self) -> Dict[str, Any]:
        details = {"kind": self.kind, "status": self.status}
        if self.requested_status:
            details["requested_status"] = self.requested_status
        return details


class ConflictError(DocumentError):
    """Persisted status no longer matches the status the caller observed"""

    code = "CONFLICT"

    def __init__(self, document_id: str, expected_status: str, actual_status: Optional[str] = None):
        if actual_status:
            message = (
                f"Document {document_id} is '{actual_status}', expected '{expected_status}'"
            )
        else:
            message = f"Document {document_id} changed concurrently, expected '{expected_status}'"
        super().__init__(message)
        self.document_id = document_id
        self.expected_status = expected_status
        self.actual_status = actual_status

    @property
    def details(self) -> Dict[str, Any]:
        details = {
            "document_id": self.document_id,
            "expected_status": self.expected_status,
        }
        if self.actual_status:
            details["actual_status"] = self.actual_status
        return details


class IdentityAllocationError(DocumentError):
    """Atomic number allocation failed; creation fails closed"""

    code = "IDENTITY_ALLOCATION_FAILED"

    def __init__(self, kind: str, reason: str):
        super().__init__(f"Could not allocate {kind} number: {reason}")
        self.kind = kind
        self.reason = reason

    @property
    def details(self) -> Dict[str, Any]:
        return {"kind": self.kind}


class NotificationDispatchError(DocumentError):
    """Notification could not be composed or delivered; logged, never propagated"""

    code = "NOTIFICATION_DISPATCH_FAILED"

    def __init__(self, event_name: str, reason: str):
        super().__init__(f"Notification '{event_name}' failed: {reason}")
        self.event_name = event_name
        self.reason = reason
