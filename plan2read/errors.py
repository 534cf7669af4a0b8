"""Error taxonomy shared by the gateway, repository and workflows.

Every error raised by the core derives from ``PlannerError`` so presentation
code can catch one type and show ``str(error)`` to the user. ``code`` is a
short machine-readable tag.
"""

from typing import Optional


class PlannerError(Exception):
    """Base class for every error the core raises"""
    code = "ERROR"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(PlannerError):
    """Missing or malformed input, rejected before reaching the gateway"""
    code = "VALIDATION"


class ConflictError(PlannerError):
    """A session overlaps an existing session on the same day"""
    code = "CONFLICT"


class TransportError(PlannerError):
    """Backend unreachable, malformed response, or an error envelope"""
    code = "TRANSPORT"


class NotFoundError(TransportError):
    """The backend reported that the referenced row does not exist"""
    code = "NOT_FOUND"


class UnsupportedOperationError(PlannerError):
    """Operation exists in the UI but has no backend counterpart yet"""
    code = "UNSUPPORTED"


class PublishIncompleteError(PlannerError):
    """The public header was created but its sessions were not copied.

    The published schedule exists with zero sessions; ``schedule_id`` names it.
    """
    code = "PARTIAL"

    def __init__(self, message: str, schedule_id: str, cause: Optional[PlannerError] = None):
        super().__init__(message)
        self.schedule_id = schedule_id
        self.cause = cause
