"""Pydantic models and codes for form submission responses."""

from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel


class ErrorCode(str, Enum):
    """Codes reported for a single rejected field."""
    INVALID_HONEYPOT_FIELD = "invalid_honeypot_field"
    MISSING_REQUIRED_FIELD = "missing_required_field"
    INVALID_EMAIL = "invalid_email"


class ResponseCode(str, Enum):
    """Top-level codes returned in every response envelope."""
    FORM_SUBMITTED = "form_submitted"
    PATH_NOT_FOUND = "path_not_found"
    METHOD_NOT_ALLOWED = "method_not_allowed"
    INVALID_REQUEST = "invalid_request"
    MISSING_REQUIRED_FIELDS = "missing_required_fields"
    INVALID_EMAIL_FIELDS = "invalid_email_fields"
    INTERNAL_ERROR = "internal_error"


class FieldError(BaseModel):
    """One validation error produced by a pipeline stage."""
    code: ErrorCode
    field: Optional[str] = None
    value: Optional[Any] = None
    detail: str


class SubmissionResponse(BaseModel):
    """Response envelope shared by every JSON response."""
    code: ResponseCode
    detail: str
    errors: Optional[List[FieldError]] = None
    method: Optional[str] = None

    def to_content(self) -> dict:
        """Serialisable body, leaving out members that were never set."""
        return self.model_dump(mode="json", exclude_none=True)
