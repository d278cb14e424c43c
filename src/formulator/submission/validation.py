"""Validation stages for form submissions."""

import re
from dataclasses import dataclass
from typing import Any, Callable, List, Mapping, Optional, Tuple

from formulator.config.settings import Settings
from formulator.submission.models import (
    ErrorCode,
    FieldError,
    ResponseCode,
    SubmissionResponse,
)

EMAIL_REGEX = re.compile(
    r'(([^<>()\[\]\\.,;:\s@"]+(\.[^<>()\[\]\\.,;:\s@"]+)*)|(".+"))'
    r'@'
    r'((\[[0-9]{1,3}\.[0-9]{1,3}\.[0-9]{1,3}\.[0-9]{1,3}\])|(([a-zA-Z\-0-9]+\.)+[a-zA-Z]{2,}))',
    re.IGNORECASE
)


def is_valid_email(value: Any) -> bool:
    """Check a submitted value against the email address pattern."""
    if value is None:
        return False
    return EMAIL_REGEX.fullmatch(str(value)) is not None


def validate_honeypot(data: Mapping[str, Any], settings: Settings) -> List[FieldError]:
    """
    Check the honeypot field for bot submissions.

    The field must be present and exactly empty. Its value is never
    reported back.

    Args:
        data: Raw decoded form data
        settings: Active settings

    Returns:
        A single error when the honeypot was filled or left out
    """
    if not settings.honeypot_field:
        return []

    if data.get(settings.honeypot_field) == "":
        return []

    return [FieldError(
        code=ErrorCode.INVALID_HONEYPOT_FIELD,
        detail="Honeypot field is invalid."
    )]


def validate_required_fields(data: Mapping[str, Any], settings: Settings) -> List[FieldError]:
    """
    Validate that all required fields are present.

    Args:
        data: Normalized form data
        settings: Active settings

    Returns:
        One error per missing field, in configured order
    """
    errors = []
    for field in settings.required_fields:
        if not data.get(field):
            errors.append(FieldError(
                code=ErrorCode.MISSING_REQUIRED_FIELD,
                field=field,
                detail=f"Field {field} is required."
            ))
    return errors


def validate_email_fields(data: Mapping[str, Any], settings: Settings) -> List[FieldError]:
    """
    Validate the format of every configured email field.

    A missing field counts as an invalid address.

    Args:
        data: Normalized form data
        settings: Active settings

    Returns:
        One error per invalid field, in configured order
    """
    errors = []
    for field in settings.email_fields:
        value = data.get(field)
        if not is_valid_email(value):
            errors.append(FieldError(
                code=ErrorCode.INVALID_EMAIL,
                field=field,
                value=value,
                detail="Invalid email address."
            ))
    return errors


@dataclass(frozen=True)
class Stage:
    """A pipeline step and the response it produces when it fails."""
    name: str
    check: Callable[[Mapping[str, Any], Settings], List[FieldError]]
    response_code: ResponseCode
    detail: str
    reads_raw: bool = False
    report_errors: bool = True


@dataclass(frozen=True)
class PipelineFailure:
    """Outcome of the first failing stage."""
    stage: str
    code: ResponseCode
    detail: str
    errors: List[FieldError]
    report_errors: bool = True

    def to_response(self) -> SubmissionResponse:
        return SubmissionResponse(
            code=self.code,
            detail=self.detail,
            errors=self.errors if self.report_errors else None
        )


# Honeypot answers generically so bots cannot tell which check failed
STAGES: Tuple[Stage, ...] = (
    Stage(
        name="honeypot",
        check=validate_honeypot,
        response_code=ResponseCode.INVALID_REQUEST,
        detail="Invalid request.",
        reads_raw=True,
        report_errors=False,
    ),
    Stage(
        name="required_fields",
        check=validate_required_fields,
        response_code=ResponseCode.MISSING_REQUIRED_FIELDS,
        detail="Some required fields are missing.",
    ),
    Stage(
        name="email_fields",
        check=validate_email_fields,
        response_code=ResponseCode.INVALID_EMAIL_FIELDS,
        detail="Some email fields are invalid.",
    ),
)


def run_pipeline(
    raw: Mapping[str, Any],
    fields: Mapping[str, Any],
    settings: Settings,
    stages: Tuple[Stage, ...] = STAGES
) -> Optional[PipelineFailure]:
    """
    Run the validation stages in order, stopping at the first failure.

    Args:
        raw: Decoded form data before normalization
        fields: Normalized form data
        settings: Active settings
        stages: Stages to run

    Returns:
        The failure of the first stage reporting errors, or None
    """
    for stage in stages:
        errors = stage.check(raw if stage.reads_raw else fields, settings)
        if errors:
            return PipelineFailure(
                stage=stage.name,
                code=stage.response_code,
                detail=stage.detail,
                errors=errors,
                report_errors=stage.report_errors
            )
    return None
