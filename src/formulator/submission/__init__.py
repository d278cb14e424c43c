"""Form submission normalization and validation."""

from formulator.submission.models import ErrorCode, FieldError, ResponseCode, SubmissionResponse
from formulator.submission.normalizer import normalize
from formulator.submission.validation import run_pipeline, PipelineFailure

__all__ = [
    'ErrorCode',
    'FieldError',
    'ResponseCode',
    'SubmissionResponse',
    'normalize',
    'run_pipeline',
    'PipelineFailure',
]
