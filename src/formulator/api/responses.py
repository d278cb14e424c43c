"""Response helpers carrying the CORS headers of the form endpoint."""

from fastapi.responses import JSONResponse, Response

from formulator.submission.models import ResponseCode, SubmissionResponse

ALLOWED_METHODS = "GET, HEAD, POST, OPTIONS"

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": ALLOWED_METHODS,
    "Access-Control-Allow-Headers": "Content-Type",
}


class FormulatorJSONResponse(JSONResponse):
    media_type = "application/json;charset=UTF-8"


def envelope_response(envelope: SubmissionResponse, status_code: int = 200) -> Response:
    """Render a response envelope with CORS headers."""
    return FormulatorJSONResponse(
        content=envelope.to_content(),
        status_code=status_code,
        headers=CORS_HEADERS
    )


def json_response(code: ResponseCode, detail: str, status_code: int = 200, **extra) -> Response:
    return envelope_response(SubmissionResponse(code=code, detail=detail, **extra), status_code)


def preflight_response() -> Response:
    """Empty answer to a CORS preflight request."""
    return Response(status_code=200, headers=CORS_HEADERS)


def options_response() -> Response:
    """Empty answer to a plain OPTIONS request."""
    return Response(status_code=200, headers={"Allow": ALLOWED_METHODS})
