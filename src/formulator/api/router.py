"""Routing of incoming requests through the submission pipeline."""

from fastapi import Request, Response

from formulator.api.responses import (
    envelope_response,
    json_response,
    options_response,
    preflight_response,
)
from formulator.config.settings import Settings
from formulator.notifications.dispatcher import NotificationDispatcher
from formulator.submission.decoder import decode_form_data
from formulator.submission.models import ResponseCode
from formulator.submission.normalizer import normalize
from formulator.submission.validation import run_pipeline
from formulator.utils.logger import setup_logger

router_logger = setup_logger("formulator.api")

PREFLIGHT_HEADERS = (
    "origin",
    "access-control-request-method",
    "access-control-request-headers",
)


def is_preflight(request: Request) -> bool:
    """Check whether an OPTIONS request carries CORS negotiation headers."""
    return all(request.headers.get(name) is not None for name in PREFLIGHT_HEADERS)


def handle_options(request: Request) -> Response:
    if is_preflight(request):
        return preflight_response()
    return options_response()


async def handle_request(
    request: Request,
    settings: Settings,
    dispatcher: NotificationDispatcher
) -> Response:
    """
    Handle one request end to end.

    Args:
        request: Incoming request
        settings: Active settings
        dispatcher: Webhook dispatcher for accepted submissions

    Returns:
        Response to send back
    """
    if request.method == "OPTIONS":
        return handle_options(request)

    return await handle_submit_request(request, settings, dispatcher)


async def handle_submit_request(
    request: Request,
    settings: Settings,
    dispatcher: NotificationDispatcher
) -> Response:
    if request.url.path != settings.request_path:
        return json_response(ResponseCode.PATH_NOT_FOUND, "Path not found.", status_code=404)

    if request.method != settings.request_method:
        return json_response(
            ResponseCode.METHOD_NOT_ALLOWED,
            f"Method {request.method} not allowed.",
            status_code=400,
            method=request.method
        )

    raw = await decode_form_data(request)
    fields = normalize(raw, settings.form_fields)

    failure = run_pipeline(raw, fields, settings)
    if failure is not None:
        router_logger.info(
            "submission_rejected",
            extra={"data": {
                "code": failure.code.value,
                "stage": failure.stage,
                "fields": [error.field for error in failure.errors if error.field],
            }}
        )
        return envelope_response(failure.to_response(), status_code=400)

    await dispatcher.dispatch(fields)

    router_logger.info("submission_accepted", extra={"data": {"fields": list(fields)}})
    return json_response(ResponseCode.FORM_SUBMITTED, "Form submitted.")
