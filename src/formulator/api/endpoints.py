"""FastAPI application serving the form endpoint."""

from typing import Optional

from fastapi import FastAPI, Request, Response

from formulator import __version__
from formulator.api.responses import json_response
from formulator.api.router import handle_request
from formulator.config.settings import Settings
from formulator.notifications.dispatcher import NotificationDispatcher
from formulator.submission.models import ResponseCode
from formulator.utils.logger import setup_logger

api_logger = setup_logger("formulator.api")


def create_app(
    settings: Optional[Settings] = None,
    dispatcher: Optional[NotificationDispatcher] = None
) -> FastAPI:
    """
    Create the form handler application.

    Every path is routed to a single handler so unknown paths and methods
    get the same JSON envelope as the form endpoint.

    Args:
        settings: Settings to use, read from the environment when omitted
        dispatcher: Webhook dispatcher, built from settings when omitted

    Returns:
        FastAPI application
    """
    if settings is None:
        settings = Settings.from_env()
    if dispatcher is None:
        dispatcher = NotificationDispatcher.from_settings(settings)

    app = FastAPI(
        title="Formulator",
        description="Form submission handler with chat notifications",
        version=__version__,
        docs_url=None,
        redoc_url=None,
        openapi_url=None
    )
    app.state.settings = settings
    app.state.dispatcher = dispatcher

    async def submit(request: Request) -> Response:
        try:
            return await handle_request(request, app.state.settings, app.state.dispatcher)
        except Exception as e:
            api_logger.exception(
                "unhandled_error",
                extra={"data": {"path": request.url.path, "error_type": type(e).__name__}}
            )
            return json_response(ResponseCode.INTERNAL_ERROR, "Internal server error.", status_code=500)

    # No method filter, every method and path reaches the router
    app.router.add_route("/{full_path:path}", submit, include_in_schema=False)

    api_logger.info(
        "app_created",
        extra={"data": {
            "request_path": settings.request_path,
            "request_method": settings.request_method,
            "webhooks": [target.name for target in dispatcher.targets],
        }}
    )
    return app
