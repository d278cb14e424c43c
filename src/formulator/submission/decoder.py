"""Decoding of request bodies into flat form data."""

import json
from typing import Any, Dict

from starlette.datastructures import UploadFile
from starlette.exceptions import HTTPException
from starlette.formparsers import MultiPartException
from starlette.requests import Request

from formulator.utils.logger import setup_logger

decoder_logger = setup_logger("formulator.submission")


async def decode_form_data(request: Request) -> Dict[str, Any]:
    """
    Decode the submitted fields of a request.

    JSON bodies are used as-is, form bodies (multipart or URL-encoded) are
    flattened and anything else falls back to the query string. Repeated
    keys keep their last value. Bodies that cannot be parsed decode to an
    empty mapping.

    Args:
        request: Incoming request

    Returns:
        Field name to value mapping, possibly empty
    """
    content_type = request.headers.get("content-type", "")

    if "application/json" in content_type:
        return await _decode_json(request)

    if "form" in content_type:
        return await _decode_form(request)

    return dict(request.query_params.multi_items())


async def _decode_json(request: Request) -> Dict[str, Any]:
    try:
        body = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        decoder_logger.warning("malformed_json_body", extra={"data": {"error": str(e)}})
        return {}

    if not isinstance(body, dict):
        decoder_logger.warning("json_body_not_an_object", extra={"data": {"type": type(body).__name__}})
        return {}

    return body


async def _decode_form(request: Request) -> Dict[str, Any]:
    try:
        form = await request.form()
    except (HTTPException, MultiPartException) as e:
        detail = getattr(e, "detail", None) or getattr(e, "message", str(e))
        decoder_logger.warning("malformed_form_body", extra={"data": {"error": detail}})
        return {}

    body = {}
    for name, value in form.multi_items():
        if isinstance(value, UploadFile):
            value = value.filename or ""
        body[name] = value
    return body
