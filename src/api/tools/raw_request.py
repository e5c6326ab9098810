"""stripe_raw_request: direct access to any Stripe REST endpoint."""

from typing import Any
from urllib.parse import urlencode

import stripe

from src.api.responses import ToolResponse, to_json
from src.payments.models import RawApiRequest
from src.shared.logging import get_logger

TOOL_NAME = "stripe_raw_request"
TOOL_TITLE = "Stripe Raw API Request"
TOOL_DESCRIPTION = "Direct access to any Stripe REST endpoint using the authenticated SDK client."

logger = get_logger("tools", TOOL_NAME)


def _query_value(value: str | int | float | bool) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def build_path(path: str, query: dict[str, Any] | None) -> str:
    """Append query params to the path, respecting an existing query string."""
    if not query:
        return path
    encoded = urlencode({key: _query_value(value) for key, value in query.items()})
    separator = "&" if "?" in path else "?"
    return f"{path}{separator}{encoded}"


def stripe_error_response(method: str, path: str, error: stripe.StripeError) -> ToolResponse:
    error_object = getattr(error, "error", None)
    error_type = getattr(error_object, "type", None) or type(error).__name__
    message = error.user_message or str(error)
    return ToolResponse(
        text=f"Stripe {method} {path} failed with status {error.http_status or 'unknown'}\n{message}",
        structured={
            "status": error.http_status,
            "type": error_type,
            "code": error.code,
            "headers": dict(error.headers) if error.headers else None,
            "message": message,
            "request_id": error.request_id,
        },
        is_error=True,
    )


async def raw_request(
    gateway, request: RawApiRequest, default_stripe_account: str | None = None
) -> ToolResponse:
    method = request.method.upper()
    logger.info(
        "invocation_received",
        method=method,
        path=request.path,
        has_query=bool(request.query),
        has_payload=bool(request.payload),
        idempotency_key=request.idempotency_key,
        explicit_stripe_account=request.stripe_account,
        api_version=request.api_version,
    )

    path = build_path(request.path, request.query) if method != "POST" else request.path
    params = (request.payload or {}) if method == "POST" else None
    stripe_account = request.stripe_account or default_stripe_account

    try:
        logger.debug("dispatching_raw_request", method=method, path=path, stripe_account=stripe_account)
        response = await gateway.raw_request(
            method,
            path,
            params,
            idempotency_key=request.idempotency_key,
            stripe_account=stripe_account,
            api_version=request.api_version,
        )
    except stripe.StripeError as exc:
        logger.warning(
            "stripe_raw_error_captured",
            method=method,
            path=path,
            status=exc.http_status,
            code=exc.code,
            request_id=exc.request_id,
            message=str(exc),
        )
        return stripe_error_response(method, path, exc)
    except Exception as exc:
        logger.error(
            "unexpected_raw_request_failure",
            method=method,
            path=path,
            error_message=str(exc),
            exc_info=True,
        )
        raise

    logger.info(
        "raw_request_completed",
        method=method,
        path=path,
        status=response.status,
        request_id=response.request_id,
        stripe_account=response.stripe_account,
    )
    return ToolResponse(
        text=f"Stripe {method} {path}\nStatus: {response.status}\n\n{to_json(response.data)}",
        structured={
            "status": response.status,
            "headers": response.headers,
            "request_id": response.request_id,
            "api_version": response.api_version,
            "idempotency_key": response.idempotency_key,
            "stripe_account": response.stripe_account,
            "data": response.data,
        },
    )
