"""Async Stripe client wrapper used by the MCP tools.

Keeps every Stripe SDK call in one place. Callers get plain dicts back, never
``StripeObject``s, so the tools and the insight builder only see plain lookups
(and tests can swap in an ``AsyncMock``).
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

import stripe

from src.config import Settings
from src.payments.models import REQUEST_OPTION_KEYS
from src.shared.errors import ConfigurationError
from src.shared.logging import get_logger

logger = get_logger("stripe")

PAYMENT_INTENT_EXPAND = [
    "latest_charge",
    "latest_charge.outcome",
    "latest_charge.review",
    "latest_charge.payment_method_details",
    "latest_charge.refunds",
]
CHARGE_EXPAND = ["outcome", "review", "payment_intent", "payment_method_details", "refunds"]
CHARGE_LIST_EXPAND = ["data.outcome", "data.review", "data.payment_method_details"]


@dataclass
class RawResponse:
    status: int
    data: dict[str, Any]
    headers: dict[str, str] = field(default_factory=dict)
    request_id: str | None = None
    api_version: str | None = None
    idempotency_key: str | None = None
    stripe_account: str | None = None


@dataclass
class CreatedRefund:
    refund: dict[str, Any]
    last_response: dict[str, Any] | None = None


def to_plain(obj: Any) -> dict[str, Any]:
    """Convert a ``StripeObject`` (nested objects included) into a plain dict."""
    return obj.to_dict()


def _header(headers: Mapping[str, str], name: str) -> str | None:
    wanted = name.lower()
    for key, value in headers.items():
        if key.lower() == wanted:
            return value
    return None


def response_meta(response: Any) -> dict[str, Any] | None:
    """Summarize a ``StripeResponse`` (e.g. ``obj.last_response``)."""
    if response is None:
        return None
    headers = dict(getattr(response, "headers", None) or {})
    return {
        "status": getattr(response, "code", None),
        "request_id": getattr(response, "request_id", None),
        "idempotency_key": getattr(response, "idempotency_key", None),
        "api_version": _header(headers, "stripe-version"),
    }


class StripeGateway:
    """Thin async facade over ``stripe.StripeClient``.

    Authentication, retries and pagination stay the SDK's responsibility.
    """

    def __init__(self, client: stripe.StripeClient) -> None:
        self._client = client

    @classmethod
    def from_settings(cls, settings: Settings) -> StripeGateway:
        api_key = settings.stripe_api_key.get_secret_value()
        if not api_key:
            raise ConfigurationError("STRIPE_API_KEY must be set to a Stripe secret key.")

        stripe.set_app_info(
            "Stripe MCP Server", version=settings.app_version, url=settings.app_url
        )
        options: dict[str, Any] = {"http_client": stripe.HTTPXClient()}
        if settings.stripe_api_version:
            options["stripe_version"] = settings.stripe_api_version

        logger.info(
            "stripe_client_initialized",
            api_version=settings.stripe_api_version or "account_default",
        )
        return cls(stripe.StripeClient(api_key, **options))

    async def retrieve_payment_intent(
        self, payment_intent_id: str, expand: list[str] | None = None
    ) -> dict[str, Any]:
        payment_intent = await self._client.v1.payment_intents.retrieve_async(
            payment_intent_id, params={"expand": expand or PAYMENT_INTENT_EXPAND}
        )
        return to_plain(payment_intent)

    async def retrieve_charge(self, charge_id: str) -> dict[str, Any]:
        charge = await self._client.v1.charges.retrieve_async(
            charge_id, params={"expand": CHARGE_EXPAND}
        )
        return to_plain(charge)

    async def first_charge_for_payment_intent(
        self, payment_intent_id: str
    ) -> dict[str, Any] | None:
        charges = await self._client.v1.charges.list_async(
            params={
                "payment_intent": payment_intent_id,
                "limit": 1,
                "expand": CHARGE_LIST_EXPAND,
            }
        )
        return to_plain(charges.data[0]) if charges.data else None

    async def list_early_fraud_warnings(self, charge_id: str) -> list[dict[str, Any]]:
        warnings = await self._client.v1.radar.early_fraud_warnings.list_async(
            params={"charge": charge_id}
        )
        return [to_plain(warning) for warning in warnings.data]

    async def retrieve_review(self, review_id: str) -> dict[str, Any]:
        return to_plain(await self._client.v1.reviews.retrieve_async(review_id))

    async def list_disputes(self, charge_id: str, limit: int = 100) -> list[dict[str, Any]]:
        disputes = await self._client.v1.disputes.list_async(
            params={"charge": charge_id, "limit": limit}
        )
        return [to_plain(dispute) for dispute in disputes.data]

    async def list_refunds(self, charge_id: str, limit: int = 100) -> list[dict[str, Any]]:
        refunds = await self._client.v1.refunds.list_async(
            params={"charge": charge_id, "limit": limit}
        )
        return [to_plain(refund) for refund in refunds.data]

    async def create_refund(self, params: dict[str, Any]) -> CreatedRefund:
        refund = await self._client.v1.refunds.create_async(params=params)
        return CreatedRefund(
            refund=to_plain(refund),
            last_response=response_meta(refund.last_response),
        )

    async def raw_request(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        *,
        idempotency_key: str | None = None,
        stripe_account: str | None = None,
        api_version: str | None = None,
    ) -> RawResponse:
        """Issue a request against any Stripe REST path.

        ``params`` must not contain request option names (see
        ``REQUEST_OPTION_KEYS``). Raises ``stripe.StripeError`` for non-2xx
        responses.
        """
        clashing = REQUEST_OPTION_KEYS.intersection(params or {})
        if clashing:
            raise ValueError(f"Payload keys clash with request options: {sorted(clashing)}")

        kwargs: dict[str, Any] = dict(params or {})
        if idempotency_key:
            kwargs["idempotency_key"] = idempotency_key
        if stripe_account:
            kwargs["stripe_account"] = stripe_account
        if api_version:
            kwargs["stripe_version"] = api_version

        response = await self._client.raw_request_async(method.lower(), path, **kwargs)
        headers = dict(response.headers or {})
        return RawResponse(
            status=response.code,
            data=dict(response.data or {}),
            headers=headers,
            request_id=response.request_id,
            api_version=_header(headers, "stripe-version"),
            idempotency_key=response.idempotency_key,
            stripe_account=_header(headers, "stripe-account") or stripe_account,
        )
