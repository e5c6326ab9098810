"""Request models for the refund and raw API tools."""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

RefundReason = Literal["duplicate", "fraudulent", "requested_by_customer"]
HttpMethod = Literal["GET", "POST", "DELETE"]

# Keyword names StripeClient.raw_request reads as request options, not params.
REQUEST_OPTION_KEYS = frozenset(
    {
        "api_key",
        "base",
        "content_type",
        "headers",
        "idempotency_key",
        "max_network_retries",
        "stripe_account",
        "stripe_context",
        "stripe_version",
    }
)


class RefundRequest(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    payment_intent_id: str | None = Field(default=None, description="Stripe PaymentIntent ID to refund.")
    charge_id: str | None = Field(default=None, description="Stripe Charge ID to refund.")
    amount: int | None = Field(
        default=None,
        gt=0,
        description="Optional amount in the smallest currency unit for partial refunds.",
    )
    reason: RefundReason | None = Field(default=None, description="Optional refund reason.")
    metadata: dict[str, str] | None = Field(
        default=None, description="Optional metadata to attach to the refund."
    )

    @property
    def has_identifier(self) -> bool:
        return bool(self.payment_intent_id or self.charge_id)

    def to_params(self) -> dict[str, Any]:
        """Stripe ``refunds.create`` params; unset fields are omitted."""
        params: dict[str, Any] = {}
        if self.payment_intent_id:
            params["payment_intent"] = self.payment_intent_id
        if self.charge_id:
            params["charge"] = self.charge_id
        if self.amount is not None:
            params["amount"] = self.amount
        if self.reason:
            params["reason"] = self.reason
        if self.metadata:
            params["metadata"] = self.metadata
        return params


class RawApiRequest(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    method: HttpMethod = Field(description="HTTP method to use for the Stripe API request.")
    path: str = Field(
        description=(
            "Stripe API path (e.g. /v1/customers or /v1/payment_intents/pi_xxx). "
            "Include query params directly in the path for non-POST requests."
        )
    )
    query: dict[str, str | int | float | bool] | None = Field(
        default=None,
        description="Optional query parameters. Applied only when method is GET or DELETE.",
    )
    payload: dict[str, Any] | None = Field(default=None, description="Optional payload for POST requests.")
    idempotency_key: str | None = Field(default=None, description="Optional Idempotency-Key header to apply.")
    stripe_account: str | None = Field(default=None, description="Optional connected account ID for the request.")
    api_version: str | None = Field(default=None, description="Optional Stripe API version override.")

    @field_validator("payload")
    @classmethod
    def reject_request_options(cls, payload: dict[str, Any] | None) -> dict[str, Any] | None:
        clashing = REQUEST_OPTION_KEYS.intersection(payload or {})
        if clashing:
            raise ValueError(
                f"payload keys {sorted(clashing)} are request options; "
                "use the idempotency_key, stripe_account or api_version fields instead"
            )
        return payload
