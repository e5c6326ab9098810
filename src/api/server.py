"""MCP server factory: registers the Stripe tools on a FastMCP instance."""

from typing import Annotated, Any, Literal

from mcp.server.fastmcp import FastMCP
from mcp.types import CallToolResult
from pydantic import Field

from src.api.tools import fraud, raw_request, refunds
from src.config import Settings
from src.domains.fraud.config import FraudConfig
from src.domains.fraud.insight import FraudInsightBuilder
from src.domains.fraud.models import FraudInsightRequest
from src.payments.gateway import StripeGateway
from src.payments.models import RawApiRequest, RefundRequest
from src.shared.logging import get_logger

logger = get_logger()
tools_logger = get_logger("tools")

INSTRUCTIONS = (
    "Stripe Radar fraud insight, refunds, and raw Stripe REST access. "
    "Call stripe_fraud_insight before refunding a suspicious payment."
)


def create_server(
    settings: Settings,
    gateway: Any | None = None,
    fraud_config: FraudConfig | None = None,
) -> FastMCP:
    """Build the FastMCP server with all Stripe tools registered.

    ``gateway`` defaults to a ``StripeGateway`` built from ``settings``.
    """
    logger.info(
        "initializing_stripe_mcp_server",
        api_version=settings.stripe_api_version or "account_default",
        default_stripe_account=settings.default_stripe_account,
        log_level=settings.log_level,
    )
    gateway = gateway or StripeGateway.from_settings(settings)
    builder = FraudInsightBuilder(gateway, config=fraud_config or FraudConfig.from_env())

    server = FastMCP(
        settings.app_name,
        instructions=INSTRUCTIONS,
        host=settings.host,
        port=settings.port,
    )
    register_tools(server, gateway, builder, settings.default_stripe_account)
    return server


def register_tools(
    server: FastMCP,
    gateway: Any,
    builder: FraudInsightBuilder,
    default_stripe_account: str | None = None,
) -> None:
    tools_logger.info("registering_stripe_tools")

    @server.tool(
        name=fraud.TOOL_NAME,
        title=fraud.TOOL_TITLE,
        description=fraud.TOOL_DESCRIPTION,
        structured_output=False,
    )
    async def stripe_fraud_insight(
        payment_intent_id: Annotated[
            str | None, Field(description="Stripe PaymentIntent ID (pi_...) to analyse.")
        ] = None,
        charge_id: Annotated[str | None, Field(description="Stripe Charge ID (ch_...) to analyse.")] = None,
        include_events: Annotated[
            bool,
            Field(
                description=(
                    "When true, include disputes, refunds, and related events for additional context."
                )
            ),
        ] = True,
    ) -> CallToolResult:
        request = FraudInsightRequest(
            payment_intent_id=payment_intent_id,
            charge_id=charge_id,
            include_events=include_events,
        )
        response = await fraud.fraud_insight(builder, request)
        return response.to_call_tool_result()

    @server.tool(
        name=refunds.TOOL_NAME,
        title=refunds.TOOL_TITLE,
        description=refunds.TOOL_DESCRIPTION,
        structured_output=False,
    )
    async def stripe_create_refund(
        payment_intent_id: Annotated[
            str | None, Field(description="Stripe PaymentIntent ID to refund.")
        ] = None,
        charge_id: Annotated[str | None, Field(description="Stripe Charge ID to refund.")] = None,
        amount: Annotated[
            int | None,
            Field(description="Optional amount in the smallest currency unit for partial refunds."),
        ] = None,
        reason: Annotated[
            Literal["duplicate", "fraudulent", "requested_by_customer"] | None,
            Field(description="Optional refund reason."),
        ] = None,
        metadata: Annotated[
            dict[str, str] | None, Field(description="Optional metadata to attach to the refund.")
        ] = None,
    ) -> CallToolResult:
        request = RefundRequest(
            payment_intent_id=payment_intent_id,
            charge_id=charge_id,
            amount=amount,
            reason=reason,
            metadata=metadata,
        )
        response = await refunds.create_refund(gateway, request)
        return response.to_call_tool_result()

    @server.tool(
        name=raw_request.TOOL_NAME,
        title=raw_request.TOOL_TITLE,
        description=raw_request.TOOL_DESCRIPTION,
        structured_output=False,
    )
    async def stripe_raw_request(
        method: Annotated[
            Literal["GET", "POST", "DELETE"],
            Field(description="HTTP method to use for the Stripe API request."),
        ],
        path: Annotated[
            str,
            Field(
                description=(
                    "Stripe API path (e.g. /v1/customers or /v1/payment_intents/pi_xxx). "
                    "Include query params directly in the path for non-POST requests."
                )
            ),
        ],
        query: Annotated[
            dict[str, str | int | float | bool] | None,
            Field(description="Optional query parameters. Applied only when method is GET or DELETE."),
        ] = None,
        payload: Annotated[
            dict[str, Any] | None, Field(description="Optional payload for POST requests.")
        ] = None,
        idempotency_key: Annotated[
            str | None, Field(description="Optional Idempotency-Key header to apply.")
        ] = None,
        stripe_account: Annotated[
            str | None, Field(description="Optional connected account ID for the request.")
        ] = None,
        api_version: Annotated[
            str | None, Field(description="Optional Stripe API version override.")
        ] = None,
    ) -> CallToolResult:
        request = RawApiRequest(
            method=method,
            path=path,
            query=query,
            payload=payload,
            idempotency_key=idempotency_key,
            stripe_account=stripe_account,
            api_version=api_version,
        )
        response = await raw_request.raw_request(gateway, request, default_stripe_account)
        return response.to_call_tool_result()
