"""stripe_create_refund: full or partial refunds for a charge or PaymentIntent."""

from src.api.responses import ToolResponse
from src.domains.fraud.summaries import ref_id
from src.payments.models import RefundRequest
from src.shared.errors import MissingIdentifierError
from src.shared.logging import get_logger

TOOL_NAME = "stripe_create_refund"
TOOL_TITLE = "Stripe Refund Creator"
TOOL_DESCRIPTION = (
    "Creates a refund for a charge or payment intent, supporting partial refunds and metadata."
)

logger = get_logger("tools", TOOL_NAME)


async def create_refund(gateway, request: RefundRequest) -> ToolResponse:
    logger.info(
        "invocation_received",
        has_payment_intent=bool(request.payment_intent_id),
        has_charge=bool(request.charge_id),
        amount=request.amount,
        reason=request.reason,
    )
    try:
        if not request.has_identifier:
            logger.warning("missing_identifiers")
            raise MissingIdentifierError("create a refund")

        params = request.to_params()
        logger.debug(
            "creating_refund",
            payment_intent=params.get("payment_intent"),
            charge=params.get("charge"),
            amount=params.get("amount"),
            reason=params.get("reason"),
            metadata_keys=sorted(params.get("metadata", {})),
        )
        created = await gateway.create_refund(params)
        refund = created.refund

        target_charge = ref_id(refund.get("charge"))
        target_payment_intent = ref_id(refund.get("payment_intent"))
        logger.info(
            "refund_created",
            refund_id=refund.get("id"),
            target_charge=target_charge,
            target_payment_intent=target_payment_intent,
            status=refund.get("status"),
            amount=refund.get("amount"),
        )

        target = target_charge or target_payment_intent or "unknown target"
        text = (
            f"Refund {refund.get('id')} created for {refund.get('amount')} "
            f"{refund.get('currency')} on {target}. Status: {refund.get('status') or 'unknown'}"
        )
        return ToolResponse(
            text=text,
            structured={
                "refund": refund,
                "last_response": created.last_response,
            },
        )
    except Exception as exc:
        logger.error("refund_failed", error_message=str(exc), exc_info=True)
        raise
