"""stripe_fraud_insight: Radar risk data, early fraud warnings, disputes and refunds."""

from src.api.responses import ToolResponse, to_json
from src.domains.fraud.insight import FraudInsightBuilder
from src.domains.fraud.models import FraudInsightRequest, FraudInsightResult
from src.shared.errors import MissingIdentifierError
from src.shared.logging import get_logger

TOOL_NAME = "stripe_fraud_insight"
TOOL_TITLE = "Stripe Radar Fraud Insight"
TOOL_DESCRIPTION = (
    "Fetches Radar risk data, early fraud warnings, disputes, and refunds for a payment."
)

logger = get_logger("tools", TOOL_NAME)


def summary_lines(insight: FraudInsightResult) -> list[str]:
    payment_intent = insight.payment_intent
    charge = insight.charge
    outcome = charge.outcome if charge else None
    risk_level = outcome.risk_level if outcome and outcome.risk_level is not None else "unknown"
    risk_score = outcome.risk_score if outcome and outcome.risk_score is not None else "unknown"
    return [
        f"Payment Intent: {payment_intent.id if payment_intent else 'n/a'} | "
        f"status: {(payment_intent.status if payment_intent else None) or 'unknown'}",
        f"Charge: {charge.id if charge else 'n/a'} | risk level: {risk_level} | "
        f"risk score: {risk_score}",
        f"Recommendation: {insight.recommendation.action.value.upper()} - "
        f"{insight.recommendation.reason}",
    ]


async def fraud_insight(builder: FraudInsightBuilder, request: FraudInsightRequest) -> ToolResponse:
    logger.info(
        "invocation_received",
        has_payment_intent=bool(request.payment_intent_id),
        has_charge=bool(request.charge_id),
        include_events=request.include_events,
    )
    try:
        if not request.has_identifier:
            logger.warning("missing_identifiers")
            raise MissingIdentifierError("retrieve fraud insights")

        insight = await builder.build(request)
        outcome = insight.charge.outcome if insight.charge else None

        logger.info(
            "fraud_insight_generated",
            payment_intent=insight.payment_intent.id if insight.payment_intent else None,
            charge=insight.charge.id if insight.charge else None,
            recommendation=insight.recommendation.action.value,
            risk_level=outcome.risk_level if outcome else None,
            risk_score=outcome.risk_score if outcome else None,
        )

        structured = insight.model_dump(mode="json")
        text = "\n".join(summary_lines(insight)) + f"\n\nFull details:\n{to_json(structured)}"
        return ToolResponse(text=text, structured=structured)
    except Exception as exc:
        logger.error("fraud_insight_failed", error_message=str(exc), exc_info=True)
        raise
