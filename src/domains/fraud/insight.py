"""Fraud insight pipeline: resolve payment/charge -> collect Radar context -> recommend."""

from collections.abc import Mapping
from typing import Any

from src.shared.logging import get_logger

from .config import FraudConfig, default_config
from .models import (
    FraudInsightRequest,
    FraudInsightResult,
    FraudRecommendation,
    RadarInsight,
    RecommendationAction,
    ReviewSummary,
)
from .rules_engine import NO_CHARGE_RECOMMENDATION, RecommendationEvaluator
from .summaries import (
    list_data,
    summarize_charge,
    summarize_dispute,
    summarize_early_fraud_warning,
    summarize_payment_intent,
    summarize_refund,
    summarize_review,
)

logger = get_logger("tools", "stripe_fraud_insight")

BASELINE_RECOMMENDATION = FraudRecommendation(
    action=RecommendationAction.MONITOR,
    reason="Baseline recommendation before risk analysis.",
)


class FraudInsightBuilder:
    """Orchestrates the Stripe lookups behind the ``stripe_fraud_insight`` tool.

    Lookups run sequentially; only the final recommendation step is pure.
    """

    def __init__(
        self,
        gateway,
        config: FraudConfig | None = None,
        evaluator: RecommendationEvaluator | None = None,
    ) -> None:
        self._gateway = gateway
        self._config = config or default_config
        self._evaluator = evaluator or RecommendationEvaluator(config=self._config)

    async def build(self, request: FraudInsightRequest) -> FraudInsightResult:
        logger.debug(
            "building_fraud_insight",
            payment_intent_id=request.payment_intent_id,
            charge_id=request.charge_id,
            include_events=request.include_events,
        )
        result = FraudInsightResult(recommendation=BASELINE_RECOMMENDATION)

        payment_intent, charge = await self._resolve(request, result)

        if charge is None:
            result.recommendation = NO_CHARGE_RECOMMENDATION
            logger.warning(
                "no_charge_details_available",
                payment_intent_id=payment_intent.get("id") if payment_intent else None,
                charge_id=request.charge_id,
            )
            return result

        if result.charge is None:
            result.charge = summarize_charge(charge)
        result.radar = await self._collect_radar(charge, request.include_events)
        result.recommendation = self._evaluator.evaluate(
            result.charge.outcome,
            result.radar.disputes,
            result.radar.early_fraud_warnings,
        )
        return result

    async def _resolve(
        self, request: FraudInsightRequest, result: FraudInsightResult
    ) -> tuple[Any | None, Any | None]:
        payment_intent = None
        charge = None

        if request.payment_intent_id:
            logger.debug("retrieving_payment_intent", payment_intent_id=request.payment_intent_id)
            payment_intent = await self._gateway.retrieve_payment_intent(request.payment_intent_id)
            result.payment_intent = summarize_payment_intent(payment_intent)
            latest_charge = payment_intent.get("latest_charge")
            logger.debug(
                "payment_intent_retrieved",
                payment_intent_id=payment_intent.get("id"),
                latest_charge_expanded=isinstance(latest_charge, Mapping),
                status=payment_intent.get("status"),
            )

            if isinstance(latest_charge, Mapping):
                charge = latest_charge
            elif isinstance(latest_charge, str):
                logger.debug("fetching_latest_charge", charge_id=latest_charge)
                charge = await self._gateway.retrieve_charge(latest_charge)

        if request.charge_id:
            logger.debug("retrieving_charge", charge_id=request.charge_id)
            charge = await self._gateway.retrieve_charge(request.charge_id)
            result.charge = summarize_charge(charge)
            logger.debug(
                "charge_retrieved",
                charge_id=charge.get("id"),
                outcome_present=bool(charge.get("outcome")),
            )

            charge_payment_intent = charge.get("payment_intent")
            if isinstance(charge_payment_intent, str) and payment_intent is None:
                logger.debug(
                    "fetching_payment_intent_for_charge",
                    payment_intent_id=charge_payment_intent,
                )
                payment_intent = await self._gateway.retrieve_payment_intent(
                    charge_payment_intent, expand=["latest_charge"]
                )
                result.payment_intent = summarize_payment_intent(payment_intent)
            elif isinstance(charge_payment_intent, Mapping):
                payment_intent = charge_payment_intent
                result.payment_intent = summarize_payment_intent(payment_intent)

        if charge is None and payment_intent is not None and payment_intent.get("id"):
            charge = await self._gateway.first_charge_for_payment_intent(payment_intent["id"])
            if charge is not None:
                result.charge = summarize_charge(charge)
                logger.debug("charge_inferred_from_payment_intent", charge_id=charge.get("id"))
            else:
                logger.warning(
                    "no_charge_found_for_payment_intent",
                    payment_intent_id=payment_intent["id"],
                )

        return payment_intent, charge

    async def _collect_radar(self, charge: Mapping, include_events: bool) -> RadarInsight:
        charge_id = charge["id"]
        warnings = await self._gateway.list_early_fraud_warnings(charge_id)

        reviews: list[ReviewSummary] = []
        review = charge.get("review")
        if isinstance(review, str):
            logger.debug("retrieving_review", review_id=review)
            reviews.append(summarize_review(await self._gateway.retrieve_review(review)))
        elif isinstance(review, Mapping):
            reviews.append(summarize_review(review))

        disputes: list[Any] = []
        if include_events:
            disputes = await self._gateway.list_disputes(
                charge_id, limit=self._config.limits.disputes
            )

        refunds = charge.get("refunds")
        if isinstance(refunds, Mapping) and refunds.get("data") is not None:
            refund_data = list_data(refunds)
        elif include_events:
            refund_data = await self._gateway.list_refunds(
                charge_id, limit=self._config.limits.refunds
            )
        else:
            refund_data = []

        logger.debug(
            "radar_context_collected",
            charge_id=charge_id,
            early_fraud_warning_count=len(warnings),
            review_count=len(reviews),
            dispute_count=len(disputes),
            refund_count=len(refund_data),
        )

        outcome = charge.get("outcome") or {}
        return RadarInsight(
            early_fraud_warnings=[summarize_early_fraud_warning(w) for w in warnings],
            reviews=reviews,
            disputes=[summarize_dispute(d) for d in disputes],
            refunds=[summarize_refund(r) for r in refund_data],
            risk_level=outcome.get("risk_level"),
            risk_score=outcome.get("risk_score"),
            outcome_type=outcome.get("type"),
            seller_message=outcome.get("seller_message"),
        )
