"""Shape raw Stripe API objects into the summaries returned by the insight tool.

``StripeGateway`` hands over plain dicts, and expandable references arrive either
as an ID string or as the expanded object, so every helper here reads fields
with ``Mapping.get`` and resolves references with ``ref_id``.
"""

from collections.abc import Mapping
from typing import Any

from .models import (
    ChargeOutcome,
    ChargeSummary,
    DisputeSummary,
    EarlyFraudWarningSummary,
    PaymentIntentSummary,
    RefundSummary,
    ReviewSummary,
)


def ref_id(value: Any) -> str | None:
    """Return the ID of an expandable field, expanded or not."""
    if value is None:
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, Mapping):
        return value.get("id")
    return getattr(value, "id", None)


def list_data(response: Any) -> list[Any]:
    """Items of a Stripe list object (or an already-unwrapped list)."""
    if response is None:
        return []
    if isinstance(response, Mapping):
        return list(response.get("data") or [])
    return list(response)


def summarize_outcome(outcome: Mapping | None) -> ChargeOutcome | None:
    if not outcome:
        return None
    return ChargeOutcome(
        network_status=outcome.get("network_status"),
        reason=outcome.get("reason"),
        risk_level=outcome.get("risk_level"),
        risk_score=outcome.get("risk_score"),
        seller_message=outcome.get("seller_message"),
        type=outcome.get("type"),
    )


def summarize_review(review: Mapping) -> ReviewSummary:
    return ReviewSummary(
        id=review["id"],
        open=bool(review.get("open")),
        reason=review.get("reason"),
        created=review.get("created"),
        closed_reason=review.get("closed_reason"),
    )


def summarize_early_fraud_warning(warning: Mapping) -> EarlyFraudWarningSummary:
    return EarlyFraudWarningSummary(
        id=warning["id"],
        actionable=bool(warning.get("actionable")),
        fraud_type=warning.get("fraud_type"),
        created=warning.get("created"),
        charge=ref_id(warning.get("charge")),
        payment_intent=ref_id(warning.get("payment_intent")),
    )


def summarize_dispute(dispute: Mapping) -> DisputeSummary:
    return DisputeSummary(
        id=dispute["id"],
        amount=dispute.get("amount"),
        currency=dispute.get("currency"),
        status=dispute.get("status"),
        reason=dispute.get("reason"),
        created=dispute.get("created"),
        charge=ref_id(dispute.get("charge")),
        payment_intent=ref_id(dispute.get("payment_intent")),
    )


def summarize_refund(refund: Mapping) -> RefundSummary:
    return RefundSummary(
        id=refund["id"],
        amount=refund.get("amount"),
        currency=refund.get("currency"),
        status=refund.get("status"),
        reason=refund.get("reason"),
        created=refund.get("created"),
        charge=ref_id(refund.get("charge")),
        payment_intent=ref_id(refund.get("payment_intent")),
    )


def summarize_payment_intent(payment_intent: Mapping) -> PaymentIntentSummary:
    return PaymentIntentSummary(
        id=payment_intent["id"],
        amount=payment_intent.get("amount"),
        amount_capturable=payment_intent.get("amount_capturable"),
        amount_received=payment_intent.get("amount_received"),
        currency=payment_intent.get("currency"),
        status=payment_intent.get("status"),
        customer=ref_id(payment_intent.get("customer")),
        created=payment_intent.get("created"),
        confirmation_method=payment_intent.get("confirmation_method"),
        payment_method_types=list(payment_intent.get("payment_method_types") or []),
    )


def summarize_charge(charge: Mapping) -> ChargeSummary:
    details = charge.get("payment_method_details")
    return ChargeSummary(
        id=charge["id"],
        amount=charge.get("amount"),
        captured=bool(charge.get("captured")),
        paid=bool(charge.get("paid")),
        currency=charge.get("currency"),
        refunded=bool(charge.get("refunded")),
        disputed=bool(charge.get("disputed")),
        status=charge.get("status"),
        outcome=summarize_outcome(charge.get("outcome")),
        metadata=dict(charge.get("metadata") or {}),
        payment_method_details=dict(details) if details else None,
        review_id=ref_id(charge.get("review")),
        receipt_url=charge.get("receipt_url"),
    )
