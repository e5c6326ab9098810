"""Pydantic models for the fraud domain."""

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class RecommendationAction(StrEnum):
    REFUND = "refund"
    MANUAL_REVIEW = "manual_review"
    MONITOR = "monitor"


class RiskLevel(StrEnum):
    """Radar risk levels the recommendation rules know about.

    Any other provider value (``not_assessed``, ``unknown``, future values)
    parses to UNKNOWN, which no named-level rule matches.
    """

    NORMAL = "normal"
    ELEVATED = "elevated"
    HIGHEST = "highest"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, value: str | None) -> "RiskLevel":
        if value is None:
            return cls.UNKNOWN
        try:
            return cls(value)
        except ValueError:
            return cls.UNKNOWN


class FraudRecommendation(BaseModel):
    action: RecommendationAction
    reason: str


class ChargeOutcome(BaseModel):
    network_status: str | None = None
    reason: str | None = None
    risk_level: str | None = None
    risk_score: int | None = None
    seller_message: str | None = None
    type: str | None = None


class EarlyFraudWarningSummary(BaseModel):
    id: str
    actionable: bool = False
    fraud_type: str | None = None
    created: int | None = None
    charge: str | None = None
    payment_intent: str | None = None


class ReviewSummary(BaseModel):
    id: str
    open: bool = False
    reason: str | None = None
    created: int | None = None
    closed_reason: str | None = None


class DisputeSummary(BaseModel):
    id: str
    amount: int | None = None
    currency: str | None = None
    status: str | None = None
    reason: str | None = None
    created: int | None = None
    charge: str | None = None
    payment_intent: str | None = None


class RefundSummary(BaseModel):
    id: str
    amount: int | None = None
    currency: str | None = None
    status: str | None = None
    reason: str | None = None
    created: int | None = None
    charge: str | None = None
    payment_intent: str | None = None


class PaymentIntentSummary(BaseModel):
    id: str
    amount: int | None = None
    amount_capturable: int | None = None
    amount_received: int | None = None
    currency: str | None = None
    status: str | None = None
    customer: str | None = None
    created: int | None = None
    confirmation_method: str | None = None
    payment_method_types: list[str] = []


class ChargeSummary(BaseModel):
    id: str
    amount: int | None = None
    captured: bool = False
    paid: bool = False
    currency: str | None = None
    refunded: bool = False
    disputed: bool = False
    status: str | None = None
    outcome: ChargeOutcome | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)
    payment_method_details: dict[str, Any] | None = None
    review_id: str | None = None
    receipt_url: str | None = None


class RadarInsight(BaseModel):
    early_fraud_warnings: list[EarlyFraudWarningSummary] = []
    reviews: list[ReviewSummary] = []
    disputes: list[DisputeSummary] = []
    refunds: list[RefundSummary] = []
    risk_level: str | None = None
    risk_score: int | None = None
    outcome_type: str | None = None
    seller_message: str | None = None


class FraudInsightResult(BaseModel):
    payment_intent: PaymentIntentSummary | None = None
    charge: ChargeSummary | None = None
    radar: RadarInsight | None = None
    recommendation: FraudRecommendation


class FraudInsightRequest(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    payment_intent_id: str | None = Field(
        default=None, description="Stripe PaymentIntent ID (pi_...) to analyse."
    )
    charge_id: str | None = Field(default=None, description="Stripe Charge ID (ch_...) to analyse.")
    include_events: bool = Field(
        default=True,
        description="When true, include disputes, refunds, and related events for additional context.",
    )

    @property
    def has_identifier(self) -> bool:
        return bool(self.payment_intent_id or self.charge_id)
