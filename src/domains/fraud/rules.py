"""Recommendation rules, listed in priority order.

Each rule is a predicate over ``RiskSignals`` paired with the recommendation it
produces. The evaluator walks ``ALL_RULES`` top to bottom and the first match
wins, so ``DefaultMonitorRule`` must stay last.
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass

from .config import FraudConfig
from .models import (
    ChargeOutcome,
    DisputeSummary,
    EarlyFraudWarningSummary,
    FraudRecommendation,
    RecommendationAction,
    RiskLevel,
)


@dataclass(frozen=True)
class RiskSignals:
    """The normalized inputs every rule sees."""

    dispute_count: int
    actionable_warning_count: int
    risk_level: RiskLevel
    raw_risk_level: str | None
    risk_score: int

    @classmethod
    def collect(
        cls,
        outcome: ChargeOutcome | None,
        disputes: Sequence[DisputeSummary],
        early_fraud_warnings: Sequence[EarlyFraudWarningSummary],
    ) -> "RiskSignals":
        raw_level = outcome.risk_level if outcome else None
        score = outcome.risk_score if outcome and outcome.risk_score is not None else 0
        return cls(
            dispute_count=len(disputes),
            actionable_warning_count=sum(1 for w in early_fraud_warnings if w.actionable),
            risk_level=RiskLevel.parse(raw_level),
            raw_risk_level=raw_level,
            risk_score=score,
        )


class RecommendationRule(ABC):
    """Base class for recommendation rules."""

    rule_id: str
    action: RecommendationAction

    @abstractmethod
    def matches(self, signals: RiskSignals, config: FraudConfig) -> bool: ...

    @abstractmethod
    def reason(self, signals: RiskSignals) -> str: ...

    def recommend(self, signals: RiskSignals) -> FraudRecommendation:
        return FraudRecommendation(action=self.action, reason=self.reason(signals))


class ExistingDisputeRule(RecommendationRule):
    rule_id = "existing_dispute"
    action = RecommendationAction.REFUND

    def matches(self, signals: RiskSignals, config: FraudConfig) -> bool:
        return signals.dispute_count > 0

    def reason(self, signals: RiskSignals) -> str:
        return "Existing dispute detected. Prefer immediate refund to reduce losses."


class ActionableWarningRule(RecommendationRule):
    rule_id = "actionable_early_fraud_warning"
    action = RecommendationAction.REFUND

    def matches(self, signals: RiskSignals, config: FraudConfig) -> bool:
        return signals.actionable_warning_count > 0

    def reason(self, signals: RiskSignals) -> str:
        return "Actionable Radar early fraud warning present. Stripe recommends refunding."


class HighRiskRule(RecommendationRule):
    rule_id = "high_risk"
    action = RecommendationAction.REFUND

    def matches(self, signals: RiskSignals, config: FraudConfig) -> bool:
        return (
            signals.risk_level is RiskLevel.HIGHEST
            or signals.risk_score >= config.thresholds.refund_score
        )

    def reason(self, signals: RiskSignals) -> str:
        level = signals.raw_risk_level or "n/a"
        return f"High risk detected (level: {level}, score: {signals.risk_score})."


class ElevatedRiskRule(RecommendationRule):
    rule_id = "elevated_risk"
    action = RecommendationAction.MANUAL_REVIEW

    def matches(self, signals: RiskSignals, config: FraudConfig) -> bool:
        return (
            signals.risk_level is RiskLevel.ELEVATED
            or signals.risk_score >= config.thresholds.review_score
        )

    def reason(self, signals: RiskSignals) -> str:
        return "Elevated risk level. Review supporting evidence before issuing refund."


class DefaultMonitorRule(RecommendationRule):
    rule_id = "default_monitor"
    action = RecommendationAction.MONITOR

    def matches(self, signals: RiskSignals, config: FraudConfig) -> bool:
        return True

    def reason(self, signals: RiskSignals) -> str:
        return "No disputes or actionable warnings. Monitor the transaction for future signals."


# All rule instances in evaluation order
ALL_RULES: list[RecommendationRule] = [
    ExistingDisputeRule(),
    ActionableWarningRule(),
    HighRiskRule(),
    ElevatedRiskRule(),
    DefaultMonitorRule(),
]
