"""First-match recommendation engine over the ordered rule list."""

from collections.abc import Sequence

from .config import FraudConfig, default_config
from .models import (
    ChargeOutcome,
    DisputeSummary,
    EarlyFraudWarningSummary,
    FraudRecommendation,
    RecommendationAction,
)
from .rules import ALL_RULES, RecommendationRule, RiskSignals

NO_CHARGE_RECOMMENDATION = FraudRecommendation(
    action=RecommendationAction.MANUAL_REVIEW,
    reason="No charge details available. Review manually before taking action.",
)


class RecommendationEvaluator:
    """Derives a refund / manual review / monitor recommendation for a charge.

    Evaluation is pure: the result depends only on the outcome, disputes and
    early fraud warnings passed in, so one instance can be shared across
    concurrent requests.
    """

    def __init__(
        self,
        config: FraudConfig | None = None,
        rules: Sequence[RecommendationRule] | None = None,
    ) -> None:
        self._config = config or default_config
        self._rules = tuple(rules if rules is not None else ALL_RULES)

    def matching_rule(self, signals: RiskSignals) -> RecommendationRule:
        for rule in self._rules:
            if rule.matches(signals, self._config):
                return rule
        raise LookupError("No recommendation rule matched; the rule list needs a catch-all")

    def evaluate(
        self,
        outcome: ChargeOutcome | None,
        disputes: Sequence[DisputeSummary],
        early_fraud_warnings: Sequence[EarlyFraudWarningSummary],
    ) -> FraudRecommendation:
        signals = RiskSignals.collect(outcome, disputes, early_fraud_warnings)
        return self.matching_rule(signals).recommend(signals)


_default_evaluator = RecommendationEvaluator()


def evaluate(
    outcome: ChargeOutcome | None,
    disputes: Sequence[DisputeSummary],
    early_fraud_warnings: Sequence[EarlyFraudWarningSummary],
) -> FraudRecommendation:
    """Evaluate with the default rules and thresholds."""
    return _default_evaluator.evaluate(outcome, disputes, early_fraud_warnings)
