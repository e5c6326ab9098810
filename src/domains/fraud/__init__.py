"""Fraud insight domain."""

from .config import FraudConfig
from .insight import FraudInsightBuilder
from .models import (
    ChargeOutcome,
    DisputeSummary,
    EarlyFraudWarningSummary,
    FraudInsightRequest,
    FraudInsightResult,
    FraudRecommendation,
    RecommendationAction,
    RiskLevel,
)
from .rules import ALL_RULES, RecommendationRule, RiskSignals
from .rules_engine import RecommendationEvaluator, evaluate

__all__ = [
    "ALL_RULES",
    "ChargeOutcome",
    "DisputeSummary",
    "EarlyFraudWarningSummary",
    "FraudConfig",
    "FraudInsightBuilder",
    "FraudInsightRequest",
    "FraudInsightResult",
    "FraudRecommendation",
    "RecommendationAction",
    "RecommendationEvaluator",
    "RecommendationRule",
    "RiskLevel",
    "RiskSignals",
    "evaluate",
]
