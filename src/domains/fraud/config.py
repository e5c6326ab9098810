"""Fraud recommendation configuration with sensible defaults."""

import os
from dataclasses import dataclass, field


@dataclass
class RecommendationThresholds:
    # Radar risk scores are 0-100; both thresholds are inclusive
    refund_score: int = 75
    review_score: int = 50


@dataclass
class LookupLimits:
    disputes: int = 100
    refunds: int = 100


@dataclass
class FraudConfig:
    thresholds: RecommendationThresholds = field(default_factory=RecommendationThresholds)
    limits: LookupLimits = field(default_factory=LookupLimits)

    @classmethod
    def from_env(cls) -> "FraudConfig":
        """Load config with env var overrides. Env vars use FRAUD_ prefix."""
        config = cls()

        if v := os.getenv("FRAUD_REFUND_SCORE_THRESHOLD"):
            config.thresholds.refund_score = int(v)
        if v := os.getenv("FRAUD_REVIEW_SCORE_THRESHOLD"):
            config.thresholds.review_score = int(v)

        if v := os.getenv("FRAUD_DISPUTE_LIST_LIMIT"):
            config.limits.disputes = int(v)
        if v := os.getenv("FRAUD_REFUND_LIST_LIMIT"):
            config.limits.refunds = int(v)

        return config


# Module-level default instance
default_config = FraudConfig()
