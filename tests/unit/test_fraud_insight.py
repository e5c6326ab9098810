"""Unit tests for the fraud insight pipeline with a mocked Stripe gateway."""

import pytest

from src.domains.fraud.insight import FraudInsightBuilder
from src.domains.fraud.models import FraudInsightRequest, RecommendationAction
from tests.conftest import make_charge, make_dispute, make_payment_intent, make_warning


class TestPaymentIntentResolution:
    @pytest.mark.asyncio
    async def test_expanded_latest_charge_is_used(self, gateway):
        gateway.retrieve_payment_intent.return_value = make_payment_intent(latest_charge=make_charge())
        builder = FraudInsightBuilder(gateway)

        result = await builder.build(FraudInsightRequest(payment_intent_id="pi_123"))

        gateway.retrieve_charge.assert_not_called()
        assert result.payment_intent.id == "pi_123"
        assert result.charge.id == "ch_123"
        assert result.recommendation.action == RecommendationAction.MONITOR

    @pytest.mark.asyncio
    async def test_latest_charge_id_is_fetched(self, gateway):
        builder = FraudInsightBuilder(gateway)

        result = await builder.build(FraudInsightRequest(payment_intent_id="pi_123"))

        gateway.retrieve_charge.assert_awaited_once_with("ch_123")
        assert result.charge.id == "ch_123"

    @pytest.mark.asyncio
    async def test_charge_inferred_from_charges_list(self, gateway):
        gateway.retrieve_payment_intent.return_value = make_payment_intent(latest_charge=None)
        gateway.first_charge_for_payment_intent.return_value = make_charge(id="ch_listed")
        builder = FraudInsightBuilder(gateway)

        result = await builder.build(FraudInsightRequest(payment_intent_id="pi_123"))

        gateway.first_charge_for_payment_intent.assert_awaited_once_with("pi_123")
        assert result.charge.id == "ch_listed"

    @pytest.mark.asyncio
    async def test_no_charge_forces_manual_review(self, gateway):
        gateway.retrieve_payment_intent.return_value = make_payment_intent(latest_charge=None)
        builder = FraudInsightBuilder(gateway)

        result = await builder.build(FraudInsightRequest(payment_intent_id="pi_123"))

        assert result.charge is None
        assert result.radar is None
        assert result.recommendation.action == RecommendationAction.MANUAL_REVIEW
        assert result.recommendation.reason.startswith("No charge details available")
        gateway.list_early_fraud_warnings.assert_not_called()


class TestChargeResolution:
    @pytest.mark.asyncio
    async def test_charge_fetches_referenced_payment_intent(self, gateway):
        builder = FraudInsightBuilder(gateway)

        result = await builder.build(FraudInsightRequest(charge_id="ch_123"))

        gateway.retrieve_payment_intent.assert_awaited_once_with("pi_123", expand=["latest_charge"])
        assert result.payment_intent.status == "succeeded"

    @pytest.mark.asyncio
    async def test_expanded_payment_intent_on_charge(self, gateway):
        gateway.retrieve_charge.return_value = make_charge(payment_intent=make_payment_intent(id="pi_exp"))
        builder = FraudInsightBuilder(gateway)

        result = await builder.build(FraudInsightRequest(charge_id="ch_123"))

        gateway.retrieve_payment_intent.assert_not_called()
        assert result.payment_intent.id == "pi_exp"

    @pytest.mark.asyncio
    async def test_identifiers_are_trimmed(self, gateway):
        builder = FraudInsightBuilder(gateway)

        await builder.build(FraudInsightRequest(charge_id="  ch_123  "))

        gateway.retrieve_charge.assert_awaited_once_with("ch_123")


class TestRadarContext:
    @pytest.mark.asyncio
    async def test_dispute_drives_refund(self, gateway):
        gateway.list_disputes.return_value = [make_dispute()]
        builder = FraudInsightBuilder(gateway)

        result = await builder.build(FraudInsightRequest(charge_id="ch_123"))

        assert len(result.radar.disputes) == 1
        assert result.recommendation.action == RecommendationAction.REFUND
        assert "dispute" in result.recommendation.reason

    @pytest.mark.asyncio
    async def test_actionable_warning_drives_refund(self, gateway):
        gateway.list_early_fraud_warnings.return_value = [make_warning(actionable=True)]
        builder = FraudInsightBuilder(gateway)

        result = await builder.build(FraudInsightRequest(charge_id="ch_123"))

        assert result.radar.early_fraud_warnings[0].fraud_type == "made_with_stolen_card"
        assert result.recommendation.action == RecommendationAction.REFUND

    @pytest.mark.asyncio
    async def test_elevated_outcome_needs_review(self, gateway):
        charge = make_charge()
        charge["outcome"] = {**charge["outcome"], "risk_level": "elevated", "risk_score": 62}
        gateway.retrieve_charge.return_value = charge
        builder = FraudInsightBuilder(gateway)

        result = await builder.build(FraudInsightRequest(charge_id="ch_123"))

        assert result.radar.risk_level == "elevated"
        assert result.radar.risk_score == 62
        assert result.radar.outcome_type == "authorized"
        assert result.recommendation.action == RecommendationAction.MANUAL_REVIEW

    @pytest.mark.asyncio
    async def test_review_id_is_retrieved(self, gateway):
        gateway.retrieve_charge.return_value = make_charge(review="prv_1")
        gateway.retrieve_review.return_value = {"id": "prv_1", "open": True, "reason": "rule"}
        builder = FraudInsightBuilder(gateway)

        result = await builder.build(FraudInsightRequest(charge_id="ch_123"))

        gateway.retrieve_review.assert_awaited_once_with("prv_1")
        assert result.radar.reviews[0].open is True

    @pytest.mark.asyncio
    async def test_expanded_refunds_skip_refund_listing(self, gateway):
        gateway.retrieve_charge.return_value = make_charge(
            refunds={"object": "list", "data": [{"id": "re_1", "amount": 100, "currency": "usd"}]}
        )
        builder = FraudInsightBuilder(gateway)

        result = await builder.build(FraudInsightRequest(charge_id="ch_123"))

        gateway.list_refunds.assert_not_called()
        assert [r.id for r in result.radar.refunds] == ["re_1"]

    @pytest.mark.asyncio
    async def test_refunds_listed_when_not_expanded(self, gateway):
        gateway.retrieve_charge.return_value = make_charge(refunds=None)
        gateway.list_refunds.return_value = [{"id": "re_2", "amount": 50, "currency": "usd"}]
        builder = FraudInsightBuilder(gateway)

        result = await builder.build(FraudInsightRequest(charge_id="ch_123"))

        gateway.list_refunds.assert_awaited_once_with("ch_123", limit=100)
        assert result.radar.refunds[0].id == "re_2"

    @pytest.mark.asyncio
    async def test_exclude_events_skips_disputes_and_refunds(self, gateway):
        gateway.retrieve_charge.return_value = make_charge(refunds=None)
        gateway.list_disputes.return_value = [make_dispute()]
        builder = FraudInsightBuilder(gateway)

        result = await builder.build(FraudInsightRequest(charge_id="ch_123", include_events=False))

        gateway.list_disputes.assert_not_called()
        gateway.list_refunds.assert_not_called()
        assert result.radar.disputes == []
        assert result.recommendation.action == RecommendationAction.MONITOR
