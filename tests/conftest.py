"""Shared test fixtures for the Stripe fraud MCP tests."""

import os
from unittest.mock import AsyncMock

import pytest

os.environ.setdefault("STRIPE_API_KEY", "sk_test_dummy")
os.environ.setdefault("LOG_LEVEL", "debug")


def make_charge(**overrides) -> dict:
    """A Stripe Charge as StripeGateway returns it: a plain dict."""
    charge = {
        "id": "ch_123",
        "object": "charge",
        "amount": 5000,
        "captured": True,
        "paid": True,
        "currency": "usd",
        "refunded": False,
        "disputed": False,
        "status": "succeeded",
        "outcome": {
            "network_status": "approved_by_network",
            "reason": None,
            "risk_level": "normal",
            "risk_score": 12,
            "seller_message": "Payment complete.",
            "type": "authorized",
        },
        "metadata": {"order_id": "ord_1"},
        "payment_method_details": {"type": "card", "card": {"brand": "visa", "last4": "4242"}},
        "review": None,
        "payment_intent": "pi_123",
        "receipt_url": "https://pay.stripe.com/receipts/ch_123",
        "refunds": {"object": "list", "data": []},
    }
    charge.update(overrides)
    return charge


def make_payment_intent(**overrides) -> dict:
    payment_intent = {
        "id": "pi_123",
        "object": "payment_intent",
        "amount": 5000,
        "amount_capturable": 0,
        "amount_received": 5000,
        "currency": "usd",
        "status": "succeeded",
        "customer": "cus_123",
        "created": 1736900000,
        "confirmation_method": "automatic",
        "payment_method_types": ["card"],
        "latest_charge": "ch_123",
    }
    payment_intent.update(overrides)
    return payment_intent


def make_warning(actionable: bool = True, **overrides) -> dict:
    warning = {
        "id": "issfr_1",
        "object": "radar.early_fraud_warning",
        "actionable": actionable,
        "fraud_type": "made_with_stolen_card",
        "created": 1736900100,
        "charge": "ch_123",
        "payment_intent": "pi_123",
    }
    warning.update(overrides)
    return warning


def make_dispute(**overrides) -> dict:
    dispute = {
        "id": "dp_1",
        "object": "dispute",
        "amount": 5000,
        "currency": "usd",
        "status": "needs_response",
        "reason": "fraudulent",
        "created": 1736900200,
        "charge": "ch_123",
        "payment_intent": "pi_123",
    }
    dispute.update(overrides)
    return dispute


@pytest.fixture
def gateway() -> AsyncMock:
    """Stripe gateway double with an uneventful low-risk charge."""
    mock = AsyncMock()
    mock.retrieve_payment_intent.return_value = make_payment_intent()
    mock.retrieve_charge.return_value = make_charge()
    mock.first_charge_for_payment_intent.return_value = None
    mock.list_early_fraud_warnings.return_value = []
    mock.retrieve_review.return_value = None
    mock.list_disputes.return_value = []
    mock.list_refunds.return_value = []
    return mock
