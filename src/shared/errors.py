"""Exceptions raised by the MCP server and its tools."""


class StripeMcpError(Exception):
    """Base for all server errors."""


class ConfigurationError(StripeMcpError):
    """Settings are missing or invalid at startup."""


class MissingIdentifierError(StripeMcpError, ValueError):
    """Neither a PaymentIntent ID nor a Charge ID was supplied."""

    def __init__(self, purpose: str):
        self.purpose = purpose
        super().__init__(
            f"You must provide either payment_intent_id or charge_id to {purpose}."
        )
