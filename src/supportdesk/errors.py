# src/supportdesk/errors.py
from typing import Sequence


class SupportDeskError(RuntimeError):
    pass


class TicketValidationError(SupportDeskError):
    """Caller input does not satisfy the ticket contract."""

    def __init__(self, message: str, fields: Sequence[str] = ()):
        super().__init__(message)
        self.fields = tuple(fields)


class DeliveryError(SupportDeskError):
    """A configured SMTP delivery attempt failed. Never retried."""


class ConfigError(SupportDeskError):
    """The effective configuration could not be built from the overrides."""
