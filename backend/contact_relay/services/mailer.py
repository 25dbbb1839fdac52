"""
Outbound email through the Resend API.

The Resend SDK authenticates with a module-level api_key. ResendMailer sets
it immediately before each send so the key fetched for the current
invocation is the one used, even on a warm container.
"""

import logging
from typing import Callable, Protocol

import resend

from contact_relay.errors import DispatchError
from contact_relay.models.contact import OutboundEmail

logger = logging.getLogger(__name__)


class Mailer(Protocol):
    def send(self, email: OutboundEmail) -> str | None:
        ...


# Builds a mailer bound to an API key. Injected into the handler so tests
# can substitute a fake without touching the resend module.
MailerFactory = Callable[[str], Mailer]


class ResendMailer:
    """Send OutboundEmail messages with one Resend API key."""

    def __init__(self, api_key: str):
        self.api_key = api_key

    def send(self, email: OutboundEmail) -> str | None:
        """
        Submit the message to Resend and return the message id.

        Raises:
            DispatchError: on any SDK or network failure (invalid key, rate
                           limit, rejected address, connection error).
        """
        resend.api_key = self.api_key
        try:
            result = resend.Emails.send(email.to_resend_params())
        except Exception as exc:
            raise DispatchError(f"Failed to send email: {exc}") from exc

        if isinstance(result, dict):
            return result.get("id")
        return getattr(result, "id", None)
