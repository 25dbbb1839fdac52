"""
Pydantic models for contact-form submissions and the messages built from them.

Models:
  ContactSubmission    — validated name / email / message from the form
  OutboundEmail        — message handed to the email API
  ContactResponseBody  — JSON body returned to the browser
"""

from typing import Optional
from pydantic import BaseModel


REQUIRED_FIELDS = ("name", "email", "message")


class ContactSubmission(BaseModel):
    """
    A contact-form submission that passed validation.

    The form may send extra keys (honeypots, analytics ids); they are dropped.
    No format check is applied to email; any non-empty string is accepted.
    """
    model_config = {"extra": "ignore"}

    name: str
    email: str
    message: str


class OutboundEmail(BaseModel):
    """A fully rendered email ready to be sent through Resend."""
    sender: str
    to: str
    subject: str
    html: str

    def to_resend_params(self) -> dict:
        """Return the parameter dict expected by resend.Emails.send()."""
        return {
            "from": self.sender,
            "to": [self.to],
            "subject": self.subject,
            "html": self.html,
        }


class ContactResponseBody(BaseModel):
    """JSON body of every handler response. error is omitted on success."""
    message: str
    error: Optional[str] = None
