"""
Renders the notification email for a contact-form submission.

Fields are interpolated into the HTML as-is. Set CONTACT_ESCAPE_HTML=true to
HTML-escape them first; without it a submitter can inject markup into the
notification.
"""

import html

from contact_relay.config import Settings
from contact_relay.models.contact import ContactSubmission, OutboundEmail


HTML_TEMPLATE = """\
<h1>{name} contacted you through your portfolio contact form.</h1>
<p><strong>Name:</strong> {name}</p>
<p><strong>Email:</strong> {email}</p>
<p><strong>Message:</strong> {message}</p>
"""


def render_html(submission: ContactSubmission, escape: bool = False) -> str:
    fields = {
        "name": submission.name,
        "email": submission.email,
        "message": submission.message,
    }
    if escape:
        fields = {key: html.escape(value) for key, value in fields.items()}
    return HTML_TEMPLATE.format(**fields)


def build_contact_email(submission: ContactSubmission, settings: Settings) -> OutboundEmail:
    """Build the notification for one submission using the configured addresses."""
    return OutboundEmail(
        sender=settings.from_email,
        to=settings.to_email,
        subject=settings.subject,
        html=render_html(submission, escape=settings.escape_html),
    )
