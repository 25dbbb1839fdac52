"""
Contact request handler: the Lambda entry point for the portfolio contact form.

One invocation handles one HTTP event and always returns one response dict;
nothing raises past ContactHandler.__call__.

Flow:
  1. OPTIONS  → 200 preflight response, nothing else runs
  2. fetch the Resend API key from Secrets Manager
     (secret name from RESEND_API_KEY_SECRET_NAME)
  3. parse the body (JSON text or already-decoded object)
  4. require non-empty name / email / message
  5. send the notification email through Resend
  6. 200 on success; on failure the status comes from status_for_kind()
     (500 for everything unless CONTACT_CLIENT_ERRORS_AS_400 is set)

The secret store is injected so one boto3 client can be shared by every
invocation in a container. Use lambda_handler as the function's handler
setting (contact_relay.handler.lambda_handler).
"""

import json
import logging
import os
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Optional

from pydantic import ValidationError as PydanticValidationError

from contact_relay.config import Settings, load_settings, SECRET_NAME_ENV
from contact_relay.errors import (
    ConfigError,
    ContactError,
    ErrorKind,
    ParseError,
    ValidationError,
    status_for_kind,
)
from contact_relay.models.contact import REQUIRED_FIELDS, ContactResponseBody, ContactSubmission
from contact_relay.models.request import (
    InboundRequest,
    ParsedObject,
    RawJsonText,
    RequestBody,
    body_from_raw,
)
from contact_relay.services.email_template import build_contact_email
from contact_relay.services.mailer import MailerFactory, ResendMailer
from contact_relay.services.secret_store import SecretStore

logging.getLogger().setLevel(os.getenv("LOG_LEVEL", "INFO").upper())

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

CORS_HEADERS = {
    "Access-Control-Allow-Headers": "Content-Type",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
}

PREFLIGHT_MESSAGE = "Preflight request successful"
SUCCESS_MESSAGE = "Email sent successfully"
FAILURE_MESSAGE = "Internal server error"


# ---------------------------------------------------------------------------
# Result type
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ContactResult:
    """Outcome of one non-preflight invocation."""
    message_id: Optional[str] = None
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def kind(self) -> Optional[ErrorKind]:
        """The ErrorKind of the failure, or None on success or for unexpected errors."""
        if isinstance(self.error, ContactError):
            return self.error.kind
        return None


# ---------------------------------------------------------------------------
# Body parsing and validation
# ---------------------------------------------------------------------------

def parse_body(body: RequestBody) -> dict:
    """
    Decode a RequestBody into a dict.

    Raises:
        ParseError: the JSON text is malformed or does not encode an object.
    """
    if isinstance(body, ParsedObject):
        return body.data
    if isinstance(body, RawJsonText):
        try:
            data = json.loads(body.text)
        except json.JSONDecodeError as exc:
            raise ParseError(f"Failed to parse request body as JSON: {exc}") from exc
        if not isinstance(data, dict):
            raise ParseError("Request body must be a JSON object")
        return data
    raise ParseError("Invalid event body")


def validate_body(body: dict) -> ContactSubmission:
    """
    Require truthy name, email and message and return them as a ContactSubmission.

    Raises:
        ValidationError: a field is missing or empty, or is not a string.
    """
    logger.info("Validating body: %s", json.dumps(body, default=str))

    missing = [name for name in REQUIRED_FIELDS if not body.get(name)]
    if missing:
        raise ValidationError(f"Missing required fields: {', '.join(missing)}")

    try:
        return ContactSubmission.model_validate(body)
    except PydanticValidationError as exc:
        fields = sorted({str(err["loc"][0]) for err in exc.errors() if err.get("loc")})
        raise ValidationError(f"Invalid field types: {', '.join(fields)}") from exc


# ---------------------------------------------------------------------------
# Response shaping
# ---------------------------------------------------------------------------

def build_response(
    status_code: int,
    message: str,
    error: Optional[BaseException] = None,
    origin: Optional[str] = None,
    allowed_origins: Iterable[str] = (),
) -> dict:
    """
    Build the Lambda HTTP response dict.

    Access-Control-Allow-Origin is only added when origin is in
    allowed_origins; with the default empty allowlist the headers are
    exactly CORS_HEADERS.
    """
    headers = dict(CORS_HEADERS)
    if origin and origin in allowed_origins:
        headers["Access-Control-Allow-Origin"] = origin
        headers["Vary"] = "Origin"

    body = ContactResponseBody(
        message=message,
        error=str(error) if error is not None else None,
    )
    return {
        "statusCode": status_code,
        "headers": headers,
        "body": json.dumps(body.model_dump(exclude_none=True)),
    }


# ---------------------------------------------------------------------------
# Handler
# ---------------------------------------------------------------------------

class ContactHandler:
    """
    Callable Lambda handler with its collaborators injected.

    Args:
        secret_store:    long-lived SecretStore shared across invocations
        mailer_factory:  builds a mailer from the fetched API key
        settings_loader: returns the Settings for the current invocation
    """

    def __init__(
        self,
        secret_store: SecretStore,
        mailer_factory: MailerFactory = ResendMailer,
        settings_loader: Callable[[], Settings] = load_settings,
    ):
        self.secret_store = secret_store
        self.mailer_factory = mailer_factory
        self.settings_loader = settings_loader

    def __call__(self, event: Any, context: Any = None) -> dict:
        logger.info("Received event: %s", json.dumps(event, default=str))

        settings = self.settings_loader()
        request = InboundRequest.from_event(event)

        if request.is_preflight:
            return build_response(
                200,
                PREFLIGHT_MESSAGE,
                origin=request.origin,
                allowed_origins=settings.allowed_origins,
            )

        result = self.process(request, settings)
        if result.ok:
            return build_response(
                200,
                SUCCESS_MESSAGE,
                origin=request.origin,
                allowed_origins=settings.allowed_origins,
            )

        return build_response(
            status_for_kind(result.kind, settings.client_errors_as_400),
            FAILURE_MESSAGE,
            error=result.error,
            origin=request.origin,
            allowed_origins=settings.allowed_origins,
        )

    def process(self, request: InboundRequest, settings: Settings) -> ContactResult:
        """Run steps 2-5 for a non-preflight request and capture the outcome."""
        try:
            api_key = self.fetch_api_key(settings)
            body = parse_body(body_from_raw(request.raw_body, request.is_base64_encoded))
            submission = validate_body(body)
            message_id = self.dispatch(api_key, submission, settings)
        except ContactError as exc:
            logger.error("Contact request failed (%s): %s", exc.kind.value, exc)
            return ContactResult(error=exc)
        except Exception as exc:
            logger.exception("Unexpected error handling contact request")
            return ContactResult(error=exc)

        return ContactResult(message_id=message_id)

    def fetch_api_key(self, settings: Settings) -> str:
        if not settings.secret_name:
            logger.error("%s is not set in the environment variables", SECRET_NAME_ENV)
            raise ConfigError(f"{SECRET_NAME_ENV} is not set in the environment variables")
        return self.secret_store.get_secret_string(settings.secret_name)

    def dispatch(self, api_key: str, submission: ContactSubmission, settings: Settings) -> Optional[str]:
        logger.info("Sending email with data: %s", submission.model_dump_json())
        email = build_contact_email(submission, settings)
        message_id = self.mailer_factory(api_key).send(email)
        logger.info("Email sent successfully: %s", message_id)
        return message_id


# ---------------------------------------------------------------------------
# Lambda entry point
# ---------------------------------------------------------------------------

_default_handler: Optional[ContactHandler] = None


def get_default_handler() -> ContactHandler:
    """Return the process-wide handler, creating its SecretStore on first call."""
    global _default_handler
    if _default_handler is None:
        _default_handler = ContactHandler(SecretStore())
    return _default_handler


def lambda_handler(event: Any, context: Any = None) -> dict:
    return get_default_handler()(event, context)
