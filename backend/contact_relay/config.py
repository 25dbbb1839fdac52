"""
Runtime configuration for the contact relay.

Values come from environment variables. A local .env file is loaded once at
import time so the dev server and scripts pick up the same settings the
deployed function receives from its environment.

Settings are re-read on every invocation via load_settings() so a warm
Lambda container never serves a stale copy after a configuration change,
and so tests can monkeypatch the environment freely.
"""

import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

load_dotenv()

SECRET_NAME_ENV = "RESEND_API_KEY_SECRET_NAME"

DEFAULT_FROM_EMAIL = "portfoliocontact@resend.dev"
DEFAULT_TO_EMAIL = "fialloschris1@gmail.com"
DEFAULT_SUBJECT = "New Contact Form Submission"

_TRUTHY = {"1", "true", "yes", "on"}


def _env_flag(name: str) -> bool:
    return os.getenv(name, "").strip().lower() in _TRUTHY


def _env_list(name: str) -> tuple[str, ...]:
    raw = os.getenv(name, "").strip()
    if not raw:
        return ()
    return tuple(item.strip() for item in raw.split(",") if item.strip())


@dataclass(frozen=True)
class Settings:
    """Snapshot of the environment taken at the start of one invocation."""

    secret_name: str | None
    from_email: str = DEFAULT_FROM_EMAIL
    to_email: str = DEFAULT_TO_EMAIL
    subject: str = DEFAULT_SUBJECT
    allowed_origins: tuple[str, ...] = field(default_factory=tuple)
    client_errors_as_400: bool = False
    escape_html: bool = False


def load_settings() -> Settings:
    """
    Build Settings from the current environment.

    RESEND_API_KEY_SECRET_NAME is returned as None when unset or blank; the
    handler turns that into a ConfigError at credential-retrieval time rather
    than failing here, so preflight requests still succeed on a
    misconfigured deployment.
    """
    secret_name = os.getenv(SECRET_NAME_ENV, "").strip() or None
    return Settings(
        secret_name=secret_name,
        from_email=os.getenv("CONTACT_FROM_EMAIL") or DEFAULT_FROM_EMAIL,
        to_email=os.getenv("CONTACT_TO_EMAIL") or DEFAULT_TO_EMAIL,
        subject=os.getenv("CONTACT_SUBJECT") or DEFAULT_SUBJECT,
        allowed_origins=_env_list("CONTACT_ALLOWED_ORIGINS"),
        client_errors_as_400=_env_flag("CONTACT_CLIENT_ERRORS_AS_400"),
        escape_html=_env_flag("CONTACT_ESCAPE_HTML"),
    )
