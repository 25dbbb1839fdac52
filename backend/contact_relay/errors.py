"""
Error taxonomy for the contact request handler.

Every failure the handler can hit between the preflight check and the
response is raised as one of the ContactError subclasses below. Each carries
an ErrorKind so the boundary can decide the HTTP status from the kind alone
instead of from the exception class hierarchy.

  ConfigError      — required configuration (the secret name) is missing
  FetchError       — the secret store is unreachable, denies access, or the
                     secret does not exist
  ParseError       — the request body is not JSON text or a JSON object
  ValidationError  — one or more of name / email / message is missing
  DispatchError    — the email API rejected the message or was unreachable
"""

from enum import Enum


class ErrorKind(str, Enum):
    CONFIG = "config"
    FETCH = "fetch"
    PARSE = "parse"
    VALIDATION = "validation"
    DISPATCH = "dispatch"


class ContactError(Exception):
    """Base class for every failure the handler converts into a response."""

    kind: ErrorKind

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ConfigError(ContactError):
    kind = ErrorKind.CONFIG


class FetchError(ContactError):
    kind = ErrorKind.FETCH


class ParseError(ContactError):
    kind = ErrorKind.PARSE


class ValidationError(ContactError):
    kind = ErrorKind.VALIDATION


class DispatchError(ContactError):
    kind = ErrorKind.DISPATCH


# Kinds caused by the caller rather than by the deployment or a collaborator.
CLIENT_ERROR_KINDS = frozenset({ErrorKind.PARSE, ErrorKind.VALIDATION})


def status_for_kind(kind: ErrorKind | None, client_errors_as_400: bool = False) -> int:
    """
    Map an error kind to the HTTP status returned to the caller.

    Every kind maps to 500 unless client_errors_as_400 is set, in which case
    PARSE and VALIDATION map to 400. A kind of None (an exception that is not
    a ContactError) is always 500.
    """
    if client_errors_as_400 and kind in CLIENT_ERROR_KINDS:
        return 400
    return 500
