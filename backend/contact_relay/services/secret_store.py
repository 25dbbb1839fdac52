"""
AWS Secrets Manager access for the contact relay.

A SecretStore wraps a single boto3 Secrets Manager client. The Lambda entry
point creates one store per container and reuses it across invocations so
the underlying HTTP connection pool survives warm starts; the secret value
itself is fetched fresh on every call.
"""

import logging
import os
from typing import Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from contact_relay.errors import FetchError

logger = logging.getLogger(__name__)


class SecretStore:
    """Fetch string secrets by name from AWS Secrets Manager."""

    def __init__(self, client=None, region_name: Optional[str] = None):
        self._client = client
        self._region_name = region_name or os.getenv("AWS_REGION") or None

    @property
    def client(self):
        # Created on first use so a missing region surfaces as a FetchError
        # inside the handler instead of at import time.
        if self._client is None:
            self._client = boto3.client("secretsmanager", region_name=self._region_name)
        return self._client

    def get_secret_string(self, secret_id: str) -> str:
        """
        Return the SecretString stored under secret_id.

        Raises:
            FetchError: the store is unreachable, access is denied, the secret
                        does not exist, or it holds only binary data.
        """
        try:
            response = self.client.get_secret_value(SecretId=secret_id)
        except ClientError as exc:
            code = exc.response.get("Error", {}).get("Code", "Unknown")
            logger.error("Error retrieving secret %r (%s): %s", secret_id, code, exc)
            raise FetchError(f"Failed to retrieve secret {secret_id!r}: {exc}") from exc
        except BotoCoreError as exc:
            logger.error("Error retrieving secret %r: %s", secret_id, exc)
            raise FetchError(f"Failed to retrieve secret {secret_id!r}: {exc}") from exc

        secret = response.get("SecretString")
        if not secret:
            raise FetchError(f"Secret {secret_id!r} has no string value")
        return secret
