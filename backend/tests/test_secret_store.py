"""
Unit tests for the Secrets Manager wrapper.
Tests mock the boto3 client. No real AWS calls.
"""

import pytest
from unittest.mock import MagicMock, patch
from botocore.exceptions import ClientError, EndpointConnectionError

from contact_relay.errors import ErrorKind, FetchError
from contact_relay.services.secret_store import SecretStore


def _client_error(code: str, message: str = "error") -> ClientError:
    return ClientError({"Error": {"Code": code, "Message": message}}, "GetSecretValue")


class TestGetSecretString:
    """Fetching and error-wrapping secret values."""

    def test_returns_secret_string(self):
        client = MagicMock()
        client.get_secret_value.return_value = {"Name": "resend-api-key", "SecretString": "re_123"}
        store = SecretStore(client=client)

        assert store.get_secret_string("resend-api-key") == "re_123"
        client.get_secret_value.assert_called_once_with(SecretId="resend-api-key")

    def test_fetches_fresh_value_every_call(self):
        client = MagicMock()
        client.get_secret_value.side_effect = [
            {"SecretString": "re_old"},
            {"SecretString": "re_rotated"},
        ]
        store = SecretStore(client=client)

        assert store.get_secret_string("resend-api-key") == "re_old"
        assert store.get_secret_string("resend-api-key") == "re_rotated"

    @pytest.mark.parametrize(
        "code",
        ["ResourceNotFoundException", "AccessDeniedException", "DecryptionFailure"],
    )
    def test_client_errors_become_fetch_errors(self, code):
        client = MagicMock()
        client.get_secret_value.side_effect = _client_error(code)
        store = SecretStore(client=client)

        with pytest.raises(FetchError) as exc_info:
            store.get_secret_string("resend-api-key")

        assert exc_info.value.kind is ErrorKind.FETCH
        assert code in str(exc_info.value)
        assert isinstance(exc_info.value.__cause__, ClientError)

    def test_connection_errors_become_fetch_errors(self):
        client = MagicMock()
        client.get_secret_value.side_effect = EndpointConnectionError(
            endpoint_url="https://secretsmanager.us-east-1.amazonaws.com"
        )
        store = SecretStore(client=client)

        with pytest.raises(FetchError) as exc_info:
            store.get_secret_string("resend-api-key")

        assert "Could not connect" in str(exc_info.value)

    def test_binary_only_secret_is_rejected(self):
        client = MagicMock()
        client.get_secret_value.return_value = {"SecretBinary": b"\x00\x01"}
        store = SecretStore(client=client)

        with pytest.raises(FetchError) as exc_info:
            store.get_secret_string("resend-api-key")

        assert "has no string value" in str(exc_info.value)


class TestClientCreation:
    """The boto3 client is created lazily, once."""

    def test_client_not_created_until_first_fetch(self):
        with patch("contact_relay.services.secret_store.boto3.client") as mock_client:
            SecretStore(region_name="eu-west-1")

        mock_client.assert_not_called()

    def test_client_created_once_with_region(self):
        with patch("contact_relay.services.secret_store.boto3.client") as mock_client:
            mock_client.return_value.get_secret_value.return_value = {"SecretString": "re_123"}
            store = SecretStore(region_name="eu-west-1")

            store.get_secret_string("a")
            store.get_secret_string("b")

        mock_client.assert_called_once_with("secretsmanager", region_name="eu-west-1")

    def test_region_defaults_to_aws_region_env(self, monkeypatch):
        monkeypatch.setenv("AWS_REGION", "us-west-2")

        with patch("contact_relay.services.secret_store.boto3.client") as mock_client:
            mock_client.return_value.get_secret_value.return_value = {"SecretString": "re_123"}
            SecretStore().get_secret_string("a")

        mock_client.assert_called_once_with("secretsmanager", region_name="us-west-2")
