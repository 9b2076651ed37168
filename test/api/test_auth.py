import unittest
from unittest.mock import MagicMock, patch

from fastapi import HTTPException
from pydantic import SecretStr
from starlette.status import HTTP_403_FORBIDDEN

from api.auth import verify_api_key, verify_webhook_secret


class AuthTest(unittest.TestCase):

    def test_missing_api_key(self):
        with self.assertRaises(HTTPException) as context:
            # server will break the rule too, so:
            # noinspection PyTypeChecker
            verify_api_key(None)
        self.assertEqual(context.exception.status_code, HTTP_403_FORBIDDEN)
        self.assertEqual(context.exception.detail, "Could not validate the API key")

    def test_invalid_api_key(self):
        with self.assertRaises(HTTPException) as context:
            verify_api_key("NOTA-VALI-DKEY")
        self.assertEqual(context.exception.status_code, HTTP_403_FORBIDDEN)
        self.assertEqual(context.exception.detail, "Could not validate the API key")

    @patch("api.auth.config")
    def test_valid_api_key(self, mock_config: MagicMock):
        mock_config.api_key = SecretStr("VALI-DKEY")
        api_key = verify_api_key("VALI-DKEY")
        self.assertEqual(api_key, "VALI-DKEY")

    @patch("api.auth.config")
    def test_missing_webhook_secret(self, mock_config: MagicMock):
        mock_config.webhook_must_auth = True
        mock_config.webhook_secret = SecretStr("processor-secret")
        with self.assertRaises(HTTPException) as context:
            verify_webhook_secret(None)
        self.assertEqual(context.exception.status_code, HTTP_403_FORBIDDEN)
        self.assertEqual(context.exception.detail, "Could not validate the webhook secret")

    @patch("api.auth.config")
    def test_invalid_webhook_secret(self, mock_config: MagicMock):
        mock_config.webhook_must_auth = True
        mock_config.webhook_secret = SecretStr("processor-secret")
        with self.assertRaises(HTTPException) as context:
            verify_webhook_secret("someone-else")
        self.assertEqual(context.exception.status_code, HTTP_403_FORBIDDEN)

    @patch("api.auth.config")
    def test_valid_webhook_secret(self, mock_config: MagicMock):
        mock_config.webhook_must_auth = True
        mock_config.webhook_secret = SecretStr("processor-secret")
        self.assertEqual(verify_webhook_secret("processor-secret"), "processor-secret")

    @patch("api.auth.config")
    def test_webhook_secret_not_required(self, mock_config: MagicMock):
        mock_config.webhook_must_auth = False
        mock_config.webhook_secret = SecretStr("processor-secret")
        self.assertIsNone(verify_webhook_secret(None))
