from fastapi import HTTPException, Security
from fastapi.security import APIKeyHeader
from starlette.status import HTTP_403_FORBIDDEN

from util import log
from util.config import config

api_key_header = APIKeyHeader(name = "X-API-Key", auto_error = True)
webhook_secret_header = APIKeyHeader(name = "X-Webhook-Secret", auto_error = False)


def verify_api_key(api_key: str = Security(api_key_header)) -> str:
    if api_key != config.api_key.get_secret_value():
        raise HTTPException(status_code = HTTP_403_FORBIDDEN, detail = "Could not validate the API key")
    return api_key


def verify_webhook_secret(webhook_secret: str | None = Security(webhook_secret_header)) -> str | None:
    if config.webhook_must_auth and webhook_secret != config.webhook_secret.get_secret_value():
        log.w("Rejected a payment webhook with an invalid secret")
        raise HTTPException(status_code = HTTP_403_FORBIDDEN, detail = "Could not validate the webhook secret")
    return webhook_secret
