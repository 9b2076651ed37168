import requests
from requests import RequestException

from util import log
from util.config import config
from util.error_codes import EMAIL_DELIVERY_FAILED, EMAIL_NOT_CONFIGURED
from util.errors import ConfigurationError, ExternalServiceError


class EmailSender:
    """Sends transactional emails through the provider's REST API (https://resend.com/docs/api-reference)."""

    __emails_url: str
    __sender: str

    def __init__(self):
        self.__emails_url = f"{config.email_api_base_url}/emails"
        self.__sender = f"{config.store_name} <{config.email_from}>"

    def send_email(self, to: str | list[str], subject: str, html: str, reply_to: str | None = None) -> dict:
        api_key = config.email_api_key.get_secret_value()
        if not api_key or api_key == "invalid":
            raise ConfigurationError("Email API key is not configured", EMAIL_NOT_CONFIGURED)

        recipients = to if isinstance(to, list) else [to]
        log.d(f"Sending email '{subject}'", recipients = recipients)
        payload = {
            "from": self.__sender,
            "to": recipients,
            "subject": subject,
            "html": html,
        }
        if reply_to:
            payload["reply_to"] = reply_to

        try:
            response = requests.post(
                self.__emails_url,
                json = payload,
                headers = {"Authorization": f"Bearer {api_key}"},
                timeout = config.web_timeout_s,
            )
            response.raise_for_status()
            return response.json()
        except RequestException as e:
            raise ExternalServiceError(f"Failed to send email '{subject}'", EMAIL_DELIVERY_FAILED) from e
