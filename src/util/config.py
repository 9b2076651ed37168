# ruff: noqa: E501

import os
from typing import Callable

from pydantic import SecretStr

from util.singleton import Singleton


class Config(metaclass = Singleton):

    DEV_API_KEY = "0000-1234-5678-0000"  # needed for local dev mode

    log_level: str
    web_timeout_s: int
    app_url: str
    store_name: str
    email_from: str
    email_api_base_url: str
    content_project_id: str
    content_dataset: str
    content_api_version: str
    max_downloads_per_item: int
    download_link_expiry_days: int
    webhook_must_auth: bool
    version: str

    db_url: SecretStr
    api_key: SecretStr
    webhook_secret: SecretStr
    email_api_key: SecretStr
    content_api_token: SecretStr

    def all_secrets(self) -> list[SecretStr]:
        return [
            self.db_url,
            self.api_key,
            self.webhook_secret,
            self.email_api_key,
            self.content_api_token,
        ]

    def __init__(
        self,
        def_log_level: str = "INFO",
        def_web_timeout_s: int = 10,
        def_app_url: str = "http://localhost:3000",
        def_store_name: str = "Digital Store",
        def_email_from: str = "noreply@notifications.localhost",
        def_email_api_base_url: str = "https://api.resend.com",
        def_content_project_id: str = "invalid",
        def_content_dataset: str = "production",
        def_content_api_version: str = "2024-01-01",
        def_max_downloads_per_item: int = 5,
        def_download_link_expiry_days: int = 30,
        def_webhook_must_auth: bool = False,
        def_version: str = "dev",

        def_db_user: SecretStr = SecretStr("root"),
        def_db_pass: SecretStr = SecretStr("root"),
        def_db_host: SecretStr = SecretStr("localhost"),
        def_db_name: SecretStr = SecretStr("storefront"),
        def_api_key: SecretStr = SecretStr(DEV_API_KEY),
        def_webhook_secret: SecretStr = SecretStr("it_is_really_the_processor"),
        def_email_api_key: SecretStr = SecretStr("invalid"),
        def_content_api_token: SecretStr = SecretStr("invalid"),
    ):
        # @formatter:off
        self.log_level = self.__env("LOG_LEVEL", lambda: def_log_level).lower()
        self.web_timeout_s = int(self.__env("WEB_TIMEOUT_S", lambda: str(def_web_timeout_s)))
        self.app_url = self.__env("APP_URL", lambda: def_app_url).rstrip("/")
        self.store_name = self.__env("STORE_NAME", lambda: def_store_name)
        self.email_from = self.__env("EMAIL_FROM", lambda: def_email_from)
        self.email_api_base_url = self.__env("EMAIL_API_BASE_URL", lambda: def_email_api_base_url).rstrip("/")
        self.content_project_id = self.__env("CONTENT_PROJECT_ID", lambda: def_content_project_id)
        self.content_dataset = self.__env("CONTENT_DATASET", lambda: def_content_dataset)
        self.content_api_version = self.__env("CONTENT_API_VERSION", lambda: def_content_api_version)
        self.max_downloads_per_item = int(self.__env("MAX_DOWNLOADS_PER_ITEM", lambda: str(def_max_downloads_per_item)))
        self.download_link_expiry_days = int(self.__env("DOWNLOAD_LINK_EXPIRY_DAYS", lambda: str(def_download_link_expiry_days)))
        self.webhook_must_auth = self.__env("WEBHOOK_AUTH_ON", lambda: str(def_webhook_must_auth)).lower() == "true"
        self.version = self.__env("VERSION", lambda: def_version)

        self.__set_up_db(def_db_user, def_db_pass, def_db_host, def_db_name)
        self.api_key = self.__senv("API_KEY", lambda: def_api_key)
        self.webhook_secret = self.__senv("WEBHOOK_SECRET", lambda: def_webhook_secret)
        self.email_api_key = self.__senv("EMAIL_API_KEY", lambda: def_email_api_key)
        self.content_api_token = self.__senv("CONTENT_API_TOKEN", lambda: def_content_api_token)
        # @formatter:on

    def __set_up_db(self, def_db_user: SecretStr, def_db_pass: SecretStr, def_db_host: SecretStr, def_db_name: SecretStr):
        db_user = self.__senv("POSTGRES_USER", lambda: def_db_user).get_secret_value()
        db_pass = self.__senv("POSTGRES_PASS", lambda: def_db_pass).get_secret_value()
        db_host = self.__senv("POSTGRES_HOST", lambda: def_db_host).get_secret_value()
        db_name = self.__senv("POSTGRES_DB", lambda: def_db_name).get_secret_value()
        db_port = 5432  # standard for postgres
        self.db_url = SecretStr(f"postgresql://{db_user}:{db_pass}@{db_host}:{db_port}/{db_name}")

    @staticmethod
    def __env(name: str, default: Callable[[], str]) -> str:
        env_value = os.environ.get(name, "").strip()
        return env_value if env_value else default()

    @staticmethod
    def __senv(name: str, default: Callable[[], SecretStr]) -> SecretStr:
        env_value = os.environ.get(name, "").strip()
        return SecretStr(env_value) if env_value else default()


config = Config()
