import json
from typing import Any

import requests
from requests import RequestException

from features.content import content_mapper
from features.content.content_models import ContentBundle, ContentProduct
from util import log
from util.config import config
from util.error_codes import CONTENT_STORE_FAILED, CONTENT_STORE_NOT_CONFIGURED
from util.errors import ConfigurationError, ExternalServiceError

PRODUCT_FOR_ORDER_QUERY = """
*[_type == "product" && _id == $id][0] {
  _id,
  title,
  customPrice,
  productFileKey,
  "subcategory": subcategory->{ defaultPrice },
  "creator": creator->{ _id }
}
"""

BUNDLE_FOR_ORDER_QUERY = """
*[_type == "bundle" && _id == $id][0] {
  _id,
  title,
  price,
  "products": products[]->{
    _id,
    title,
    customPrice,
    productFileKey,
    "subcategory": subcategory->{ defaultPrice },
    "creator": creator->{ _id }
  }
}
"""


class ContentStore:
    """Read-only access to the catalog kept in the headless CMS, via its GROQ query API."""

    __query_url: str

    def __init__(self):
        self.__query_url = (
            f"https://{config.content_project_id}.api.sanity.io"
            f"/v{config.content_api_version}/data/query/{config.content_dataset}"
        )

    def fetch_product(self, product_id: str) -> ContentProduct | None:
        log.t(f"Fetching product '{product_id}' from the content store")
        return content_mapper.product(self.__query(PRODUCT_FOR_ORDER_QUERY, {"id": product_id}))

    def fetch_bundle(self, bundle_id: str) -> ContentBundle | None:
        log.t(f"Fetching bundle '{bundle_id}' from the content store")
        return content_mapper.bundle(self.__query(BUNDLE_FOR_ORDER_QUERY, {"id": bundle_id}))

    def __query(self, query: str, params: dict[str, Any]) -> Any:
        if config.content_project_id == "invalid":
            raise ConfigurationError("Content store project is not configured", CONTENT_STORE_NOT_CONFIGURED)

        # GROQ parameters travel as JSON-encoded '$name' query params
        request_params = {"query": query}
        for name, value in params.items():
            request_params[f"${name}"] = json.dumps(value)

        headers = {}
        token = config.content_api_token.get_secret_value()
        if token and token != "invalid":
            headers["Authorization"] = f"Bearer {token}"

        try:
            response = requests.get(
                self.__query_url,
                params = request_params,
                headers = headers,
                timeout = config.web_timeout_s,
            )
            response.raise_for_status()
            return response.json().get("result")
        except RequestException as e:
            raise ExternalServiceError("Content store query failed", CONTENT_STORE_FAILED, context = params) from e
