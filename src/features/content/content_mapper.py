from typing import Any

from features.content.content_models import ContentBundle, ContentProduct


def product(raw: dict[str, Any] | None) -> ContentProduct | None:
    if not raw:
        return None

    subcategory = raw.get("subcategory") or {}
    creator = raw.get("creator") or {}
    return ContentProduct(
        id = raw["_id"],
        title = raw.get("title") or "",
        custom_price = raw.get("customPrice"),
        file_key = raw.get("productFileKey"),
        subcategory_default_price = subcategory.get("defaultPrice") or 0,
        creator_id = creator.get("_id"),
    )


def bundle(raw: dict[str, Any] | None) -> ContentBundle | None:
    if not raw:
        return None

    # dangling references resolve to null, those are dropped
    products = [product(raw_product) for raw_product in (raw.get("products") or []) if raw_product]
    return ContentBundle(
        id = raw["_id"],
        title = raw.get("title") or "",
        price = raw.get("price") or 0,
        products = [it for it in products if it is not None],
    )
