from dataclasses import dataclass, field


@dataclass(kw_only = True)
class ContentProduct:
    id: str
    title: str
    custom_price: int | None = None
    file_key: str | None = None
    subcategory_default_price: int = 0
    creator_id: str | None = None


@dataclass(kw_only = True)
class ContentBundle:
    id: str
    title: str
    price: int
    products: list[ContentProduct] = field(default_factory = list)
