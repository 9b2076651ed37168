from dataclasses import dataclass

CURRENCY_SYMBOLS = {
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
    "JPY": "¥",
}
ZERO_DECIMAL_CURRENCIES = {"JPY", "KRW", "VND"}


@dataclass(kw_only = True)
class PriceResult:
    price: int
    compare_at_price: int | None = None
    is_on_sale: bool = False
    savings: int | None = None
    savings_percentage: int | None = None


@dataclass(kw_only = True)
class ProductPriceInput:
    custom_price: int | None = None
    compare_at_price: int | None = None


@dataclass(kw_only = True)
class SubcategoryPriceInput:
    default_price: int
    compare_at_price: int | None = None


def resolve_price(custom_price: int | None, default_price: int) -> int:
    """
    Resolves the effective price of a product in minor currency units.

    The product's own custom price wins whenever it is set (zero included);
    otherwise the product inherits the default price of its subcategory.
    """
    return custom_price if custom_price is not None else default_price


def resolve_product_price(product: ProductPriceInput, subcategory: SubcategoryPriceInput) -> PriceResult:
    price = resolve_price(product.custom_price, subcategory.default_price)
    compare_at_price = (
        product.compare_at_price if product.compare_at_price is not None else subcategory.compare_at_price
    )
    return __with_sale_info(price, compare_at_price)


def resolve_bundle_price(price: int, compare_at_price: int | None = None) -> PriceResult:
    # bundles don't inherit prices, they carry their own
    return __with_sale_info(price, compare_at_price)


def format_price(cents: int, currency: str = "USD") -> str:
    code = currency.upper()
    symbol = CURRENCY_SYMBOLS.get(code)
    if code in ZERO_DECIMAL_CURRENCIES:
        amount = f"{cents:,}"
    else:
        sign = "-" if cents < 0 else ""
        major, minor = divmod(abs(cents), 100)
        amount = f"{sign}{major:,}.{minor:02d}"
    return f"{symbol}{amount}" if symbol else f"{amount} {code}"


def __with_sale_info(price: int, compare_at_price: int | None) -> PriceResult:
    is_on_sale = compare_at_price is not None and compare_at_price > price
    if not is_on_sale:
        return PriceResult(price = price, compare_at_price = compare_at_price)

    savings = compare_at_price - price
    # half-up rounding, so 12.5% shows up as 13%
    savings_percentage = (savings * 200 + compare_at_price) // (2 * compare_at_price) if compare_at_price > 0 else None
    return PriceResult(
        price = price,
        compare_at_price = compare_at_price,
        is_on_sale = True,
        savings = savings,
        savings_percentage = savings_percentage,
    )


def split_proportionally(total: int, weights: list[int]) -> list[int]:
    """
    Distributes a total (e.g. a bundle's sale price) across parts weighted by their own prices.

    Every share is floored, so the shares never add up to more than the total. When all weights are zero,
    the total is divided equally (again floored).
    """
    if not weights:
        return []
    total_weight = sum(weights)
    if total_weight <= 0:
        return [total // len(weights)] * len(weights)
    return [(total * weight) // total_weight for weight in weights]
