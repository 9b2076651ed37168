import inspect
import unittest

from util import error_codes

CATEGORY_RANGES = {
    "validation": (1000, 1999),
    "not_found": (2000, 2999),
    "authorization": (3000, 3999),
    "authentication": (4000, 4999),
    "external_service": (5000, 5999),
    "configuration": (7000, 7999),
    "internal": (8000, 8999),
}


def _error_code_constants() -> dict[str, int]:
    return {
        name: value
        for name, value in inspect.getmembers(error_codes)
        if not name.startswith("_") and isinstance(value, int)
    }


class ErrorCodesTest(unittest.TestCase):

    def test_no_duplicate_error_codes(self):
        seen: dict[int, str] = {}
        duplicates: list[str] = []
        for name, value in _error_code_constants().items():
            if value in seen:
                duplicates.append(f"{name}={value} duplicates {seen[value]}")
            else:
                seen[value] = name
        self.assertEqual(duplicates, [], f"Duplicate error codes found: {duplicates}")

    def test_error_codes_in_valid_category_ranges(self):
        for name, value in _error_code_constants().items():
            in_range = any(low <= value <= high for low, high in CATEGORY_RANGES.values())
            self.assertTrue(in_range, f"{name}={value} is not in any valid category range")

    def test_order_codes_are_categorized(self):
        expectations = {
            error_codes.INVALID_ITEM_TYPE: "validation",
            error_codes.ORDER_NOT_FOUND: "not_found",
            error_codes.EMAIL_DELIVERY_FAILED: "external_service",
            error_codes.CONTENT_STORE_NOT_CONFIGURED: "configuration",
            error_codes.ORDER_PROCESSING_FAILED: "internal",
        }
        for value, category in expectations.items():
            low, high = CATEGORY_RANGES[category]
            self.assertTrue(low <= value <= high, f"{value} should be a {category} code")
