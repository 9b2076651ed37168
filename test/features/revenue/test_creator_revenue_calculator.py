import random
import unittest

from features.revenue.creator_revenue_calculator import (
    CREATOR_REVENUE_SHARE,
    BundleProduct,
    CreatorRevenue,
    OrderRevenueResult,
    RevenueItem,
    calculate_bundle_creator_revenue,
    calculate_order_creator_revenue,
    calculate_product_creator_revenue,
    validate_creator_payouts,
)


class CreatorRevenueCalculatorTest(unittest.TestCase):

    def test_share_is_half(self):
        self.assertEqual(float(CREATOR_REVENUE_SHARE), 0.5)

    def test_product_revenue_with_creator(self):
        self.assertEqual(calculate_product_creator_revenue(10000, "creatorA"), 5000)

    def test_product_revenue_floors_odd_prices(self):
        self.assertEqual(calculate_product_creator_revenue(999, "creatorA"), 499)
        self.assertEqual(calculate_product_creator_revenue(1, "creatorA"), 0)

    def test_product_revenue_without_creator(self):
        self.assertEqual(calculate_product_creator_revenue(10000, None), 0)
        self.assertEqual(calculate_product_creator_revenue(10000, ""), 0)

    def test_bundle_revenue_proportional_split(self):
        revenues = calculate_bundle_creator_revenue(
            9000,
            [
                BundleProduct(source_id = "p1", creator_id = "X", price = 3000),
                BundleProduct(source_id = "p2", creator_id = "Y", price = 7000),
            ],
        )

        by_creator = {revenue.creator_id: revenue.amount for revenue in revenues}
        self.assertEqual(by_creator, {"X": 1350, "Y": 3150})
        self.assertEqual(sum(by_creator.values()), 4500)

    def test_bundle_revenue_empty_products(self):
        self.assertEqual(calculate_bundle_creator_revenue(9000, []), [])
        self.assertEqual(calculate_bundle_creator_revenue(9000, None), [])

    def test_bundle_revenue_all_zero_prices(self):
        revenues = calculate_bundle_creator_revenue(
            9000,
            [
                BundleProduct(source_id = "p1", creator_id = "X", price = 0),
                BundleProduct(source_id = "p2", creator_id = "Y", price = 0),
            ],
        )
        self.assertEqual(revenues, [])

    def test_bundle_product_without_creator_still_weighs_in(self):
        revenues = calculate_bundle_creator_revenue(
            10000,
            [
                BundleProduct(source_id = "p1", creator_id = "X", price = 5000),
                BundleProduct(source_id = "p2", creator_id = None, price = 5000),
            ],
        )

        self.assertEqual(revenues, [CreatorRevenue(creator_id = "X", amount = 2500)])

    def test_bundle_floors_per_product_not_on_aggregate(self):
        # each third floors to 1666, the aggregate would have been 4999
        revenues = calculate_bundle_creator_revenue(
            9999,
            [
                BundleProduct(source_id = "p1", creator_id = "X", price = 100),
                BundleProduct(source_id = "p2", creator_id = "X", price = 100),
                BundleProduct(source_id = "p3", creator_id = "X", price = 100),
            ],
        )

        self.assertEqual(revenues, [CreatorRevenue(creator_id = "X", amount = 4998)])

    def test_order_revenue_mixed_items(self):
        result = calculate_order_creator_revenue(
            [
                RevenueItem(type = "product", price = 5000, creator_id = None),
                RevenueItem(
                    type = "bundle",
                    price = 9000,
                    bundle_products = [
                        BundleProduct(source_id = "p1", creator_id = "X", price = 3000),
                        BundleProduct(source_id = "p2", creator_id = "Y", price = 7000),
                    ],
                ),
            ],
        )

        self.assertEqual(result.order_total, 14000)
        self.assertEqual(result.total_creator_payout, 4500)
        self.assertEqual(result.platform_revenue, 9500)
        self.assertTrue(validate_creator_payouts(result))

    def test_order_revenue_aggregates_same_creator(self):
        standalone = RevenueItem(type = "product", price = 2001, creator_id = "X")
        bundle = RevenueItem(
            type = "bundle",
            price = 6000,
            bundle_products = [
                BundleProduct(source_id = "p1", creator_id = "X", price = 1000),
                BundleProduct(source_id = "p2", creator_id = "Y", price = 2000),
            ],
        )

        result = calculate_order_creator_revenue([standalone, bundle])

        x_revenues = [revenue for revenue in result.creator_revenues if revenue.creator_id == "X"]
        self.assertEqual(len(x_revenues), 1)
        expected_from_bundle = next(
            revenue.amount
            for revenue in calculate_bundle_creator_revenue(bundle.price, bundle.bundle_products)
            if revenue.creator_id == "X"
        )
        self.assertEqual(x_revenues[0].amount, calculate_product_creator_revenue(2001, "X") + expected_from_bundle)

    def test_order_revenue_empty(self):
        result = calculate_order_creator_revenue([])

        self.assertEqual(result.order_total, 0)
        self.assertEqual(result.total_creator_payout, 0)
        self.assertEqual(result.creator_revenues, [])
        self.assertEqual(result.platform_revenue, 0)

    def test_validate_creator_payouts_rejects_overpayment(self):
        result = OrderRevenueResult(
            order_total = 1001,
            total_creator_payout = 501,
            creator_revenues = [CreatorRevenue(creator_id = "X", amount = 501)],
            platform_revenue = 500,
        )
        self.assertFalse(validate_creator_payouts(result))

    def test_validate_creator_payouts_accepts_exact_cap(self):
        result = OrderRevenueResult(
            order_total = 1001,
            total_creator_payout = 500,
            creator_revenues = [CreatorRevenue(creator_id = "X", amount = 500)],
            platform_revenue = 501,
        )
        self.assertTrue(validate_creator_payouts(result))

    def test_cap_and_conservation_hold_for_random_orders(self):
        generator = random.Random(20240611)
        creators = ["A", "B", "C", None]
        for _ in range(500):
            items = []
            for _ in range(generator.randint(0, 5)):
                if generator.random() < 0.5:
                    items.append(
                        RevenueItem(
                            type = "product",
                            price = generator.randint(0, 50000),
                            creator_id = generator.choice(creators),
                        ),
                    )
                else:
                    items.append(
                        RevenueItem(
                            type = "bundle",
                            price = generator.randint(0, 50000),
                            bundle_products = [
                                BundleProduct(
                                    source_id = f"p{index}",
                                    creator_id = generator.choice(creators),
                                    price = generator.randint(0, 20000),
                                )
                                for index in range(generator.randint(0, 6))
                            ],
                        ),
                    )

            result = calculate_order_creator_revenue(items)

            self.assertLessEqual(result.total_creator_payout, result.order_total // 2)
            self.assertTrue(validate_creator_payouts(result))
            self.assertEqual(result.platform_revenue + result.total_creator_payout, result.order_total)
            self.assertNotIn(None, [revenue.creator_id for revenue in result.creator_revenues])
            creator_ids = [revenue.creator_id for revenue in result.creator_revenues]
            self.assertEqual(len(creator_ids), len(set(creator_ids)))
