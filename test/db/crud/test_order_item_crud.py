import unittest

from db.sql_util import SQLUtil

from db.model.order_item import OrderItemDB
from db.schema.order import OrderSave
from db.schema.order_item import OrderItem, OrderItemSave


class OrderItemCRUDTest(unittest.TestCase):
    sql: SQLUtil

    def setUp(self):
        self.sql = SQLUtil()

    def tearDown(self):
        self.sql.end_session()

    def _create_order(self, external_order_id: str, source_ids: list[str]) -> int:
        order = self.sql.order_crud().create_with_items(
            OrderSave(
                external_order_id = external_order_id,
                customer_email = "buyer@example.com",
                total_amount = 1000 * len(source_ids),
                currency = "usd",
            ),
            [
                OrderItemSave(
                    item_type = OrderItemDB.ItemType.bundle,
                    source_id = source_id,
                    title = f"Product {source_id} (from Bundle)",
                    price = 1000,
                    max_downloads = 5,
                )
                for source_id in source_ids
            ],
        )
        return order.id

    def test_get_all_by_order_keeps_insertion_order(self):
        order_id = self._create_order("ord_1", ["c", "a", "b"])

        items = self.sql.order_item_crud().get_all_by_order(order_id)

        self.assertEqual([item.source_id for item in items], ["c", "a", "b"])

    def test_get_all_by_order_separates_orders(self):
        first_order_id = self._create_order("ord_1", ["a", "b"])
        second_order_id = self._create_order("ord_2", ["c"])

        self.assertEqual(len(self.sql.order_item_crud().get_all_by_order(first_order_id)), 2)
        self.assertEqual(len(self.sql.order_item_crud().get_all_by_order(second_order_id)), 1)
        self.assertEqual(self.sql.order_item_crud().get_all_by_order(999), [])

    def test_get(self):
        order_id = self._create_order("ord_1", ["a"])
        stored = self.sql.order_item_crud().get_all_by_order(order_id)[0]

        fetched = self.sql.order_item_crud().get(stored.id)

        item = OrderItem.model_validate(fetched)
        self.assertEqual(item.order_id, order_id)
        self.assertEqual(item.item_type, OrderItemDB.ItemType.bundle)
        self.assertEqual(item.max_downloads, 5)
        self.assertEqual(item.downloads_used, 0)
        self.assertIsNone(item.creator_id)
        self.assertIsNone(self.sql.order_item_crud().get(stored.id + 100))
