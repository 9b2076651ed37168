import unittest
from unittest.mock import patch

from util import log


class LogTest(unittest.TestCase):

    def setUp(self):
        self.config_patcher = patch("util.log.config")
        self.mock_config = self.config_patcher.start()
        self.mock_config.log_level = "info"

    def tearDown(self):
        self.config_patcher.stop()

    @patch("util.log.logger")
    def test_returns_plain_message(self, mock_logger):
        self.assertEqual(log.i("Order created"), "Order created")
        mock_logger.info.assert_called_once_with("Order created")

    @patch("util.log.logger")
    def test_appends_context_to_headline(self, mock_logger):
        message = log.w("Item skipped", source_id = "prod_1", order_id = 5)

        self.assertEqual(message, "Item skipped {source_id='prod_1', order_id=5}")
        mock_logger.warning.assert_called_once_with(message)

    @patch("util.log.logger")
    def test_context_without_message(self, mock_logger):
        self.assertEqual(log.i(order_id = 5), "{order_id=5}")

    @patch("util.log.logger")
    def test_exception_is_logged_separately(self, mock_logger):
        message = log.e("Failed to send email", ValueError("boom"), order_id = 5)

        self.assertEqual(message, "Failed to send email {order_id=5}\n ├─ ! ValueError (see below)")
        mock_logger.error.assert_any_call(message)
        mock_logger.error.assert_any_call("Message: boom")

    @patch("util.log.logger")
    def test_below_level_is_not_logged(self, mock_logger):
        message = log.d("Details", order_id = 5)

        self.assertEqual(message, "Details {order_id=5}")
        mock_logger.debug.assert_not_called()

    @patch("util.log.logger")
    def test_multiple_lines_form_a_tree(self, mock_logger):
        message = log.i("Header", "first", "last")

        self.assertEqual(message, "Header\n ├─ first\n └─ last")

    @patch("builtins.print")
    def test_local_level_prints(self, mock_print):
        self.mock_config.log_level = "local"

        message = log.t("Tracing", order_id = 5)

        self.assertEqual(message, "Tracing {order_id=5}")
        mock_print.assert_called_once_with("[T] Tracing {order_id=5}")
