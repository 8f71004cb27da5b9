import unittest
from apps.catalog.commands import ProductQuery, StockCommand


class ProductQueryTests(unittest.TestCase):
    def test_defaults(self):
        query = ProductQuery.from_params({})
        self.assertIsNone(query.category)
        self.assertFalse(query.available_only)

    def test_category_is_trimmed_and_blank_ignored(self):
        self.assertEqual(ProductQuery.from_params({"category": " audio "}).category, "audio")
        self.assertIsNone(ProductQuery.from_params({"category": "   "}).category)

    def test_in_stock_flag_values(self):
        for raw in ("1", "true", "Yes", "on"):
            self.assertTrue(ProductQuery.from_params({"in_stock": raw}).available_only, raw)
        for raw in ("0", "false", "", "maybe"):
            self.assertFalse(ProductQuery.from_params({"in_stock": raw}).available_only, raw)


class StockCommandTests(unittest.TestCase):
    def test_from_raw(self):
        cmd = StockCommand.from_raw("4", {"stock_quantity": 0})
        self.assertEqual(cmd.product_id, 4)
        self.assertEqual(cmd.quantity, 0)

    def test_rejects_negative_and_non_int(self):
        for raw in (-1, "3", True, None):
            with self.assertRaises(ValueError):
                StockCommand.from_raw(1, {"stock_quantity": raw})
