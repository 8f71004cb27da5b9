import unittest
from apps.wishlist.commands import WishlistAddCommand


class WishlistCommandTests(unittest.TestCase):
    def test_from_raw_accepts_snake_and_camel_case(self):
        self.assertEqual(WishlistAddCommand.from_raw({"product_id": "4"}).product_id, 4)
        self.assertEqual(WishlistAddCommand.from_raw({"productId": 5}).product_id, 5)

    def test_from_raw_rejects_invalid(self):
        for raw in (None, {}, {"product_id": "x"}, {"product_id": 0}, {"product_id": False}):
            self.assertIsNone(WishlistAddCommand.from_raw(raw), raw)
