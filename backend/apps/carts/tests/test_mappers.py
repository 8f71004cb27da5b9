import datetime
import types
import unittest
from decimal import Decimal

from apps.carts.domain import CartLine, CartManager
from apps.carts.mappers import CartLineMapper, CartMapper


def stub_product(product_id, title, price, image=None):
    return types.SimpleNamespace(id=product_id, title=title, price=price, image=image)


class CartMapperTests(unittest.TestCase):
    def test_line_from_model(self):
        row = types.SimpleNamespace(
            product=stub_product(1, "Wireless Headphones", Decimal("99.99")), quantity=2
        )
        line = CartLineMapper.from_model(row)
        self.assertEqual(line, CartLine(1, "Wireless Headphones", Decimal("99.99"), 2, ""))

    def test_line_dto_rounds_money(self):
        dto = CartLineMapper.to_dto(CartLine(3, "Speaker", Decimal("59.995"), 3, "img"))
        self.assertEqual(dto.unit_price, "60.00")
        self.assertEqual(dto.line_total, "179.99")
        self.assertEqual(dto.image, "img")

    def test_cart_dto_includes_totals_and_flags(self):
        cart = types.SimpleNamespace(id=4, user_id=7, date=datetime.date(2026, 10, 19))
        manager = CartManager(
            [
                CartLine(1, "Wireless Headphones", "99.99", 1),
                CartLine(2, "Smart Watch", "199.99", 2),
                CartLine(3, "Bluetooth Speaker", "59.99", 1),
            ]
        )
        dto = CartMapper.to_dto(cart, manager)
        self.assertEqual(dto.date, "2026-10-19")
        self.assertEqual([i.product_id for i in dto.items], [1, 2, 3])
        self.assertEqual(dto.totals.subtotal, "559.96")
        self.assertEqual(dto.totals.shipping, "5.99")
        self.assertEqual(dto.totals.tax, "56.00")
        self.assertEqual(dto.totals.total, "621.95")
        self.assertEqual(dto.item_count, 4)
        self.assertFalse(dto.is_empty)

    def test_empty_cart_dto(self):
        cart = types.SimpleNamespace(id=1, user_id=2, date="2026-10-19")
        dto = CartMapper.to_dto(cart, CartManager())
        self.assertTrue(dto.is_empty)
        self.assertEqual(dto.totals.total, "5.99")
        self.assertEqual(dto.items, [])
