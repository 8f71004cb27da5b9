import unittest
from decimal import Decimal
from unittest.mock import patch

from apps.carts.services import CartService


class DummyAtomic:
    def __call__(self, *args, **kwargs):
        return self

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        return False


class StubProduct:
    def __init__(self, product_id: int, title: str, price: str, stock_quantity: int):
        self.id = product_id
        self.title = title
        self.price = Decimal(price)
        self.image = ""
        self.stock_quantity = stock_quantity


class StubCart:
    def __init__(self, cart_id: int, user_id: int):
        self.id = cart_id
        self.user_id = user_id
        self.date = "2026-10-19"


class StubCartProduct:
    def __init__(self, cart, product, quantity):
        self.cart = cart
        self.product = product
        self.quantity = quantity


class FakeProductRepository:
    def __init__(self, products):
        self._products = {p.id: p for p in products}
        self.locked = []

    def get(self, **filters):
        return self._products.get(filters.get("id"))

    def get_for_update(self, product_id):
        self.locked.append(product_id)
        return self._products.get(product_id)


class FakeCartRepository:
    def __init__(self):
        self._storage = {}
        self.events = []

    def get(self, **filters):
        return self._storage.get(filters.get("user_id"))

    def get_or_create_for_user(self, user_id):
        if user_id not in self._storage:
            self._storage[user_id] = StubCart(len(self._storage) + 1, user_id)
        return self._storage[user_id]

    def lock(self, cart_id):
        self.events.append(("lock", cart_id))
        return next(c for c in self._storage.values() if c.id == cart_id)


class FakeCartProductRepository:
    def __init__(self, events=None):
        self.rows = []
        self.events = events if events is not None else []

    def list_for_cart(self, cart_id):
        self.events.append(("list", cart_id))
        return [r for r in self.rows if r.cart.id == cart_id]

    def upsert(self, cart, product, quantity):
        for row in self.rows:
            if row.cart.id == cart.id and row.product.id == product.id:
                row.quantity = quantity
                return row
        row = StubCartProduct(cart, product, quantity)
        self.rows.append(row)
        return row

    def delete_product(self, cart, product_id):
        self.rows = [
            r for r in self.rows if not (r.cart.id == cart.id and r.product.id == product_id)
        ]

    def delete_for_cart(self, cart):
        self.rows = [r for r in self.rows if r.cart.id != cart.id]


HEADPHONES = StubProduct(1, "Wireless Headphones", "99.99", 25)
WATCH = StubProduct(2, "Smart Watch", "199.99", 2)
SPEAKER = StubProduct(3, "Bluetooth Speaker", "59.99", 40)


@patch("apps.carts.services.transaction.atomic", DummyAtomic())
class CartServiceTests(unittest.TestCase):
    def setUp(self):
        self.carts = FakeCartRepository()
        self.cart_products = FakeCartProductRepository(self.carts.events)
        self.products = FakeProductRepository([HEADPHONES, WATCH, SPEAKER])
        self.service = CartService(
            carts=self.carts,
            cart_products=self.cart_products,
            products=self.products,
        )

    def _fill_demo_cart(self, user_id=7):
        self.service.add_item(user_id, 1, 1)
        self.service.add_item(user_id, 2, 2)
        dto, error = self.service.add_item(user_id, 3, 1)
        self.assertIsNone(error)
        return dto

    def test_get_cart_creates_empty_cart(self):
        dto = self.service.get_cart(7)
        self.assertEqual(dto.user_id, 7)
        self.assertTrue(dto.is_empty)
        self.assertEqual(dto.totals.shipping, "5.99")
        self.assertEqual(dto.totals.total, "5.99")

    def test_demo_cart_summary(self):
        dto = self._fill_demo_cart()
        self.assertEqual([i.name for i in dto.items], ["Wireless Headphones", "Smart Watch", "Bluetooth Speaker"])
        self.assertEqual(dto.totals.subtotal, "559.96")
        self.assertEqual(dto.totals.tax, "56.00")
        self.assertEqual(dto.totals.total, "621.95")
        self.assertEqual(dto.item_count, 4)

    def test_add_existing_item_merges_quantity(self):
        self.service.add_item(7, 3, 1)
        dto, error = self.service.add_item(7, 3, 4)
        self.assertIsNone(error)
        self.assertEqual(len(dto.items), 1)
        self.assertEqual(dto.items[0].quantity, 5)
        self.assertEqual(self.cart_products.rows[0].quantity, 5)

    def test_add_unknown_product_returns_not_found(self):
        dto, error = self.service.add_item(7, 99, 1)
        self.assertIsNone(dto)
        self.assertEqual(error[0], "NOT_FOUND")

    def test_add_beyond_stock_is_rejected(self):
        self.service.add_item(7, 2, 2)
        dto, error = self.service.add_item(7, 2, 1)
        self.assertIsNone(dto)
        code, message, details = error
        self.assertEqual(code, "VALIDATION_ERROR")
        self.assertEqual(message, "Not enough stock available")
        self.assertEqual(details["available"], 2)
        self.assertEqual(self.cart_products.rows[0].quantity, 2)

    def test_set_quantity_updates_line(self):
        self._fill_demo_cart()
        dto, error = self.service.set_quantity(7, 1, 3)
        self.assertIsNone(error)
        self.assertEqual(dto.items[0].quantity, 3)
        self.assertEqual(dto.items[0].line_total, "299.97")

    def test_set_quantity_below_one_leaves_cart_unchanged(self):
        self._fill_demo_cart()
        dto, error = self.service.set_quantity(7, 2, 0)
        self.assertIsNone(error)
        self.assertEqual(dto.items[1].quantity, 2)
        self.assertEqual(dto.totals.total, "621.95")

    def test_set_quantity_unknown_line_is_noop(self):
        self.service.add_item(7, 1, 1)
        dto, error = self.service.set_quantity(7, 3, 2)
        self.assertIsNone(error)
        self.assertEqual([i.product_id for i in dto.items], [1])

    def test_set_quantity_beyond_stock_is_rejected(self):
        self.service.add_item(7, 2, 1)
        dto, error = self.service.set_quantity(7, 2, 3)
        self.assertIsNone(dto)
        self.assertEqual(error[0], "VALIDATION_ERROR")

    def test_remove_item_and_absent_item(self):
        self._fill_demo_cart()
        dto = self.service.remove_item(7, 2)
        self.assertEqual([i.product_id for i in dto.items], [1, 3])
        again = self.service.remove_item(7, 2)
        self.assertEqual([i.product_id for i in again.items], [1, 3])

    def test_clear_cart(self):
        self._fill_demo_cart()
        dto = self.service.clear_cart(7)
        self.assertTrue(dto.is_empty)
        self.assertEqual(self.cart_products.rows, [])

    def test_carts_are_isolated_per_user(self):
        self.service.add_item(7, 1, 1)
        other = self.service.get_cart(8)
        self.assertTrue(other.is_empty)

    def test_custom_pricing_is_applied(self):
        service = CartService(
            carts=self.carts,
            cart_products=self.cart_products,
            products=FakeProductRepository([HEADPHONES]),
            shipping=Decimal("0"),
            tax_rate=Decimal("0.20"),
        )
        dto, _ = service.add_item(9, 1, 1)
        self.assertEqual(dto.totals.shipping, "0.00")
        self.assertEqual(dto.totals.tax, "20.00")
        self.assertEqual(dto.totals.total, "119.99")

    def test_mutations_lock_cart_before_reading_lines(self):
        self.service.get_cart(7)
        self.assertEqual(self.carts.events, [("list", 1)])
        self.carts.events.clear()
        self.service.add_item(7, 1, 1)
        self.service.remove_item(7, 1)
        self.assertEqual(
            self.carts.events, [("lock", 1), ("list", 1), ("lock", 1), ("list", 1)]
        )

    def test_stock_is_checked_against_locked_product_row(self):
        self.service.add_item(7, 3, 1)
        self.service.set_quantity(7, 3, 2)
        self.assertEqual(self.products.locked, [3, 3])

    def test_add_sees_quantity_committed_while_waiting_for_lock(self):
        self.service.add_item(7, 1, 1)
        cart = self.carts.get(user_id=7)
        original_lock = self.carts.lock

        def lock_after_concurrent_add(cart_id):
            # Another request's +1 commits while this one waits on the row lock
            self.cart_products.upsert(cart, HEADPHONES, 2)
            return original_lock(cart_id)

        self.carts.lock = lock_after_concurrent_add
        dto, error = self.service.add_item(7, 1, 1)
        self.assertIsNone(error)
        self.assertEqual(dto.items[0].quantity, 3)
        self.assertEqual(self.cart_products.rows[0].quantity, 3)
