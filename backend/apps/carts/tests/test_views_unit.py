import types
import unittest
from unittest.mock import Mock, patch
from rest_framework.test import APIRequestFactory, force_authenticate
from apps.carts.dtos import CartDTO, CartLineDTO, CartTotalsDTO
from apps.carts.views import CartView, CartItemListView, CartItemDetailView
from apps.api.validation import validate_request_context


def make_cart_dto(user_id=10, quantity=2):
    return CartDTO(
        id=1,
        user_id=user_id,
        date="2026-10-19",
        items=[
            CartLineDTO(
                product_id=3,
                name="Bluetooth Speaker",
                unit_price="59.99",
                quantity=quantity,
                line_total="119.98",
                image="",
            )
        ],
        totals=CartTotalsDTO(subtotal="119.98", shipping="5.99", tax="12.00", total="137.97"),
        item_count=quantity,
        is_empty=False,
    )


class CartViewsUnitTests(unittest.TestCase):
    def setUp(self):
        self.factory = APIRequestFactory()

    def dispatch(self, request, view_cls, **kwargs):
        pre_response = validate_request_context(request, view_cls, kwargs)
        if pre_response is not None:
            return pre_response
        view = view_cls.as_view()
        return view(request, **kwargs)

    def authenticate(self, request, user):
        request.user = user
        force_authenticate(request, user=user)

    @staticmethod
    def _user(user_id, *, staff=False, superuser=False):
        return types.SimpleNamespace(
            id=user_id,
            is_authenticated=True,
            is_staff=staff,
            is_superuser=superuser,
        )

    def test_get_cart_requires_authentication(self):
        request = self.factory.get("/api/cart/")
        response = self.dispatch(request, CartView)
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.data["error"]["code"], "UNAUTHORIZED")

    def test_get_cart_forbidden_for_staff(self):
        service_mock = Mock()
        with patch.object(CartView, "service", service_mock):
            request = self.factory.get("/api/cart/")
            self.authenticate(request, self._user(1, staff=True))
            response = self.dispatch(request, CartView)
        self.assertEqual(response.status_code, 403)
        self.assertEqual(
            response.data["error"]["message"], "Staff and admin accounts cannot own carts"
        )
        service_mock.get_cart.assert_not_called()

    def test_get_cart_forbidden_for_superuser(self):
        request = self.factory.get("/api/cart/")
        self.authenticate(request, self._user(1, superuser=True))
        response = self.dispatch(request, CartView)
        self.assertEqual(response.status_code, 403)

    def test_get_cart_returns_summary_for_customer(self):
        service_mock = Mock()
        service_mock.get_cart.return_value = make_cart_dto()
        with patch.object(CartView, "service", service_mock):
            request = self.factory.get("/api/cart/")
            self.authenticate(request, self._user(10))
            response = self.dispatch(request, CartView)
        self.assertEqual(response.status_code, 200)
        service_mock.get_cart.assert_called_once_with(10)
        self.assertEqual(response.data["totals"]["total"], "137.97")
        self.assertEqual(response.data["items"][0]["name"], "Bluetooth Speaker")
        self.assertFalse(response.data["is_empty"])

    def test_clear_cart(self):
        service_mock = Mock()
        empty = make_cart_dto()
        empty.items, empty.is_empty, empty.item_count = [], True, 0
        service_mock.clear_cart.return_value = empty
        with patch.object(CartView, "service", service_mock):
            request = self.factory.delete("/api/cart/")
            self.authenticate(request, self._user(10))
            response = self.dispatch(request, CartView)
        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.data["is_empty"])
        service_mock.clear_cart.assert_called_once_with(10)

    def test_add_item_returns_created(self):
        service_mock = Mock()
        service_mock.add_item.return_value = (make_cart_dto(), None)
        with patch.object(CartItemListView, "service", service_mock):
            request = self.factory.post("/api/cart/items/", {"product_id": 3, "quantity": 2}, format="json")
            self.authenticate(request, self._user(10))
            response = self.dispatch(request, CartItemListView)
        self.assertEqual(response.status_code, 201)
        service_mock.add_item.assert_called_once_with(10, 3, 2)

    def test_add_item_defaults_quantity(self):
        service_mock = Mock()
        service_mock.add_item.return_value = (make_cart_dto(quantity=1), None)
        with patch.object(CartItemListView, "service", service_mock):
            request = self.factory.post("/api/cart/items/", {"product_id": 3}, format="json")
            self.authenticate(request, self._user(10))
            self.dispatch(request, CartItemListView)
        service_mock.add_item.assert_called_once_with(10, 3, 1)

    def test_add_item_rejects_zero_quantity(self):
        service_mock = Mock()
        with patch.object(CartItemListView, "service", service_mock):
            request = self.factory.post("/api/cart/items/", {"product_id": 3, "quantity": 0}, format="json")
            self.authenticate(request, self._user(10))
            response = self.dispatch(request, CartItemListView)
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data["error"]["code"], "VALIDATION_ERROR")
        service_mock.add_item.assert_not_called()

    def test_add_item_out_of_stock_error(self):
        service_mock = Mock()
        service_mock.add_item.return_value = (
            None,
            ("VALIDATION_ERROR", "Not enough stock available", {"productId": "2", "available": 0}),
        )
        with patch.object(CartItemListView, "service", service_mock):
            request = self.factory.post("/api/cart/items/", {"product_id": 2}, format="json")
            self.authenticate(request, self._user(10))
            response = self.dispatch(request, CartItemListView)
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data["error"]["message"], "Not enough stock available")
        self.assertEqual(response.data["error"]["details"]["available"], 0)

    def test_add_item_unknown_product(self):
        service_mock = Mock()
        service_mock.add_item.return_value = (None, ("NOT_FOUND", "Product not found", {"productId": "99"}))
        with patch.object(CartItemListView, "service", service_mock):
            request = self.factory.post("/api/cart/items/", {"product_id": 99}, format="json")
            self.authenticate(request, self._user(10))
            response = self.dispatch(request, CartItemListView)
        self.assertEqual(response.status_code, 404)

    def test_patch_quantity_passes_values_below_one_through(self):
        service_mock = Mock()
        service_mock.set_quantity.return_value = (make_cart_dto(), None)
        with patch.object(CartItemDetailView, "service", service_mock):
            request = self.factory.patch("/api/cart/items/3/", {"quantity": 0}, format="json")
            self.authenticate(request, self._user(10))
            response = self.dispatch(request, CartItemDetailView, product_id="3")
        self.assertEqual(response.status_code, 200)
        service_mock.set_quantity.assert_called_once_with(10, 3, 0)
        self.assertEqual(response.data["items"][0]["quantity"], 2)

    def test_patch_quantity_requires_integer(self):
        service_mock = Mock()
        with patch.object(CartItemDetailView, "service", service_mock):
            request = self.factory.patch("/api/cart/items/3/", {"quantity": "many"}, format="json")
            self.authenticate(request, self._user(10))
            response = self.dispatch(request, CartItemDetailView, product_id="3")
        self.assertEqual(response.status_code, 400)
        service_mock.set_quantity.assert_not_called()

    def test_delete_item(self):
        service_mock = Mock()
        service_mock.remove_item.return_value = make_cart_dto()
        with patch.object(CartItemDetailView, "service", service_mock):
            request = self.factory.delete("/api/cart/items/5/")
            self.authenticate(request, self._user(10))
            response = self.dispatch(request, CartItemDetailView, product_id="5")
        self.assertEqual(response.status_code, 200)
        service_mock.remove_item.assert_called_once_with(10, 5)
