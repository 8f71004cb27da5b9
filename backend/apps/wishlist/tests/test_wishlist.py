from decimal import Decimal

from django.test import override_settings
from django.urls import reverse
from rest_framework.test import APITestCase
from rest_framework import status
from apps.users.models import User
from apps.catalog.models import Product
from apps.carts.models import CartProduct
from apps.wishlist.models import WishlistItem


class TestWishlistApi(APITestCase):
    def setUp(self):
        self.user = User.objects.create_user(
            username='wishuser', password='TestPass123', first_name='Wish', last_name='User', email='wish@example.com'
        )
        Product.objects.create(id=1, title='Wireless Headphones', price=Decimal('99.99'), stock_quantity=25)
        Product.objects.create(id=2, title='Smart Watch', price=Decimal('199.99'), stock_quantity=0)
        Product.objects.create(id=3, title='Bluetooth Speaker', price=Decimal('59.99'), stock_quantity=40)
        self.items_url = '/api/wishlist/items/'
        login = self.client.post(
            reverse('api-auth-token'), {'username': 'wishuser', 'password': 'TestPass123'}, format='json'
        )
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {login.data['access']}")

    def _fill(self):
        for pid in (1, 2, 3):
            res = self.client.post(self.items_url, {'product_id': pid}, format='json')
            self.assertEqual(res.status_code, status.HTTP_201_CREATED)
        return res

    def test_add_and_list(self):
        res = self._fill()
        self.assertEqual(res.data['count_label'], '3 items')
        res = self.client.get('/api/wishlist/')
        self.assertEqual([i['product_id'] for i in res.data['items']], [1, 2, 3])
        self.assertEqual([i['in_stock'] for i in res.data['items']], [True, False, True])

    def test_duplicate_add_is_noop(self):
        self.client.post(self.items_url, {'product_id': 1}, format='json')
        res = self.client.post(self.items_url, {'product_id': 1}, format='json')
        self.assertEqual(res.data['count'], 1)
        self.assertEqual(WishlistItem.objects.filter(user=self.user).count(), 1)

    def test_toggle_like_twice(self):
        self._fill()
        res = self.client.post(f'{self.items_url}3/like/')
        self.assertFalse(res.data['items'][2]['liked'])
        res = self.client.post(f'{self.items_url}3/like/')
        self.assertTrue(res.data['items'][2]['liked'])
        self.assertTrue(WishlistItem.objects.get(product_id=3).liked)

    def test_remove_entry(self):
        self._fill()
        res = self.client.delete(f'{self.items_url}1/')
        self.assertEqual(res.data['count_label'], '2 items')
        self.assertFalse(WishlistItem.objects.filter(product_id=1).exists())

    def test_move_out_of_stock_is_rejected(self):
        self._fill()
        res = self.client.post(f'{self.items_url}2/move-to-cart/')
        self.assertEqual(res.status_code, status.HTTP_409_CONFLICT)
        self.assertTrue(WishlistItem.objects.filter(product_id=2).exists())

    @override_settings(WISHLIST_MOVE_TO_CART_ADDS_TO_CART=False)
    def test_move_to_cart_removes_entry_only_by_default(self):
        self._fill()
        res = self.client.post(f'{self.items_url}1/move-to-cart/')
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual([i['product_id'] for i in res.data['items']], [2, 3])
        self.assertFalse(CartProduct.objects.exists())

    @override_settings(WISHLIST_MOVE_TO_CART_ADDS_TO_CART=True)
    def test_move_to_cart_with_handoff_adds_to_cart(self):
        self._fill()
        res = self.client.post(f'{self.items_url}3/move-to-cart/')
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        line = CartProduct.objects.get(cart__user=self.user)
        self.assertEqual((line.product_id, line.quantity), (3, 1))
        self.assertFalse(WishlistItem.objects.filter(product_id=3).exists())

    def test_toggle_like_of_absent_product_is_noop(self):
        self._fill()
        res = self.client.post(f'{self.items_url}4/like/')
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data['count'], 3)
        self.assertTrue(all(i['liked'] for i in res.data['items']))
