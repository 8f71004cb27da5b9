from decimal import Decimal

from django.core.management.base import BaseCommand, CommandError
from django.core.management.color import no_style
from django.db import transaction, connection
from django.utils import timezone

from apps.catalog.models import Category, Product, ProductCategory
from apps.users.models import User
from apps.carts.models import Cart, CartProduct
from apps.wishlist.models import WishlistItem
from apps.orders.models import Order, OrderItem

PLACEHOLDER_IMAGE = "https://via.placeholder.com/150"

CATEGORIES = ["electronics", "audio", "wearables"]

# (id, title, price, description, stock_quantity, categories)
PRODUCTS = [
    (
        1,
        "Wireless Headphones",
        Decimal("99.99"),
        "Over-ear headphones with active noise cancelling and 30 hours of battery life.",
        25,
        ["electronics", "audio"],
    ),
    (
        2,
        "Smart Watch",
        Decimal("199.99"),
        "Fitness tracking, notifications and a week of battery in a water resistant case.",
        0,
        ["electronics", "wearables"],
    ),
    (
        3,
        "Bluetooth Speaker",
        Decimal("59.99"),
        "Portable speaker with 360 degree sound and a splash proof body.",
        40,
        ["electronics", "audio"],
    ),
]

USERS = [
    {
        "id": 1,
        "username": "admin",
        "email": "admin@storefront.local",
        "password": "admin123",
        "first_name": "Store",
        "last_name": "Admin",
        "is_staff": True,
        "is_superuser": True,
    },
    {
        "id": 2,
        "username": "shopper",
        "email": "shopper@storefront.local",
        "password": "shopper123",
        "first_name": "Sam",
        "last_name": "Shopper",
        "phone": "1-570-236-7033",
    },
]

DEMO_SHOPPER = "shopper"
# (product_id, quantity); the watch was added before it sold out
DEMO_CART = [(1, 1), (2, 2), (3, 1)]
DEMO_WISHLIST = [1, 2, 3]


class Command(BaseCommand):
    help = "Seed the storefront demo catalog, accounts, cart and wishlist."

    def add_arguments(self, parser):
        parser.add_argument(
            "--flush", action="store_true", help="Delete existing data before seeding"
        )

    @transaction.atomic
    def handle(self, *args, **options):
        if options["flush"]:
            self.stdout.write("Flushing existing data...")
            OrderItem.objects.all().delete()
            Order.objects.all().delete()
            WishlistItem.objects.all().delete()
            CartProduct.objects.all().delete()
            Cart.objects.all().delete()
            User.objects.all().delete()
            ProductCategory.objects.all().delete()
            Product.objects.all().delete()
            Category.objects.all().delete()

        self.stdout.write("Seeding categories...")
        name_to_cat = {
            name: Category.objects.get_or_create(name=name)[0] for name in CATEGORIES
        }

        self.stdout.write("Seeding products...")
        for pid, title, price, desc, stock, cat_names in PRODUCTS:
            product, _ = Product.objects.update_or_create(
                id=pid,
                defaults=dict(
                    title=title,
                    price=price,
                    description=desc,
                    image=PLACEHOLDER_IMAGE,
                    stock_quantity=stock,
                ),
            )
            for cname in cat_names:
                ProductCategory.objects.get_or_create(
                    product=product, category=name_to_cat[cname]
                )

        self.stdout.write("Seeding users...")
        for payload in USERS:
            attrs = dict(payload)
            user_id = attrs.pop("id")
            raw_password = attrs.pop("password")
            is_superuser = attrs.pop("is_superuser", False)
            # Superusers must also be staff
            attrs["is_staff"] = attrs.get("is_staff", False) or is_superuser
            attrs["is_superuser"] = is_superuser
            user, _ = User.objects.update_or_create(id=user_id, defaults=attrs)
            user.set_password(raw_password)
            user.save()

        shopper = User.objects.get(username=DEMO_SHOPPER)
        if not shopper.is_customer:
            raise CommandError(f"{shopper.username} is a staff account and cannot own a cart")
        self.stdout.write(f"Seeding demo cart and wishlist for {shopper.username}...")
        cart, _ = Cart.objects.update_or_create(
            user=shopper, defaults={"date": timezone.now().date()}
        )
        CartProduct.objects.filter(cart=cart).delete()
        for product_id, quantity in DEMO_CART:
            CartProduct.objects.create(cart=cart, product_id=product_id, quantity=quantity)
        WishlistItem.objects.filter(user=shopper).delete()
        for product_id in DEMO_WISHLIST:
            WishlistItem.objects.create(user=shopper, product_id=product_id, liked=True)

        # Explicit ids were inserted; move sequences past them for later API inserts
        sql_list = connection.ops.sequence_reset_sql(no_style(), [User, Product, Cart])
        if sql_list:
            with connection.cursor() as cursor:
                for sql in sql_list:
                    cursor.execute(sql)

        self.stdout.write(self.style.SUCCESS("Storefront seed completed."))
