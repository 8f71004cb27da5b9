from django.db import models


class Category(models.Model):
    name = models.CharField(max_length=100, unique=True)

    class Meta:
        ordering = ("name",)

    def __str__(self):
        return self.name


class Product(models.Model):
    id = models.AutoField(primary_key=True)
    title = models.CharField(max_length=255)
    price = models.DecimalField(max_digits=10, decimal_places=2)
    description = models.TextField(blank=True, default="")
    image = models.TextField(blank=True, default="")
    stock_quantity = models.PositiveIntegerField(default=0)
    categories = models.ManyToManyField(
        Category, related_name="products", through="ProductCategory"
    )

    def __str__(self):
        return self.title

    @property
    def in_stock(self) -> bool:
        return self.stock_quantity > 0

    class Meta:
        indexes = [
            models.Index(fields=["title"], name="product_title_idx"),
            models.Index(fields=["stock_quantity"], name="product_stock_idx"),
        ]


class ProductCategory(models.Model):
    product = models.ForeignKey(Product, on_delete=models.CASCADE)
    category = models.ForeignKey(Category, on_delete=models.CASCADE)

    class Meta:
        unique_together = ("product", "category")
        db_table = "product_categories"
        indexes = [
            models.Index(fields=["product", "category"], name="prod_cat_combo_idx"),
        ]
