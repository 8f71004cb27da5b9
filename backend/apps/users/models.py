from django.db import models
from django.contrib.auth.models import AbstractUser


class User(AbstractUser):
    """Storefront account. Staff and superusers manage the catalog; everyone else shops."""

    email = models.EmailField(unique=True)
    phone = models.CharField(max_length=50, blank=True, null=True)

    @property
    def is_customer(self) -> bool:
        return not (self.is_staff or self.is_superuser)

    def __str__(self):
        return self.username
