from typing import Type, TypeVar, Generic, Iterable, Optional
from django.db import models

T = TypeVar('T', bound=models.Model)


class GenericRepository(Generic[T]):
    """ORM access shared by the app repositories. Services only see these methods."""

    def __init__(self, model: Type[T]):
        self.model = model

    def get(self, **filters) -> Optional[T]:
        return self.model.objects.filter(**filters).first()

    def list(self, **filters) -> Iterable[T]:
        return self.model.objects.filter(**filters)

    def create(self, **data) -> T:
        return self.model.objects.create(**data)

    def update_fields(self, obj: T, **data) -> T:
        """Assign the non-None values and save only those columns."""
        changed = [k for k, v in data.items() if v is not None]
        if not changed:
            return obj
        for k in changed:
            setattr(obj, k, data[k])
        obj.save(update_fields=changed)
        return obj

    def delete(self, obj: T):
        obj.delete()

    def delete_where(self, **filters) -> int:
        deleted, _ = self.model.objects.filter(**filters).delete()
        return deleted
