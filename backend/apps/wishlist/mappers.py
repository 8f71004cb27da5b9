from decimal import ROUND_HALF_UP
from typing import Iterable, List

from apps.carts.domain import CENT
from .domain import WishlistEntry, WishlistManager
from .dtos import WishlistDTO, WishlistItemDTO
from .models import WishlistItem


class WishlistEntryMapper:
    @staticmethod
    def from_model(item: WishlistItem) -> WishlistEntry:
        product = item.product
        return WishlistEntry(
            item_id=product.id,
            display_name=product.title,
            unit_price=product.price,
            in_stock=product.stock_quantity > 0,
            liked=bool(item.liked),
            image=product.image or "",
        )

    @staticmethod
    def many_from_models(items: Iterable[WishlistItem]) -> List[WishlistEntry]:
        return [WishlistEntryMapper.from_model(i) for i in items]

    @staticmethod
    def to_dto(entry: WishlistEntry) -> WishlistItemDTO:
        return WishlistItemDTO(
            product_id=entry.item_id,
            name=entry.display_name,
            unit_price=str(entry.unit_price.quantize(CENT, rounding=ROUND_HALF_UP)),
            image=entry.image,
            in_stock=entry.in_stock,
            liked=entry.liked,
        )


class WishlistMapper:
    @staticmethod
    def to_dto(user_id: int, manager: WishlistManager) -> WishlistDTO:
        return WishlistDTO(
            user_id=user_id,
            items=[WishlistEntryMapper.to_dto(e) for e in manager],
            count=manager.count(),
            count_label=manager.count_label(),
            is_empty=manager.is_empty(),
        )
