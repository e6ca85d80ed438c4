"""Wishlist aggregate."""

from ..models.wishlist import WishlistEntry
from .cart_service import parse_items


class WishlistService:
    """Saved products of the current browser, one entry per product id."""

    def __init__(self, repository):
        self.repository = repository
        self._items = []

    def load(self):
        self._items = parse_items(self.repository.load(), WishlistEntry.from_dict)
        return self

    @property
    def items(self):
        return list(self._items)

    @property
    def count(self):
        return len(self._items)

    def is_in_wishlist(self, product_id):
        return any(item.id == product_id for item in self._items)

    def add_item(self, product):
        """Save ``product``; a product already saved is left as is."""
        if self.is_in_wishlist(product.id):
            return
        self._items.append(product.to_wishlist_entry())
        self._flush()

    def remove_item(self, product_id):
        self._items = [item for item in self._items if item.id != product_id]
        self._flush()

    def clear_wishlist(self):
        self._items = []
        self.repository.clear()

    def _flush(self):
        self.repository.save([item.to_dict() for item in self._items])

    def to_dict(self):
        return {
            'items': [item.to_dict() for item in self._items],
            'count': self.count,
        }
