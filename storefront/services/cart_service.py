"""Cart aggregate."""

import logging

from ..models.cart import CartLineItem

logger = logging.getLogger(__name__)


def parse_items(raw_items, factory):
    """Build items from stored dicts, one per product id.

    Entries that cannot be parsed are dropped and logged.
    """
    items = []
    seen = set()
    for raw in raw_items or []:
        try:
            item = factory(raw)
        except (KeyError, TypeError, ValueError):
            logger.warning('Dropping malformed stored item: %r', raw)
            continue
        if item.id in seen:
            continue
        seen.add(item.id)
        items.append(item)
    return items


class CartService:
    """
    Line items of the current browser's cart.

    The in-memory list is the source of truth for the request; every mutation
    writes the full list through the repository.
    """

    def __init__(self, repository):
        self.repository = repository
        self._items = []

    def load(self):
        """Reconcile the cart from the replicas."""
        items = parse_items(self.repository.load(), CartLineItem.from_dict)
        self._items = [item for item in items if item.quantity > 0]
        return self

    @property
    def items(self):
        return list(self._items)

    @property
    def is_empty(self):
        return not self._items

    @property
    def total_items(self):
        return sum(item.quantity for item in self._items)

    @property
    def subtotal(self):
        return sum(item.line_total for item in self._items)

    def get_item(self, product_id):
        for item in self._items:
            if item.id == product_id:
                return item
        return None

    def add_item(self, product):
        """Add one unit of ``product``, inserting a line when absent."""
        item = self.get_item(product.id)
        if item:
            item.quantity += 1
        else:
            self._items.append(product.to_cart_item())
        self._flush()

    def remove_item(self, product_id):
        self._items = [item for item in self._items if item.id != product_id]
        self._flush()

    def update_quantity(self, product_id, quantity):
        """Set the quantity of a line; zero or less removes it."""
        if quantity <= 0:
            self.remove_item(product_id)
            return
        item = self.get_item(product_id)
        if item:
            item.quantity = quantity
        self._flush()

    def clear_cart(self):
        self._items = []
        self.repository.clear()

    def _flush(self):
        self.repository.save([item.to_dict() for item in self._items])

    def to_dict(self):
        return {
            'items': [item.to_dict() for item in self._items],
            'total_items': self.total_items,
            'subtotal': self.subtotal,
        }
