"""Catalog product."""

from dataclasses import dataclass, field
from typing import List, Optional

from .cart import CartLineItem
from .wishlist import WishlistEntry


@dataclass
class Product:
    """Product in the static catalog."""
    id: int
    name: str
    price: float
    sale_price: Optional[float]
    category: str
    image: str
    description: str = ''
    on_sale: bool = False
    tags: List[str] = field(default_factory=list)
    colors: List[str] = field(default_factory=list)

    @property
    def current_price(self):
        """Get the current effective price."""
        if self.sale_price is not None:
            return self.sale_price
        return self.price

    @property
    def discount_percentage(self):
        """Calculate discount percentage."""
        if self.sale_price is not None and self.sale_price < self.price:
            return int(((self.price - self.sale_price) / self.price) * 100)
        return 0

    def to_cart_item(self):
        return CartLineItem(
            id=self.id,
            name=self.name,
            price=self.price,
            sale_price=self.sale_price,
            image=self.image,
            quantity=1,
        )

    def to_wishlist_entry(self):
        return WishlistEntry(
            id=self.id,
            name=self.name,
            price=self.price,
            sale_price=self.sale_price,
            image=self.image,
        )

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'price': self.price,
            'sale_price': self.sale_price,
            'current_price': self.current_price,
            'discount_percentage': self.discount_percentage,
            'category': self.category,
            'image': self.image,
            'description': self.description,
            'on_sale': self.on_sale,
            'tags': list(self.tags),
            'colors': list(self.colors),
        }

    def __repr__(self):
        return f'<Product {self.name}>'
