"""Wishlist entry."""

from dataclasses import dataclass
from typing import Optional


@dataclass
class WishlistEntry:
    """A saved product, no quantity."""
    id: int
    name: str
    price: float
    sale_price: Optional[float]
    image: str

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'price': self.price,
            'sale_price': self.sale_price,
            'image': self.image,
        }

    @classmethod
    def from_dict(cls, data):
        return cls(
            id=int(data['id']),
            name=data.get('name', ''),
            price=data.get('price', 0),
            sale_price=data.get('sale_price'),
            image=data.get('image', ''),
        )
