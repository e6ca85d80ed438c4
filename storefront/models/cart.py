"""Cart line item."""

from dataclasses import dataclass
from typing import Optional


@dataclass
class CartLineItem:
    """One product in the cart with its quantity."""
    id: int
    name: str
    price: float
    sale_price: Optional[float]
    image: str
    quantity: int = 1

    @property
    def effective_price(self):
        """Sale price when present, otherwise the base price."""
        if self.sale_price is not None:
            return self.sale_price
        return self.price

    @property
    def line_total(self):
        return self.effective_price * self.quantity

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'price': self.price,
            'sale_price': self.sale_price,
            'image': self.image,
            'quantity': self.quantity,
        }

    @classmethod
    def from_dict(cls, data):
        return cls(
            id=int(data['id']),
            name=data.get('name', ''),
            price=data.get('price', 0),
            sale_price=data.get('sale_price'),
            image=data.get('image', ''),
            quantity=int(data.get('quantity', 1)),
        )

    def __repr__(self):
        return f'<CartLineItem {self.id} x {self.quantity}>'
