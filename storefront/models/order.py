"""Order record.

Orders are snapshots: line items copy the product data at checkout and the
amounts are computed once and frozen into the record.
"""

from dataclasses import dataclass, field
from typing import Optional, Tuple


@dataclass(frozen=True)
class Customer:
    first_name: str
    last_name: str
    email: str
    phone: str
    user_id: Optional[str] = None

    @property
    def full_name(self):
        return f'{self.first_name} {self.last_name}'.strip()

    def to_dict(self):
        return {
            'first_name': self.first_name,
            'last_name': self.last_name,
            'email': self.email,
            'phone': self.phone,
            'user_id': self.user_id,
        }

    @classmethod
    def from_dict(cls, data):
        return cls(
            first_name=data.get('first_name', ''),
            last_name=data.get('last_name', ''),
            email=data.get('email', ''),
            phone=data.get('phone', ''),
            user_id=data.get('user_id'),
        )


@dataclass(frozen=True)
class ShippingAddress:
    address: str
    city: str
    state: str
    pincode: str

    def to_dict(self):
        return {
            'address': self.address,
            'city': self.city,
            'state': self.state,
            'pincode': self.pincode,
        }

    @classmethod
    def from_dict(cls, data):
        return cls(
            address=data.get('address', ''),
            city=data.get('city', ''),
            state=data.get('state', ''),
            pincode=data.get('pincode', ''),
        )


@dataclass(frozen=True)
class OrderLine:
    """Snapshot of a cart line at checkout."""
    id: int
    name: str
    price: float
    original_price: float
    quantity: int
    image: str

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'price': self.price,
            'original_price': self.original_price,
            'quantity': self.quantity,
            'image': self.image,
        }

    @classmethod
    def from_dict(cls, data):
        return cls(
            id=int(data.get('id', 0)),
            name=data.get('name', ''),
            price=data.get('price', 0),
            original_price=data.get('original_price', data.get('price', 0)),
            quantity=int(data.get('quantity', 1)),
            image=data.get('image', ''),
        )


@dataclass(frozen=True)
class Payment:
    method: str
    status: str
    card_last_four: Optional[str] = None

    def to_dict(self):
        data = {'method': self.method, 'status': self.status}
        # Absent, not null, when no card number was taken
        if self.card_last_four:
            data['card_last_four'] = self.card_last_four
        return data

    @classmethod
    def from_dict(cls, data):
        return cls(
            method=data.get('method', ''),
            status=data.get('status', ''),
            card_last_four=data.get('card_last_four') or None,
        )


@dataclass(frozen=True)
class Amounts:
    subtotal: float
    shipping: int
    tax: int
    total: float

    def to_dict(self):
        return {
            'subtotal': self.subtotal,
            'shipping': self.shipping,
            'tax': self.tax,
            'total': self.total,
        }

    @classmethod
    def from_dict(cls, data):
        return cls(
            subtotal=data.get('subtotal', 0),
            shipping=data.get('shipping', 0),
            tax=data.get('tax', 0),
            total=data.get('total', 0),
        )


@dataclass(frozen=True)
class Order:
    """Order placed at checkout."""
    customer: Customer
    shipping_address: ShippingAddress
    items: Tuple[OrderLine, ...]
    payment: Payment
    amounts: Amounts
    notes: str = ''
    status: str = 'placed'
    created_at: Optional[str] = None
    id: Optional[str] = field(default=None, compare=False)

    def to_dict(self):
        """Document body without the id."""
        data = {
            'customer': self.customer.to_dict(),
            'shipping_address': self.shipping_address.to_dict(),
            'items': [line.to_dict() for line in self.items],
            'payment': self.payment.to_dict(),
            'amounts': self.amounts.to_dict(),
            'notes': self.notes,
            'status': self.status,
        }
        if self.created_at:
            data['created_at'] = self.created_at
        return data

    @classmethod
    def from_dict(cls, data, order_id=None):
        return cls(
            id=order_id if order_id is not None else data.get('id'),
            customer=Customer.from_dict(data.get('customer') or {}),
            shipping_address=ShippingAddress.from_dict(data.get('shipping_address') or {}),
            items=tuple(OrderLine.from_dict(line) for line in data.get('items') or []),
            payment=Payment.from_dict(data.get('payment') or {}),
            amounts=Amounts.from_dict(data.get('amounts') or {}),
            notes=data.get('notes') or '',
            status=data.get('status', 'placed'),
            created_at=data.get('created_at'),
        )

    def __repr__(self):
        return f'<Order {self.id}>'
