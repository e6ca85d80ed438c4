"""Data models package."""

from .snapshot import LocalSnapshot
from .user import User
from .product import Product
from .cart import CartLineItem
from .wishlist import WishlistEntry
from .order import Order, Customer, ShippingAddress, OrderLine, Payment, Amounts

__all__ = [
    'LocalSnapshot',
    'User',
    'Product',
    'CartLineItem',
    'WishlistEntry',
    'Order',
    'Customer',
    'ShippingAddress',
    'OrderLine',
    'Payment',
    'Amounts',
]
