"""Checkout pricing policy."""

from decimal import Decimal, ROUND_HALF_UP

from ..models.order import Amounts

FREE_SHIPPING_THRESHOLD = 999
SHIPPING_FEE = 99
TAX_RATE = Decimal('0.18')


def calculate_shipping(subtotal):
    return 0 if subtotal >= FREE_SHIPPING_THRESHOLD else SHIPPING_FEE


def calculate_tax(subtotal):
    """Tax rounded half up to a whole unit."""
    tax = Decimal(str(subtotal)) * TAX_RATE
    return int(tax.quantize(Decimal('1'), rounding=ROUND_HALF_UP))


def calculate_amounts(subtotal):
    shipping = calculate_shipping(subtotal)
    tax = calculate_tax(subtotal)
    return Amounts(
        subtotal=subtotal,
        shipping=shipping,
        tax=tax,
        total=subtotal + shipping + tax,
    )
