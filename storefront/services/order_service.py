"""Order placement and order display."""

import logging
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError

from ..exceptions import RemoteStoreError, SnapshotDecodeError
from ..models.order import (Amounts, Customer, Order, OrderLine, Payment,
                            ShippingAddress)
from ..stores.snapshot import OFFLINE_ORDERS_KEY
from ..utils.order_ids import format_order_id, generate_order_id
from .pricing import calculate_amounts

logger = logging.getLogger(__name__)

ORDERS_COLLECTION = 'orders'

PAYMENT_CARD = 'credit-card'
PAYMENT_COD = 'cod'
PAYMENT_METHODS = (PAYMENT_CARD, PAYMENT_COD)

ORDER_STATUS_PLACED = 'placed'


@dataclass
class PlacementResult:
    """Outcome of a checkout: where the order ended up and under which id."""
    order_id: str
    display_id: str
    source: str  # remote, local or fallback
    order: Optional[Order] = None


@dataclass
class DisplayedOrder:
    order: Order
    display_id: str
    source: str  # remote, local or placeholder


def _utcnow_iso():
    return datetime.now(timezone.utc).isoformat()


def card_last_four(card_number):
    digits = (card_number or '').replace(' ', '')
    return digits[-4:] or None


class OrderService:
    """
    Places orders from the cart and reconstructs them for confirmation.

    Placement never fails from the customer's point of view: the order goes
    to the remote store, or to the local snapshot when that fails, or is
    reduced to a bare fallback id when anything unexpected happens. In every
    case the cart is cleared.
    """

    def __init__(self, documents, snapshots, cart, brand='SUN'):
        self.documents = documents
        self.snapshots = snapshots
        self.cart = cart
        self.brand = brand

    def display_id(self, order_id):
        return format_order_id(order_id, self.brand)

    def build_order(self, form_data, user_id=None, amounts=None):
        """Assemble the order record from the checkout form and the cart."""
        if amounts is None:
            amounts = calculate_amounts(self.cart.subtotal)

        method = form_data.get('payment_method') or PAYMENT_CARD
        last_four = None
        if method == PAYMENT_CARD:
            last_four = card_last_four(form_data.get('card_number'))

        return Order(
            customer=Customer(
                first_name=form_data.get('first_name', ''),
                last_name=form_data.get('last_name', ''),
                email=form_data.get('email', ''),
                phone=form_data.get('phone', ''),
                user_id=user_id,
            ),
            shipping_address=ShippingAddress(
                address=form_data.get('address', ''),
                city=form_data.get('city', ''),
                state=form_data.get('state', ''),
                pincode=form_data.get('pincode', ''),
            ),
            items=tuple(
                OrderLine(
                    id=item.id,
                    name=item.name,
                    price=item.effective_price,
                    original_price=item.price,
                    quantity=item.quantity,
                    image=item.image,
                )
                for item in self.cart.items
            ),
            payment=Payment(
                method=method,
                status='pending' if method == PAYMENT_COD else 'processing',
                card_last_four=last_four,
            ),
            amounts=amounts,
            notes=form_data.get('notes') or '',
            status=ORDER_STATUS_PLACED,
            created_at=_utcnow_iso(),
        )

    def place_order(self, form_data, user_id=None):
        """Persist an order built from the cart and clear the cart."""
        try:
            raw_order_id = generate_order_id()
            order = self.build_order(form_data, user_id)

            try:
                order_id = self.documents.add(ORDERS_COLLECTION, order.to_dict())
                source = 'remote'
            except RemoteStoreError:
                logger.exception('Error saving order to remote store, keeping it locally')
                order_id = raw_order_id
                self.save_order_locally(order_id, order)
                source = 'local'

            self.cart.clear_cart()
            logger.info('Order %s placed (%s)', order_id, source)
            return PlacementResult(
                order_id=order_id,
                display_id=self.display_id(order_id),
                source=source,
                order=replace(order, id=order_id),
            )
        except Exception:
            # Checkout must still end on a confirmation
            logger.exception('Error placing order')
            fallback_id = generate_order_id()
            try:
                self.cart.clear_cart()
            except Exception:
                logger.exception('Error clearing cart after failed checkout')
            return PlacementResult(
                order_id=fallback_id,
                display_id=self.display_id(fallback_id),
                source='fallback',
            )

    def _load_offline_orders(self):
        try:
            orders = self.snapshots.get_json(OFFLINE_ORDERS_KEY)
        except SnapshotDecodeError:
            logger.exception('Error parsing offline orders')
            return []
        return orders if isinstance(orders, list) else []

    def save_order_locally(self, order_id, order):
        """Append the order to the browser's offline order list."""
        entry = order.to_dict()
        entry['id'] = order_id
        entry['created_at'] = _utcnow_iso()

        try:
            offline_orders = self._load_offline_orders()
            offline_orders.append(entry)
            self.snapshots.set_json(OFFLINE_ORDERS_KEY, offline_orders)
        except SQLAlchemyError:
            logger.exception('Error saving order %s locally', order_id)
            return False
        return True

    def find_local_order(self, order_id):
        for entry in self._load_offline_orders():
            if isinstance(entry, dict) and entry.get('id') == order_id:
                return Order.from_dict(entry, order_id)
        return None

    def placeholder_order(self, order_id, email=None):
        """Generic order shown when the real record cannot be found."""
        return Order(
            id=order_id or 'UNKNOWN',
            customer=Customer(
                first_name='Valued',
                last_name='Customer',
                email=email or 'customer@example.com',
                phone='1234567890',
            ),
            shipping_address=ShippingAddress(
                address='123 Main St',
                city='Mumbai',
                state='Maharashtra',
                pincode='400001',
            ),
            items=(),
            payment=Payment(method=PAYMENT_CARD, status='processing', card_last_four='3456'),
            amounts=Amounts(subtotal=0, shipping=0, tax=0, total=0),
            status=ORDER_STATUS_PLACED,
            created_at=_utcnow_iso(),
        )

    def get_order_for_display(self, order_id, email=None):
        """Find an order by id: remote store, then local snapshot, then a placeholder."""
        display_id = self.display_id(order_id)

        try:
            document = self.documents.get(ORDERS_COLLECTION, order_id)
            if document is not None:
                return DisplayedOrder(Order.from_dict(document, order_id), display_id, 'remote')
        except RemoteStoreError:
            logger.exception('Error fetching order %s from remote store', order_id)
        except (KeyError, TypeError, ValueError):
            logger.exception('Malformed remote order %s', order_id)

        try:
            order = self.find_local_order(order_id)
            if order is not None:
                return DisplayedOrder(order, display_id, 'local')
        except (KeyError, TypeError, ValueError, SQLAlchemyError):
            logger.exception('Error reading local order %s', order_id)

        logger.info('Order %s not found, showing placeholder', order_id)
        return DisplayedOrder(self.placeholder_order(order_id, email), display_id, 'placeholder')
