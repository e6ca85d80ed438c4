"""Cart routes."""

from flask import Blueprint, jsonify, request, url_for

from storefront.catalog import get_product
from storefront.services import get_cart
from storefront.services.pricing import calculate_amounts
from storefront.utils.http import request_value, respond

cart_bp = Blueprint('cart', __name__)


def _cart_payload(cart, **extra):
    payload = {'success': True, 'cart_count': cart.total_items}
    payload.update(extra)
    return payload


@cart_bp.route('/')
def view_cart():
    """View shopping cart."""
    cart = get_cart()
    data = cart.to_dict()
    data['amounts'] = calculate_amounts(cart.subtotal).to_dict() if not cart.is_empty else None
    return jsonify(data)


@cart_bp.route('/add', methods=['POST'])
def add_to_cart():
    """Add one unit of a product to the cart."""
    product = get_product(request_value('product_id', type=int))
    if product is None:
        return respond({'success': False, 'message': 'Product not found'},
                       request.referrer or url_for('main.index'),
                       'Product not found.', 'danger', status=404)

    cart = get_cart()
    cart.add_item(product)
    return respond(_cart_payload(cart, message=f'{product.name} added to cart'),
                   request.referrer or url_for('cart.view_cart'),
                   f'{product.name} added to cart!')


@cart_bp.route('/update', methods=['POST'])
def update_cart():
    """Update cart item quantity."""
    product_id = request_value('product_id', type=int)
    quantity = request_value('quantity', type=int)
    if quantity is None:
        return respond({'success': False, 'message': 'Quantity is required'},
                       url_for('cart.view_cart'), 'Quantity is required.', 'danger', status=400)

    cart = get_cart()
    cart.update_quantity(product_id, quantity)
    message = 'Item removed from cart.' if quantity <= 0 else 'Cart updated.'
    return respond(_cart_payload(cart, subtotal=cart.subtotal, message=message),
                   url_for('cart.view_cart'), message)


@cart_bp.route('/remove/<int:product_id>', methods=['POST'])
def remove_from_cart(product_id):
    """Remove item from cart."""
    cart = get_cart()
    cart.remove_item(product_id)
    return respond(_cart_payload(cart, subtotal=cart.subtotal),
                   url_for('cart.view_cart'), 'Item removed from cart.')


@cart_bp.route('/clear', methods=['POST'])
def clear_cart():
    """Clear all items from cart."""
    cart = get_cart()
    cart.clear_cart()
    return respond(_cart_payload(cart), url_for('cart.view_cart'), 'Cart cleared.')
