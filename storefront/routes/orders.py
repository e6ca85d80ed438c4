"""Checkout and order confirmation routes."""

from flask import Blueprint, flash, jsonify, redirect, request, url_for

from storefront.forms.checkout import CheckoutForm
from storefront.services import get_cart, get_order_service, get_session_provider
from storefront.services.order_service import PAYMENT_METHODS
from storefront.services.pricing import calculate_amounts
from storefront.utils.http import wants_json

orders_bp = Blueprint('orders', __name__)


@orders_bp.route('/checkout', methods=['GET', 'POST'])
def checkout():
    """Checkout page."""
    cart = get_cart()

    if cart.is_empty:
        flash('Your cart is empty.', 'warning')
        return redirect(url_for('cart.view_cart'))

    sessions = get_session_provider()

    if request.method == 'GET':
        identity = sessions.identity
        return jsonify({
            'cart': cart.to_dict(),
            'amounts': calculate_amounts(cart.subtotal).to_dict(),
            'payment_methods': list(PAYMENT_METHODS),
            'email': identity.email if identity else '',
        })

    form = CheckoutForm()
    if not form.validate_on_submit():
        return jsonify({'success': False, 'errors': form.first_errors()}), 400

    result = get_order_service().place_order(form.order_data(), sessions.user_id)
    confirmation_url = url_for('orders.order_confirmation', id=result.order_id)

    if result.source == 'fallback':
        message = ('Your order has been received, but we encountered some technical issues. '
                   'Please save your order number for reference.')
    else:
        message = 'Order placed successfully! Thank you for your purchase!'

    if wants_json():
        return jsonify({
            'success': True,
            'order_id': result.order_id,
            'display_id': result.display_id,
            'message': message,
            'redirect': confirmation_url,
        }), 201

    flash(message, 'success')
    return redirect(confirmation_url)


@orders_bp.route('/confirmation')
@orders_bp.route('/confirmation/<order_id>')
def order_confirmation(order_id=None):
    """Order confirmation page."""
    order_id = order_id or request.args.get('id')
    if not order_id:
        return redirect(url_for('main.index'))

    identity = get_session_provider().identity
    displayed = get_order_service().get_order_for_display(
        order_id, email=identity.email if identity else None)

    order = displayed.order.to_dict()
    order['id'] = displayed.order.id
    return jsonify({
        'order': order,
        'display_id': displayed.display_id,
        'source': displayed.source,
    })
