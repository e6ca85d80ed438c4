"""Wishlist routes."""

from flask import Blueprint, jsonify, request, url_for

from storefront.catalog import get_product
from storefront.services import get_cart, get_wishlist
from storefront.utils.http import request_value, respond

wishlist_bp = Blueprint('wishlist', __name__)


def _not_found():
    return respond({'success': False, 'message': 'Product not found'},
                   request.referrer or url_for('main.index'),
                   'Product not found.', 'danger', status=404)


@wishlist_bp.route('/')
def view_wishlist():
    return jsonify(get_wishlist().to_dict())


@wishlist_bp.route('/add', methods=['POST'])
def add_to_wishlist():
    product = get_product(request_value('product_id', type=int))
    if product is None:
        return _not_found()

    wishlist = get_wishlist()
    wishlist.add_item(product)
    return respond({'success': True, 'wishlist_count': wishlist.count, 'in_wishlist': True},
                   request.referrer or url_for('wishlist.view_wishlist'),
                   f'{product.name} added to wishlist!')


@wishlist_bp.route('/remove/<int:product_id>', methods=['POST'])
def remove_from_wishlist(product_id):
    wishlist = get_wishlist()
    wishlist.remove_item(product_id)
    return respond({'success': True, 'wishlist_count': wishlist.count, 'in_wishlist': False},
                   request.referrer or url_for('wishlist.view_wishlist'),
                   'Item removed from wishlist.')


@wishlist_bp.route('/toggle', methods=['POST'])
def toggle_wishlist():
    """Heart button: save the product, or unsave it when already saved."""
    product = get_product(request_value('product_id', type=int))
    if product is None:
        return _not_found()

    wishlist = get_wishlist()
    if wishlist.is_in_wishlist(product.id):
        wishlist.remove_item(product.id)
        message = f'{product.name} removed from wishlist.'
    else:
        wishlist.add_item(product)
        message = f'{product.name} added to wishlist!'

    in_wishlist = wishlist.is_in_wishlist(product.id)
    return respond({'success': True, 'wishlist_count': wishlist.count, 'in_wishlist': in_wishlist},
                   request.referrer or url_for('wishlist.view_wishlist'), message)


@wishlist_bp.route('/move-to-cart/<int:product_id>', methods=['POST'])
def move_to_cart(product_id):
    """Add a saved product to the cart and drop it from the wishlist."""
    product = get_product(product_id)
    if product is None:
        return _not_found()

    cart = get_cart()
    wishlist = get_wishlist()
    cart.add_item(product)
    wishlist.remove_item(product.id)
    return respond({'success': True, 'cart_count': cart.total_items, 'wishlist_count': wishlist.count},
                   url_for('wishlist.view_wishlist'), f'{product.name} moved to cart.')


@wishlist_bp.route('/clear', methods=['POST'])
def clear_wishlist():
    wishlist = get_wishlist()
    wishlist.clear_wishlist()
    return respond({'success': True, 'wishlist_count': 0},
                   url_for('wishlist.view_wishlist'), 'Wishlist cleared.')
