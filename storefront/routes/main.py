"""Catalog routes."""

from flask import Blueprint, abort, jsonify, redirect, request, url_for

from storefront.catalog import CATEGORIES, PRODUCTS, SORT_OPTIONS, filter_products, get_product, search_products
from storefront.services import get_cart, get_document_store, get_session_provider, get_wishlist
from storefront.services.tracking import track_product_action

main_bp = Blueprint('main', __name__)


def _price_range():
    min_price = request.args.get('min_price', type=float)
    max_price = request.args.get('max_price', type=float)
    if min_price is None and max_price is None:
        return None
    return (min_price or 0, max_price if max_price is not None else float('inf'))


@main_bp.route('/')
def index():
    """Featured products, optionally limited to one category."""
    category = request.args.get('category', 'all')
    products = PRODUCTS if category == 'all' else [p for p in PRODUCTS if p.category == category]
    return jsonify({
        'products': [p.to_dict() for p in products],
        'categories': CATEGORIES,
    })


@main_bp.route('/products')
def product_list():
    """Collection page with filters and sorting."""
    sort = request.args.get('sort', 'featured')
    if sort not in SORT_OPTIONS:
        sort = 'featured'
    products = filter_products(
        categories=request.args.getlist('category'),
        occasions=request.args.getlist('occasion'),
        colors=request.args.getlist('color'),
        price_range=_price_range(),
        on_sale=request.args.get('on_sale', '').lower() in ('1', 'true', 'on'),
        sort=sort,
    )
    return jsonify({'products': [p.to_dict() for p in products], 'count': len(products)})


@main_bp.route('/products/<int:product_id>')
def product_detail(product_id):
    """Product detail page."""
    product = get_product(product_id)
    if product is None:
        abort(404)

    user_id = get_session_provider().user_id
    if user_id:
        track_product_action(get_document_store(), user_id, product, 'product_view')

    data = product.to_dict()
    data['in_wishlist'] = get_wishlist().is_in_wishlist(product.id)
    return jsonify({'product': data})


@main_bp.route('/products/<int:product_id>/buy-now', methods=['POST'])
def buy_now(product_id):
    """Add the product to the cart and go straight to checkout."""
    product = get_product(product_id)
    if product is None:
        abort(404)

    user_id = get_session_provider().user_id
    if user_id:
        track_product_action(get_document_store(), user_id, product, 'buy_now_click')

    get_cart().add_item(product)
    return redirect(url_for('orders.checkout'))


@main_bp.route('/search')
def search():
    """Search products."""
    query = request.args.get('q', '')
    results = search_products(query)
    return jsonify({'query': query, 'products': [p.to_dict() for p in results]})
