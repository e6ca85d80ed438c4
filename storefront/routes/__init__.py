"""HTTP blueprints of the storefront."""

from flask import Flask


def register_blueprints(app: Flask):
    from .auth import auth_bp
    from .cart import cart_bp
    from .main import main_bp
    from .orders import orders_bp
    from .wishlist import wishlist_bp

    for blueprint, prefix in (
        (main_bp, None),
        (auth_bp, '/auth'),
        (cart_bp, '/cart'),
        (wishlist_bp, '/wishlist'),
        (orders_bp, '/orders'),
    ):
        app.register_blueprint(blueprint, url_prefix=prefix)
