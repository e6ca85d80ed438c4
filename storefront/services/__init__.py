"""Per-request service objects.

Services are built once per request from the application's stores and the
caller's browser session, and cached on ``flask.g``.
"""

from flask import current_app, g

from ..extensions import dynamo
from ..repositories import (FallbackListRepository, LocalListRepository,
                            RemoteAvailability, RemoteListRepository)
from ..stores.snapshot import (CART_KEY, WISHLIST_KEY, LocalSnapshotStore,
                               current_browser_id)
from .cart_service import CartService
from .identity_service import IdentityService, SessionProvider
from .order_service import OrderService
from .wishlist_service import WishlistService

CARTS_COLLECTION = 'carts'
WISHLISTS_COLLECTION = 'wishlists'


def get_document_store():
    return dynamo.store


def get_snapshot_store():
    if 'snapshots' not in g:
        g.snapshots = LocalSnapshotStore(current_browser_id())
    return g.snapshots


def get_session_provider():
    if 'session_provider' not in g:
        g.session_provider = SessionProvider()
    return g.session_provider


def _list_repository(key, collection):
    user_id = get_session_provider().user_id
    remote = None
    if user_id:
        remote = RemoteListRepository(get_document_store(), collection, user_id)
    return FallbackListRepository(
        local=LocalListRepository(get_snapshot_store(), key),
        remote=remote,
        availability=RemoteAvailability(collection),
    )


def _cached(name, build):
    """Cache per identity so a sign-in within the request rebuilds the aggregate."""
    user_id = get_session_provider().user_id
    cached = g.get(name)
    if cached is None or cached[0] != user_id:
        cached = (user_id, build())
        setattr(g, name, cached)
    return cached[1]


def get_cart():
    return _cached('cart', lambda: CartService(_list_repository(CART_KEY, CARTS_COLLECTION)).load())


def get_wishlist():
    return _cached('wishlist', lambda: WishlistService(
        _list_repository(WISHLIST_KEY, WISHLISTS_COLLECTION)).load())


def get_order_service():
    return OrderService(
        documents=get_document_store(),
        snapshots=get_snapshot_store(),
        cart=get_cart(),
        brand=current_app.config['ORDER_ID_BRAND'],
    )


def get_identity_service():
    config = current_app.config
    return IdentityService(
        documents=get_document_store(),
        snapshots=get_snapshot_store(),
        sessions=get_session_provider(),
        secret_key=config['SECRET_KEY'],
        authorized_domains=config['AUTHORIZED_DOMAINS'],
        reset_salt=config['PASSWORD_RESET_SALT'],
        reset_max_age=config['PASSWORD_RESET_MAX_AGE'],
    )
