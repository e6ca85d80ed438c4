"""Local snapshot store.

A browser-scoped key/value cache of JSON strings. The browser is identified by
a random id kept in its session cookie, so the snapshots follow the browser
the same way ``localStorage`` would.
"""

import json
import logging
import uuid

from flask import session
from sqlalchemy.exc import IntegrityError

from ..exceptions import SnapshotDecodeError
from ..extensions import db
from ..models.snapshot import LocalSnapshot

logger = logging.getLogger(__name__)

CART_KEY = 'cart'
WISHLIST_KEY = 'wishlist'
OFFLINE_ORDERS_KEY = 'offlineOrders'


def user_key(user_id):
    """Key of the local profile fallback for a user."""
    return f'user_{user_id}'


def current_browser_id():
    """Return the id of the calling browser, assigning one on first use."""
    browser_id = session.get('browser_id')
    if browser_id is None:
        browser_id = uuid.uuid4().hex
        session['browser_id'] = browser_id
        session.permanent = True
    return browser_id


class LocalSnapshotStore:
    """Snapshot values of one browser."""

    def __init__(self, browser_id):
        self.browser_id = browser_id

    def _entry(self, key):
        return LocalSnapshot.query.filter_by(browser_id=self.browser_id, key=key).first()

    def get(self, key):
        entry = self._entry(key)
        return entry.value if entry else None

    def set(self, key, value):
        entry = self._entry(key)
        if entry:
            entry.value = value
            db.session.commit()
            return

        db.session.add(LocalSnapshot(browser_id=self.browser_id, key=key, value=value))
        try:
            db.session.commit()
        except IntegrityError:
            # A concurrent request from the same browser inserted the key first
            db.session.rollback()
            logger.info('Snapshot %s inserted concurrently, updating instead', key)
            self._entry(key).value = value
            db.session.commit()

    def remove(self, key):
        LocalSnapshot.query.filter_by(browser_id=self.browser_id, key=key).delete()
        db.session.commit()

    def get_json(self, key):
        """Parse the value under ``key``; None when the key is absent."""
        raw = self.get(key)
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except ValueError as e:
            raise SnapshotDecodeError(f'Snapshot {key!r} is not valid JSON') from e

    def set_json(self, key, value):
        self.set(key, json.dumps(value))
