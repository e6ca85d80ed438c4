"""Two-tier list repositories.

Cart and wishlist items live in two replicas: the local snapshot of the
browser and a per-user document in the remote store. ``FallbackListRepository``
composes both:

* load: local snapshot first, then the remote document overwrites it when a
  user is signed in, the remote store is believed reachable and the document
  exists.
* save/clear: local snapshot always, then the remote document when a user is
  signed in and the remote store is believed reachable.

A remote failure marks the remote store unreachable for the rest of the
browser session and is never raised to the caller.
"""

import logging

from flask import session

from .exceptions import RemoteStoreError, SnapshotDecodeError

logger = logging.getLogger(__name__)

UNREACHABLE_SESSION_KEY = 'remote_unreachable'


class RemoteAvailability:
    """Session-scoped flag telling whether a remote collection may be tried."""

    def __init__(self, name):
        self.name = name

    @property
    def reachable(self):
        return self.name not in session.get(UNREACHABLE_SESSION_KEY, [])

    def mark_unreachable(self):
        unreachable = list(session.get(UNREACHABLE_SESSION_KEY, []))
        if self.name not in unreachable:
            unreachable.append(self.name)
            session[UNREACHABLE_SESSION_KEY] = unreachable
        logger.warning('Remote store marked unreachable for %s', self.name)


class LocalListRepository:
    """Item list stored under a fixed snapshot key."""

    def __init__(self, snapshots, key):
        self.snapshots = snapshots
        self.key = key

    def load(self):
        try:
            items = self.snapshots.get_json(self.key)
        except SnapshotDecodeError:
            logger.exception('Error parsing %s snapshot', self.key)
            return None
        if items is not None and not isinstance(items, list):
            logger.error('Snapshot %s is not a list', self.key)
            return None
        return items

    def save(self, items):
        self.snapshots.set_json(self.key, items)

    def clear(self):
        self.snapshots.remove(self.key)


class RemoteListRepository:
    """Item list kept in the ``items`` field of a per-user document."""

    def __init__(self, documents, collection, user_id):
        self.documents = documents
        self.collection = collection
        self.user_id = user_id

    def load(self):
        document = self.documents.get(self.collection, self.user_id)
        if document is None:
            return None
        return list(document.get('items') or [])

    def save(self, items):
        self.documents.merge(self.collection, self.user_id, {'items': items})

    def clear(self):
        self.save([])


class FallbackListRepository:
    """Local replica with a best-effort remote replica on top."""

    def __init__(self, local, remote, availability):
        self.local = local
        self.remote = remote
        self.availability = availability

    @property
    def remote_enabled(self):
        return self.remote is not None and self.availability.reachable

    def load(self):
        items = self.local.load() or []

        if self.remote_enabled:
            try:
                remote_items = self.remote.load()
            except RemoteStoreError:
                logger.exception('Error loading %s from remote store', self.remote.collection)
                self.availability.mark_unreachable()
            else:
                if remote_items is not None:
                    items = remote_items

        return items

    def save(self, items):
        self.local.save(items)

        if self.remote_enabled:
            try:
                self.remote.save(items)
            except RemoteStoreError:
                logger.exception('Error saving %s to remote store', self.remote.collection)
                self.availability.mark_unreachable()

    def clear(self):
        self.local.clear()

        if self.remote_enabled:
            try:
                self.remote.clear()
            except RemoteStoreError:
                logger.exception('Error clearing %s in remote store', self.remote.collection)
                self.availability.mark_unreachable()
