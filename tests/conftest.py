"""Shared fixtures: a testing app wired to an in-memory document store."""

import copy
import uuid
from collections import defaultdict

import pytest

from storefront import create_app
from storefront.exceptions import RemoteStoreError
from storefront.extensions import db
from storefront.stores.documents import DocumentStore


class FakeDocumentStore(DocumentStore):
    """In-memory document store; set ``fail`` to make every call raise."""

    def __init__(self):
        self.collections = defaultdict(dict)
        self.fail = False
        self.calls = []

    def _call(self, operation, collection):
        self.calls.append((operation, collection))
        if self.fail:
            raise RemoteStoreError('remote store unavailable')

    def calls_to(self, collection):
        return [op for op, name in self.calls if name == collection]

    def get(self, collection, doc_id):
        self._call('get', collection)
        document = self.collections[collection].get(doc_id)
        return copy.deepcopy(document) if document is not None else None

    def merge(self, collection, doc_id, fields):
        self._call('merge', collection)
        document = self.collections[collection].setdefault(doc_id, {'id': doc_id})
        document.update(copy.deepcopy(fields))

    def add(self, collection, data):
        self._call('add', collection)
        doc_id = uuid.uuid4().hex[:20]
        document = copy.deepcopy(data)
        document['id'] = doc_id
        self.collections[collection][doc_id] = document
        return doc_id


class MemoryListRepository:
    """Repository stand-in recording every write."""

    def __init__(self, items=None):
        self.stored = items
        self.saves = []
        self.cleared = 0

    def load(self):
        return copy.deepcopy(self.stored)

    def save(self, items):
        self.stored = copy.deepcopy(items)
        self.saves.append(copy.deepcopy(items))

    def clear(self):
        self.stored = None
        self.cleared += 1


VALID_CHECKOUT = {
    'first_name': 'Asha',
    'last_name': 'Rao',
    'email': 'asha@example.com',
    'phone': '9876543210',
    'address': '45 MG Road',
    'city': 'Bangalore',
    'state': 'Karnataka',
    'pincode': '560038',
    'payment_method': 'credit-card',
    'card_number': '4242 4242 4242 4242',
    'card_expiry': '12/99',
    'card_cvv': '123',
    'notes': 'Leave at the door',
}


@pytest.fixture
def store():
    return FakeDocumentStore()


@pytest.fixture
def app(store):
    app = create_app('testing', document_store=store)
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def request_ctx(app):
    with app.test_request_context():
        yield


@pytest.fixture
def checkout_data():
    return dict(VALID_CHECKOUT)


@pytest.fixture
def memory_repository():
    return MemoryListRepository


@pytest.fixture
def register(client):
    def _register(email='meera@example.com', password='silk-saree', name='Meera'):
        return client.post('/auth/register', json={
            'display_name': name,
            'email': email,
            'password': password,
            'confirm_password': password,
        })
    return _register
