import pytest

from storefront.services.order_service import OrderService


@pytest.fixture
def cart_with_sarees(client):
    client.post('/cart/add', json={'product_id': 1})
    client.post('/cart/add', json={'product_id': 1})
    return client


def test_checkout_with_empty_cart_redirects_to_cart(client):
    response = client.get('/orders/checkout')

    assert response.status_code == 302
    assert response.headers['Location'].endswith('/cart/')


def test_checkout_summary(cart_with_sarees):
    data = cart_with_sarees.get('/orders/checkout').get_json()

    assert data['amounts'] == {'subtotal': 1998, 'shipping': 0, 'tax': 360, 'total': 2358}
    assert data['payment_methods'] == ['credit-card', 'cod']


def test_checkout_validation_errors(cart_with_sarees, checkout_data):
    checkout_data['card_cvv'] = '1'

    response = cart_with_sarees.post('/orders/checkout', json=checkout_data)

    assert response.status_code == 400
    assert response.get_json()['errors'] == {'card_cvv': 'CVV must be 3 or 4 digits'}
    assert cart_with_sarees.get('/cart/').get_json()['total_items'] == 2


def test_form_checkout_redirects_to_confirmation(cart_with_sarees, checkout_data, store):
    response = cart_with_sarees.post('/orders/checkout', data=checkout_data)

    assert response.status_code == 302
    assert '/orders/confirmation?id=' in response.headers['Location']
    order_id = response.headers['Location'].rsplit('=', 1)[1]
    order = store.collections['orders'][order_id]
    assert order['amounts']['total'] == 2358
    assert order['payment'] == {'method': 'credit-card', 'status': 'processing', 'card_last_four': '4242'}
    assert cart_with_sarees.get('/cart/').get_json()['items'] == []


def test_json_checkout_and_confirmation(cart_with_sarees, checkout_data):
    response = cart_with_sarees.post('/orders/checkout', json=checkout_data)

    assert response.status_code == 201
    data = response.get_json()
    assert data['display_id'] == 'SUN-' + data['order_id'][:6].upper()

    confirmation = cart_with_sarees.get(data['redirect']).get_json()
    assert confirmation['source'] == 'remote'
    assert confirmation['order']['id'] == data['order_id']
    assert confirmation['order']['customer']['email'] == 'asha@example.com'
    assert confirmation['display_id'] == data['display_id']


def test_checkout_during_outage_keeps_order_locally(cart_with_sarees, checkout_data, store):
    store.fail = True

    data = cart_with_sarees.post('/orders/checkout', json=checkout_data).get_json()

    assert store.collections['orders'] == {}
    confirmation = cart_with_sarees.get(f"/orders/confirmation/{data['order_id']}").get_json()
    assert confirmation['source'] == 'local'
    assert confirmation['order']['amounts']['total'] == 2358


def test_offline_order_is_not_visible_to_other_browsers(cart_with_sarees, checkout_data, store, app):
    store.fail = True
    order_id = cart_with_sarees.post('/orders/checkout', json=checkout_data).get_json()['order_id']

    confirmation = app.test_client().get(f'/orders/confirmation/{order_id}').get_json()

    assert confirmation['source'] == 'placeholder'


def test_checkout_failure_still_confirms(cart_with_sarees, checkout_data, monkeypatch):
    def explode(self, *args, **kwargs):
        raise RuntimeError('boom')

    monkeypatch.setattr(OrderService, 'build_order', explode)

    response = cart_with_sarees.post('/orders/checkout', json=checkout_data)

    assert response.status_code == 201
    assert 'technical issues' in response.get_json()['message']
    assert cart_with_sarees.get('/cart/').get_json()['items'] == []


def test_confirmation_for_unknown_order_shows_placeholder(client):
    data = client.get('/orders/confirmation?id=abcdef123').get_json()

    assert data['source'] == 'placeholder'
    assert data['display_id'] == 'SUN-ABCDEF'
    assert data['order']['items'] == []
    assert data['order']['amounts']['total'] == 0


def test_confirmation_without_id_goes_home(client):
    response = client.get('/orders/confirmation')

    assert response.status_code == 302
    assert response.headers['Location'].endswith('/')


def test_signed_in_order_carries_user_id(client, register, checkout_data, store):
    register()
    uid = client.get('/auth/session').get_json()['user']['uid']
    client.post('/cart/add', json={'product_id': 4})

    order_id = client.post('/orders/checkout', json=checkout_data).get_json()['order_id']

    order = store.collections['orders'][order_id]
    assert order['customer']['user_id'] == uid
    assert order['amounts'] == {'subtotal': 1899, 'shipping': 0, 'tax': 342, 'total': 2241}
    assert store.collections['carts'][uid]['items'] == []


def test_buy_now_goes_to_checkout(client):
    response = client.post('/products/2/buy-now')

    assert response.status_code == 302
    assert response.headers['Location'].endswith('/orders/checkout')
    assert client.get('/cart/').get_json()['total_items'] == 1


def test_wishlist_survives_checkout(client, checkout_data):
    client.post('/wishlist/add', json={'product_id': 6})
    client.post('/cart/add', json={'product_id': 1})

    response = client.post('/orders/checkout', json=checkout_data)

    assert response.status_code == 201
    assert [item['id'] for item in client.get('/wishlist/').get_json()['items']] == [6]
    assert client.get('/cart/').get_json()['items'] == []
