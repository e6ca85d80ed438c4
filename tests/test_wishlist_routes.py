def test_toggle_adds_then_removes(client):
    response = client.post('/wishlist/toggle', json={'product_id': 3})
    assert response.get_json()['in_wishlist'] is True

    response = client.post('/wishlist/toggle', json={'product_id': 3})
    assert response.get_json() == {'success': True, 'wishlist_count': 0, 'in_wishlist': False}


def test_add_twice_keeps_one_entry(client):
    client.post('/wishlist/add', json={'product_id': 3})
    client.post('/wishlist/add', json={'product_id': 3})

    assert client.get('/wishlist/').get_json()['count'] == 1


def test_move_to_cart(client):
    client.post('/wishlist/add', json={'product_id': 6})

    response = client.post('/wishlist/move-to-cart/6', json={})

    assert response.get_json()['cart_count'] == 1
    assert response.get_json()['wishlist_count'] == 0


def test_unknown_product(client):
    assert client.post('/wishlist/add', json={'product_id': 77}).status_code == 404


def test_signed_in_wishlist_is_written_remotely(client, register, store):
    register()
    uid = client.get('/auth/session').get_json()['user']['uid']

    client.post('/wishlist/add', json={'product_id': 5})

    assert [item['id'] for item in store.collections['wishlists'][uid]['items']] == [5]
