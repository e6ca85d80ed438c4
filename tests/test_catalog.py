from storefront.catalog import PRODUCTS, filter_products, get_product, search_products


def test_product_ids_are_unique():
    ids = [product.id for product in PRODUCTS]
    assert len(ids) == len(set(ids))


def test_get_product():
    assert get_product(1).sale_price == 999
    assert get_product(42) is None


def test_discount_percentage():
    assert get_product(1).discount_percentage == 50
    assert get_product(4).discount_percentage == 0


def test_filter_by_category_and_sale():
    products = filter_products(categories=['silk'], on_sale=True)
    assert [p.id for p in products] == [1, 2, 6]


def test_filter_by_price_range_sorted():
    products = filter_products(price_range=(0, 1000), sort='price-low-high')
    assert all(p.current_price <= 1000 for p in products)
    prices = [p.current_price for p in products]
    assert prices == sorted(prices)


def test_search_is_case_insensitive():
    assert [p.id for p in search_products('KANJIVARAM')] == [2]
    assert search_products('   ') == []


def test_product_detail_route(client):
    data = client.get('/products/1').get_json()['product']

    assert data['current_price'] == 999
    assert data['in_wishlist'] is False
    assert client.get('/products/999').status_code == 404


def test_product_view_is_tracked_for_signed_in_users(client, register, store):
    client.get('/products/1')
    assert store.collections['productViews'] == {}

    register()
    client.get('/products/1')

    events = list(store.collections['productViews'].values())
    assert len(events) == 1
    assert events[0]['action'] == 'product_view'
    assert events[0]['product_id'] == 1
    assert events[0]['viewed_at'].endswith('+00:00')


def test_tracking_failure_does_not_break_page(client, register, store):
    register()
    store.fail = True

    assert client.get('/products/2').status_code == 200


def test_product_list_route_filters_and_sorts(client):
    data = client.get('/products?category=silk&sort=price-high-low').get_json()

    assert [p['id'] for p in data['products']] == [6, 2, 1]
    assert data['count'] == 3


def test_product_list_ignores_unknown_sort(client):
    data = client.get('/products?sort=cheapest-first').get_json()

    assert [p['id'] for p in data['products']] == [1, 2, 3, 4, 5, 6]
