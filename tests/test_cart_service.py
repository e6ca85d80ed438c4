import random

from storefront.catalog import PRODUCTS, get_product
from storefront.services.cart_service import CartService, parse_items
from storefront.models.cart import CartLineItem


def test_add_item_inserts_then_increments(memory_repository):
    cart = CartService(memory_repository()).load()
    saree = get_product(1)

    cart.add_item(saree)
    cart.add_item(saree)

    assert len(cart.items) == 1
    assert cart.get_item(1).quantity == 2
    assert cart.total_items == 2
    assert cart.subtotal == 1998


def test_every_mutation_writes_full_list(memory_repository):
    repository = memory_repository()
    cart = CartService(repository).load()

    cart.add_item(get_product(1))
    cart.add_item(get_product(4))
    cart.update_quantity(4, 3)

    assert len(repository.saves) == 3
    assert repository.saves[-1] == [
        get_product(1).to_cart_item().to_dict(),
        dict(get_product(4).to_cart_item().to_dict(), quantity=3),
    ]


def test_update_quantity_to_zero_removes_line(memory_repository):
    cart = CartService(memory_repository()).load()
    cart.add_item(get_product(2))

    cart.update_quantity(2, 0)

    assert cart.is_empty
    assert cart.get_item(2) is None


def test_update_quantity_of_missing_product_changes_nothing(memory_repository):
    cart = CartService(memory_repository()).load()
    cart.add_item(get_product(2))

    cart.update_quantity(99, 5)

    assert [item.id for item in cart.items] == [2]
    assert cart.total_items == 1


def test_remove_item_drops_only_that_line(memory_repository):
    cart = CartService(memory_repository()).load()
    cart.add_item(get_product(2))
    cart.add_item(get_product(3))

    cart.remove_item(2)

    assert [item.id for item in cart.items] == [3]


def test_clear_cart_clears_repository(memory_repository):
    repository = memory_repository()
    cart = CartService(repository).load()
    cart.add_item(get_product(5))

    cart.clear_cart()

    assert cart.is_empty
    assert repository.cleared == 1
    assert repository.stored is None


def test_subtotal_uses_base_price_without_sale(memory_repository):
    cart = CartService(memory_repository()).load()
    cart.add_item(get_product(4))

    assert get_product(4).sale_price is None
    assert cart.subtotal == get_product(4).price


def test_load_drops_duplicates_malformed_and_empty_lines(memory_repository):
    stored = [
        {'id': 1, 'name': 'A', 'price': 100, 'sale_price': None, 'image': '', 'quantity': 2},
        {'id': 1, 'name': 'A again', 'price': 100, 'sale_price': None, 'image': '', 'quantity': 7},
        {'name': 'no id'},
        {'id': 'x'},
        {'id': 2, 'name': 'B', 'price': 50, 'sale_price': None, 'image': '', 'quantity': 0},
    ]
    cart = CartService(memory_repository(stored)).load()

    assert [(item.id, item.quantity) for item in cart.items] == [(1, 2)]


def test_parse_items_keeps_first_occurrence():
    items = parse_items([{'id': 3, 'quantity': 1}, {'id': 3, 'quantity': 4}], CartLineItem.from_dict)
    assert len(items) == 1
    assert items[0].quantity == 1


def test_invariants_hold_for_random_operation_sequences(memory_repository):
    rng = random.Random(20240611)
    for _ in range(50):
        cart = CartService(memory_repository()).load()
        for _ in range(30):
            product = rng.choice(PRODUCTS)
            operation = rng.choice(['add', 'add', 'remove', 'update'])
            if operation == 'add':
                cart.add_item(product)
            elif operation == 'remove':
                cart.remove_item(product.id)
            else:
                cart.update_quantity(product.id, rng.randint(-1, 4))

            ids = [item.id for item in cart.items]
            assert len(ids) == len(set(ids))
            assert all(item.quantity >= 1 for item in cart.items)
            assert cart.subtotal == sum(item.effective_price * item.quantity for item in cart.items)
            assert cart.total_items == sum(item.quantity for item in cart.items)
