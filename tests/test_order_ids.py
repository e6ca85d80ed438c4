import re

from storefront.utils.order_ids import format_order_id, generate_order_id, to_base36


def test_to_base36():
    assert to_base36(0) == '0'
    assert to_base36(35) == 'Z'
    assert to_base36(36) == '10'


def test_generated_id_is_timestamp_plus_random_suffix():
    order_id = generate_order_id(now=1700000000.0)

    assert order_id.startswith(to_base36(1700000000000))
    assert len(order_id) == len(to_base36(1700000000000)) + 5
    assert re.fullmatch(r'[0-9A-Z]+', order_id)


def test_generated_ids_differ():
    assert generate_order_id(now=1.0) != generate_order_id(now=2.0)


def test_format_order_id():
    assert format_order_id('lq2x9abcd1') == 'SUN-LQ2X9A'
    assert format_order_id('abc') == 'SUN-ABC'
    assert format_order_id('') == 'SUN-000000'
    assert format_order_id(None) == 'SUN-000000'
    assert format_order_id('abcdefgh', brand='TST') == 'TST-ABCDEF'
