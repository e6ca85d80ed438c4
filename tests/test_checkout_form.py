from datetime import date

import pytest
from werkzeug.datastructures import MultiDict

from storefront.forms.checkout import CheckoutForm, is_expired


def make_form(data):
    return CheckoutForm(formdata=MultiDict(data))


def test_valid_card_checkout(request_ctx, checkout_data):
    form = make_form(checkout_data)

    assert form.validate()
    assert form.order_data()['card_number'] == '4242424242424242'


def test_required_field_messages(request_ctx):
    form = make_form({'payment_method': 'cod'})

    assert not form.validate()
    errors = form.first_errors()
    assert errors['first_name'] == 'First name is required'
    assert errors['email'] == 'Email is required'
    assert errors['pincode'] == 'Pincode is required'
    assert 'card_number' not in errors


def test_invalid_email(request_ctx, checkout_data):
    checkout_data['email'] = 'not-an-email'
    form = make_form(checkout_data)

    assert not form.validate()
    assert form.first_errors()['email'] == 'Please enter a valid email address'


@pytest.mark.parametrize('field, value, message', [
    ('card_number', '', 'Card number is required'),
    ('card_number', '4242 4242', 'Card number must be 16 digits'),
    ('card_expiry', '', 'Expiry date is required'),
    ('card_expiry', '13/30', 'Expiry date must be in MM/YY format'),
    ('card_expiry', '1230', 'Expiry date must be in MM/YY format'),
    ('card_expiry', '01/20', 'Card has expired'),
    ('card_cvv', '', 'CVV is required'),
    ('card_cvv', '12', 'CVV must be 3 or 4 digits'),
    ('card_cvv', '12a', 'CVV must be 3 or 4 digits'),
])
def test_card_validation(request_ctx, checkout_data, field, value, message):
    checkout_data[field] = value
    form = make_form(checkout_data)

    assert not form.validate()
    assert form.first_errors()[field] == message


def test_cash_on_delivery_skips_card_checks(request_ctx, checkout_data):
    checkout_data.update(payment_method='cod', card_number='', card_expiry='', card_cvv='')

    assert make_form(checkout_data).validate()


def test_is_expired():
    today = date(2026, 6, 15)

    assert is_expired(5, 26, today)
    assert not is_expired(6, 26, today)
    assert is_expired(12, 25, today)
    assert not is_expired(1, 27, today)
