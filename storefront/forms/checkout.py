"""Checkout form.

Card details are validated here and never sent anywhere; only the last four
digits end up on the order.
"""

import re
from datetime import date

from flask_wtf import FlaskForm
from wtforms import RadioField, StringField, TextAreaField
from wtforms.validators import DataRequired, Email, Length, Optional, ValidationError

from storefront.services.order_service import PAYMENT_CARD, PAYMENT_COD

EXPIRY_PATTERN = re.compile(r'^(\d{2})/(\d{2})$')


def digits_only(value):
    return (value or '').replace(' ', '')


def is_expired(month, year, today=None):
    """True when the MM/YY expiry lies before the current month."""
    today = today or date.today()
    current_year = today.year % 100
    return year < current_year or (year == current_year and month < today.month)


class CheckoutForm(FlaskForm):
    """Shipping details and payment selection."""
    first_name = StringField('First Name', validators=[
        DataRequired(message='First name is required')
    ])
    last_name = StringField('Last Name', validators=[
        DataRequired(message='Last name is required')
    ])
    email = StringField('Email Address', validators=[
        DataRequired(message='Email is required'),
        Email(message='Please enter a valid email address')
    ])
    phone = StringField('Phone Number', validators=[
        DataRequired(message='Phone number is required')
    ])
    address = StringField('Address', validators=[
        DataRequired(message='Address is required'),
        Length(max=500)
    ])
    city = StringField('City', validators=[
        DataRequired(message='City is required')
    ])
    state = StringField('State', validators=[
        DataRequired(message='State is required')
    ])
    pincode = StringField('Pincode', validators=[
        DataRequired(message='Pincode is required')
    ])
    payment_method = RadioField('Payment Method', default=PAYMENT_CARD, choices=[
        (PAYMENT_CARD, 'Credit Card'),
        (PAYMENT_COD, 'Cash on Delivery'),
    ])
    card_number = StringField('Card Number')
    card_expiry = StringField('Expiry Date (MM/YY)')
    card_cvv = StringField('CVV')
    notes = TextAreaField('Order Notes', validators=[Optional(), Length(max=1000)])

    def _paying_by_card(self):
        return self.payment_method.data == PAYMENT_CARD

    def validate_card_number(self, field):
        if not self._paying_by_card():
            return
        number = digits_only(field.data)
        if not number:
            raise ValidationError('Card number is required')
        if len(number) < 16 or not number.isdigit():
            raise ValidationError('Card number must be 16 digits')

    def validate_card_expiry(self, field):
        if not self._paying_by_card():
            return
        if not field.data:
            raise ValidationError('Expiry date is required')
        match = EXPIRY_PATTERN.match(field.data.strip())
        if not match or not 1 <= int(match.group(1)) <= 12:
            raise ValidationError('Expiry date must be in MM/YY format')
        if is_expired(int(match.group(1)), int(match.group(2))):
            raise ValidationError('Card has expired')

    def validate_card_cvv(self, field):
        if not self._paying_by_card():
            return
        cvv = (field.data or '').strip()
        if not cvv:
            raise ValidationError('CVV is required')
        if not cvv.isdigit() or not 3 <= len(cvv) <= 4:
            raise ValidationError('CVV must be 3 or 4 digits')

    def order_data(self):
        """Submitted values keyed the way the order service reads them."""
        return {
            'first_name': self.first_name.data.strip(),
            'last_name': self.last_name.data.strip(),
            'email': self.email.data.strip(),
            'phone': self.phone.data.strip(),
            'address': self.address.data.strip(),
            'city': self.city.data.strip(),
            'state': self.state.data.strip(),
            'pincode': self.pincode.data.strip(),
            'payment_method': self.payment_method.data,
            'card_number': digits_only(self.card_number.data),
            'notes': (self.notes.data or '').strip(),
        }

    def first_errors(self):
        return {name: messages[0] for name, messages in self.errors.items() if messages}
