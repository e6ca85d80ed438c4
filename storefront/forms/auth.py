"""Sign-in, registration and password reset forms.

Passwords are checked for presence and length only; the identity service
decides everything else.
"""

from flask_wtf import FlaskForm
from wtforms import BooleanField, PasswordField, StringField
from wtforms.validators import DataRequired, Email, EqualTo, Length

from storefront.services.identity_service import MIN_PASSWORD_LENGTH


def _email_field():
    return StringField('Email Address', validators=[
        DataRequired(message='Email is required'),
        Email(message='Please enter a valid email address'),
    ])


def _new_password_fields(label):
    password = PasswordField(label, validators=[
        DataRequired(message='Password is required'),
        Length(min=MIN_PASSWORD_LENGTH,
               message=f'Password must be at least {MIN_PASSWORD_LENGTH} characters'),
    ])
    confirm = PasswordField('Confirm Password', validators=[
        DataRequired(message='Please confirm your password'),
        EqualTo('password', message='Passwords do not match'),
    ])
    return password, confirm


class LoginForm(FlaskForm):
    email = _email_field()
    password = PasswordField('Password', validators=[DataRequired(message='Password is required')])
    remember = BooleanField('Keep me signed in')


class RegistrationForm(FlaskForm):
    """New customer account; signs the customer in on success."""
    display_name = StringField('Your Name', validators=[
        DataRequired(message='Please enter your name'),
        Length(min=2, max=100, message='Name must be between 2 and 100 characters'),
    ])
    email = _email_field()
    password, confirm_password = _new_password_fields('Password')


class ForgotPasswordForm(FlaskForm):
    email = _email_field()


class ResetPasswordForm(FlaskForm):
    password, confirm_password = _new_password_fields('New Password')
