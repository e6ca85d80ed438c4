"""Session provider and identity service.

Accounts live in the ``accounts`` collection of the remote document store,
keyed by lower-cased e-mail. The signed-in identity is carried by the Flask
session through Flask-Login; profile documents in ``users`` fall back to the
local snapshot key ``user_<uid>`` when the remote store is unavailable.
"""

import logging
import smtplib
import uuid
from datetime import datetime, timezone

from flask import session, url_for
from flask_login import current_user, login_user, logout_user
from flask_mail import Message
from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer
from sqlalchemy.exc import SQLAlchemyError

from ..exceptions import AuthError, RemoteStoreError
from ..extensions import bcrypt, mail
from ..models.user import User
from ..repositories import RemoteAvailability
from ..stores.snapshot import user_key

logger = logging.getLogger(__name__)

ACCOUNTS_COLLECTION = 'accounts'
USERS_COLLECTION = 'users'

AUTH_ERROR_KEY = 'auth_error'
IDENTITY_KEY = 'identity'

MIN_PASSWORD_LENGTH = 6

EMAIL_IN_USE_MESSAGE = 'This email is already in use. Please try another email or sign in.'
WEAK_PASSWORD_MESSAGE = 'Password is too weak. Please use a stronger password.'
INVALID_CREDENTIALS_MESSAGE = 'Invalid email or password. Please try again.'
USER_NOT_FOUND_MESSAGE = 'No account found with this email address.'
PROVIDER_UNAVAILABLE_MESSAGE = ('Google sign-in is not available in this environment. '
                                'Please use email/password sign-in instead.')


def _utcnow_iso():
    return datetime.now(timezone.utc).isoformat()


def normalize_email(email):
    return (email or '').strip().lower()


class SessionProvider:
    """Current signed-in identity and the last identity error of this browser."""

    @property
    def identity(self):
        if current_user and current_user.is_authenticated:
            return current_user
        return None

    @property
    def user_id(self):
        identity = self.identity
        return identity.uid if identity else None

    @property
    def last_error(self):
        return session.get(AUTH_ERROR_KEY)

    def set_error(self, message):
        session[AUTH_ERROR_KEY] = message

    def clear_error(self):
        session.pop(AUTH_ERROR_KEY, None)

    def start(self, user, remember=False):
        session[IDENTITY_KEY] = user.to_dict()
        login_user(user, remember=remember)

    def end(self):
        logout_user()
        session.pop(IDENTITY_KEY, None)


def load_user(user_id):
    """Flask-Login user loader; the identity is kept in the session."""
    data = session.get(IDENTITY_KEY)
    if data and data.get('uid') == user_id:
        return User.from_dict(data)
    return None


class IdentityService:
    """Sign-up, sign-in, sign-out and password reset."""

    def __init__(self, documents, snapshots, sessions, secret_key,
                 authorized_domains=(), reset_salt='password-reset', reset_max_age=3600):
        self.documents = documents
        self.snapshots = snapshots
        self.sessions = sessions
        self.secret_key = secret_key
        self.authorized_domains = list(authorized_domains)
        self.reset_salt = reset_salt
        self.reset_max_age = reset_max_age

    def _fail(self, message, code=None):
        self.sessions.set_error(message)
        raise AuthError(message, code)

    def _serializer(self):
        return URLSafeTimedSerializer(self.secret_key, salt=self.reset_salt)

    def sign_up(self, email, password, display_name):
        self.sessions.clear_error()
        email = normalize_email(email)

        if len(password or '') < MIN_PASSWORD_LENGTH:
            self._fail(WEAK_PASSWORD_MESSAGE, 'weak-password')

        try:
            if self.documents.get(ACCOUNTS_COLLECTION, email) is not None:
                self._fail(EMAIL_IN_USE_MESSAGE, 'email-already-in-use')

            uid = uuid.uuid4().hex
            self.documents.merge(ACCOUNTS_COLLECTION, email, {
                'uid': uid,
                'email': email,
                'display_name': display_name,
                'password_hash': bcrypt.generate_password_hash(password).decode('utf-8'),
                'created_at': _utcnow_iso(),
            })
        except RemoteStoreError:
            logger.exception('Error signing up %s', email)
            self._fail('Failed to sign up. Please try again.', 'unavailable')

        user = User(uid=uid, email=email, display_name=display_name)
        self.sessions.start(user)
        self.update_user_profile(user.uid, {
            'display_name': display_name,
            'email': email,
            'created_at': _utcnow_iso(),
        })
        logger.info('User %s signed up', uid)
        return user

    def sign_in(self, email, password, remember=False):
        self.sessions.clear_error()
        email = normalize_email(email)

        try:
            account = self.documents.get(ACCOUNTS_COLLECTION, email)
        except RemoteStoreError:
            logger.exception('Error signing in %s', email)
            self._fail('Failed to sign in. Please try again.', 'unavailable')

        if not account or not bcrypt.check_password_hash(account.get('password_hash', ''), password or ''):
            self._fail(INVALID_CREDENTIALS_MESSAGE, 'invalid-credentials')

        user = User(uid=account['uid'], email=email, display_name=account.get('display_name'))
        self.sessions.start(user, remember=remember)
        self.update_user_profile(user.uid, {
            'display_name': user.display_name,
            'email': email,
            'last_login': _utcnow_iso(),
        })
        logger.info('User %s signed in', user.uid)
        return user

    def sign_out(self):
        self.sessions.clear_error()
        self.sessions.end()

    def update_user_profile(self, user_id, data):
        """Merge profile fields remotely, or keep them locally when that fails."""
        profile = dict(data, last_updated=_utcnow_iso())
        availability = RemoteAvailability(USERS_COLLECTION)

        if availability.reachable:
            try:
                self.documents.merge(USERS_COLLECTION, user_id, profile)
                return True
            except RemoteStoreError:
                logger.exception('Error updating user profile %s', user_id)
                availability.mark_unreachable()

        try:
            self.snapshots.set_json(user_key(user_id), profile)
        except SQLAlchemyError:
            logger.exception('Error saving user profile %s locally', user_id)
        return False

    def send_password_reset(self, email):
        """Mail a password reset link; returns the token that was sent."""
        self.sessions.clear_error()
        email = normalize_email(email)

        try:
            account = self.documents.get(ACCOUNTS_COLLECTION, email)
        except RemoteStoreError:
            logger.exception('Error looking up %s for password reset', email)
            self._fail('Failed to send password reset email. Please try again.', 'unavailable')

        if account is None:
            self._fail(USER_NOT_FOUND_MESSAGE, 'user-not-found')

        token = self._serializer().dumps(email)
        link = url_for('auth.reset_password', token=token, _external=True)
        message = Message(
            subject='Reset your Sunshine Saree password',
            recipients=[email],
            body=(f'Hello {account.get("display_name") or ""},\n\n'
                  f'Use the link below to choose a new password:\n{link}\n\n'
                  'If you did not ask for a reset you can ignore this email.'),
        )
        try:
            mail.send(message)
        except (smtplib.SMTPException, OSError):
            logger.exception('Error sending password reset email to %s', email)
            self._fail('Failed to send password reset email. Please try again.', 'mail-failed')

        logger.info('Password reset email sent to %s', email)
        return token

    def reset_password(self, token, password):
        self.sessions.clear_error()

        try:
            email = self._serializer().loads(token, max_age=self.reset_max_age)
        except SignatureExpired:
            self._fail('This password reset link has expired. Please request a new one.', 'expired-token')
        except BadSignature:
            self._fail('This password reset link is invalid.', 'invalid-token')

        if len(password or '') < MIN_PASSWORD_LENGTH:
            self._fail(WEAK_PASSWORD_MESSAGE, 'weak-password')

        try:
            if self.documents.get(ACCOUNTS_COLLECTION, email) is None:
                self._fail(USER_NOT_FOUND_MESSAGE, 'user-not-found')
            self.documents.merge(ACCOUNTS_COLLECTION, email, {
                'password_hash': bcrypt.generate_password_hash(password).decode('utf-8'),
            })
        except RemoteStoreError:
            logger.exception('Error resetting password for %s', email)
            self._fail('Failed to reset password. Please try again.', 'unavailable')

    def is_provider_sign_in_available(self, hostname):
        """Third-party popup sign-in only works on allow-listed hosts."""
        return hostname in self.authorized_domains

    def require_provider_sign_in(self, hostname):
        self.sessions.clear_error()
        if not self.is_provider_sign_in_available(hostname):
            self._fail(PROVIDER_UNAVAILABLE_MESSAGE, 'unauthorized-domain')
