"""Authentication routes."""

from flask import Blueprint, jsonify, redirect, request, url_for
from flask_login import current_user
from flask_wtf.csrf import generate_csrf

from storefront.exceptions import AuthError
from storefront.forms.auth import ForgotPasswordForm, LoginForm, RegistrationForm, ResetPasswordForm
from storefront.services import get_cart, get_identity_service, get_session_provider, get_wishlist
from storefront.utils.http import respond

auth_bp = Blueprint('auth', __name__)


def _hostname():
    return request.host.split(':')[0]


def _form_errors(form):
    return jsonify({'success': False, 'errors': {k: v[0] for k, v in form.errors.items() if v}}), 400


def _auth_failed(error, status=400):
    return respond({'success': False, 'message': error.message, 'code': error.code},
                   request.referrer or url_for('main.index'),
                   error.message, 'danger', status=status)


@auth_bp.route('/session')
def session_info():
    """Current identity, last auth error and counters for the header."""
    sessions = get_session_provider()
    identity = sessions.identity
    return jsonify({
        'user': identity.to_dict() if identity else None,
        'auth_error': sessions.last_error,
        'csrf_token': generate_csrf(),
        'cart_count': get_cart().total_items,
        'wishlist_count': get_wishlist().count,
        'google_auth_available': get_identity_service().is_provider_sign_in_available(_hostname()),
    })


@auth_bp.route('/register', methods=['POST'])
def register():
    """Customer registration."""
    if current_user.is_authenticated:
        return redirect(url_for('main.index'))

    form = RegistrationForm()
    if not form.validate_on_submit():
        return _form_errors(form)

    try:
        user = get_identity_service().sign_up(form.email.data, form.password.data, form.display_name.data)
    except AuthError as e:
        return _auth_failed(e)

    return respond({'success': True, 'user': user.to_dict()}, url_for('main.index'),
                   'Registration successful!', status=201)


@auth_bp.route('/login', methods=['POST'])
def login():
    """User login."""
    if current_user.is_authenticated:
        return redirect(url_for('main.index'))

    form = LoginForm()
    if not form.validate_on_submit():
        return _form_errors(form)

    try:
        user = get_identity_service().sign_in(form.email.data, form.password.data, form.remember.data)
    except AuthError as e:
        return _auth_failed(e, status=401)

    next_page = request.args.get('next')
    if next_page and (not next_page.startswith('/') or next_page.startswith('//')):
        next_page = None
    return respond({'success': True, 'user': user.to_dict()}, next_page or url_for('main.index'),
                   f'Welcome back, {user.display_name or user.email}!')


@auth_bp.route('/logout', methods=['POST'])
def logout():
    """User logout."""
    get_identity_service().sign_out()
    return respond({'success': True}, url_for('main.index'), 'You have been logged out.', 'info')


@auth_bp.route('/providers')
def providers():
    """Which third-party sign-in providers can be offered on this host."""
    available = get_identity_service().is_provider_sign_in_available(_hostname())
    return jsonify({'google': {'available': available}})


@auth_bp.route('/google', methods=['POST'])
def google_sign_in():
    """Gate for the browser-side Google popup sign-in."""
    try:
        get_identity_service().require_provider_sign_in(_hostname())
    except AuthError as e:
        return _auth_failed(e, status=403)
    return jsonify({'success': True, 'available': True})


@auth_bp.route('/forgot-password', methods=['POST'])
def forgot_password():
    """Forgot password - request reset."""
    form = ForgotPasswordForm()
    if not form.validate_on_submit():
        return _form_errors(form)

    try:
        get_identity_service().send_password_reset(form.email.data)
    except AuthError as e:
        status = 404 if e.code == 'user-not-found' else 400
        return _auth_failed(e, status=status)

    return respond({'success': True}, url_for('main.index'),
                   'Password reset email sent. Please check your inbox.', 'info')


@auth_bp.route('/reset-password/<token>', methods=['POST'])
def reset_password(token):
    """Reset password with token."""
    form = ResetPasswordForm()
    if not form.validate_on_submit():
        return _form_errors(form)

    try:
        get_identity_service().reset_password(token, form.password.data)
    except AuthError as e:
        return _auth_failed(e)

    return respond({'success': True}, url_for('main.index'),
                   'Your password has been reset. Please sign in.')
