"""Request and response helpers shared by the blueprints."""

from flask import flash, jsonify, redirect, request


def wants_json():
    """AJAX and JSON clients get JSON, plain form posts get flash + redirect."""
    if request.is_json:
        return True
    if request.headers.get('X-Requested-With') == 'XMLHttpRequest':
        return True
    best = request.accept_mimetypes.best_match(['application/json', 'text/html'])
    return best == 'application/json' and request.accept_mimetypes[best] > request.accept_mimetypes['text/html']


def request_value(name, default=None, type=None):
    """Read a value from the JSON body, the form or the query string."""
    if request.is_json:
        data = request.get_json(silent=True) or {}
        value = data.get(name, default)
    else:
        value = request.values.get(name, default)
    if type is not None and value is not None:
        try:
            return type(value)
        except (TypeError, ValueError):
            return default
    return value


def respond(payload, redirect_to, message=None, category='success', status=200):
    if wants_json():
        return jsonify(payload), status
    if message:
        flash(message, category)
    return redirect(redirect_to)
