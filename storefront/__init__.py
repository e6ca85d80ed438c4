"""Flask application factory."""

import os
from flask import Flask, jsonify
from .config import config, basedir
from .extensions import db, login_manager, bcrypt, csrf, mail, dynamo
from .logging import configure_logging


def create_app(config_name=None, document_store=None):
    """Create and configure the Flask application.

    ``document_store`` replaces the DynamoDB-backed store, e.g. in tests.
    """
    if config_name is None:
        config_name = os.environ.get('FLASK_CONFIG', 'development')

    app = Flask(__name__)
    app.config.from_object(config[config_name])
    configure_logging(app)

    # Initialize extensions
    db.init_app(app)
    login_manager.init_app(app)
    bcrypt.init_app(app)
    csrf.init_app(app)
    mail.init_app(app)
    dynamo.init_app(app, store=document_store)

    # Register blueprints
    from .routes import register_blueprints
    register_blueprints(app)

    # User loader for Flask-Login
    from .services.identity_service import load_user
    login_manager.user_loader(load_user)

    # Local snapshot table
    uri = app.config['SQLALCHEMY_DATABASE_URI']
    if uri.startswith('sqlite:///') and ':memory:' not in uri:
        os.makedirs(os.path.join(basedir, 'instance'), exist_ok=True)
    from . import models  # noqa: F401
    with app.app_context():
        db.create_all()

    # Error handlers
    @app.errorhandler(404)
    def not_found_error(error):
        return jsonify({'success': False, 'message': 'Not found'}), 404

    @app.errorhandler(405)
    def method_not_allowed_error(error):
        return jsonify({'success': False, 'message': 'Method not allowed'}), 405

    @app.errorhandler(500)
    def internal_error(error):
        db.session.rollback()
        return jsonify({'success': False, 'message': 'Something went wrong. Please try again.'}), 500

    app.logger.info('Storefront started with %s configuration', config_name)
    return app
