"""Flask extension instances."""

import boto3
from flask import current_app
from flask_bcrypt import Bcrypt
from flask_login import LoginManager
from flask_mail import Mail
from flask_sqlalchemy import SQLAlchemy
from flask_wtf.csrf import CSRFProtect

from .stores.documents import DynamoDocumentStore


class DynamoDB:
    """Binds the remote document store to the application."""

    def __init__(self, app=None):
        if app is not None:
            self.init_app(app)

    def init_app(self, app, store=None):
        if store is None:
            resource = boto3.resource(
                'dynamodb',
                region_name=app.config['AWS_REGION'],
                endpoint_url=app.config.get('DYNAMODB_ENDPOINT_URL'),
            )
            store = DynamoDocumentStore(resource, app.config['DYNAMODB_TABLE_PREFIX'])
        app.extensions['document_store'] = store

    @property
    def store(self):
        return current_app.extensions['document_store']


db = SQLAlchemy()
login_manager = LoginManager()
bcrypt = Bcrypt()
csrf = CSRFProtect()
mail = Mail()
dynamo = DynamoDB()
