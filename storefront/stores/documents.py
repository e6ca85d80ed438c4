"""Remote document store client.

Every collection holds JSON-like documents addressed by a string id. The
DynamoDB implementation maps a collection to one table whose hash key is
``id``.
"""

import logging
import uuid
from decimal import Decimal

from botocore.exceptions import BotoCoreError, ClientError

from ..exceptions import RemoteStoreError

logger = logging.getLogger(__name__)

AUTO_ID_LENGTH = 20


class DocumentStore:
    """Interface of the remote document store."""

    def get(self, collection, doc_id):
        """Return the document as a dict, or None when it does not exist."""
        raise NotImplementedError

    def merge(self, collection, doc_id, fields):
        """Write ``fields`` into the document, keeping any other fields.

        The document is created when it does not exist yet.
        """
        raise NotImplementedError

    def add(self, collection, data):
        """Create a new document under a store-assigned id and return the id."""
        raise NotImplementedError


def to_dynamo(value):
    """Convert floats to Decimal, DynamoDB rejects float numbers."""
    if isinstance(value, float):
        return Decimal(str(value))
    if isinstance(value, dict):
        return {k: to_dynamo(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_dynamo(v) for v in value]
    return value


def from_dynamo(value):
    """Convert DynamoDB Decimals back to int or float."""
    if isinstance(value, Decimal):
        if value == value.to_integral_value():
            return int(value)
        return float(value)
    if isinstance(value, dict):
        return {k: from_dynamo(v) for k, v in value.items()}
    if isinstance(value, (list, set)):
        return [from_dynamo(v) for v in value]
    return value


class DynamoDocumentStore(DocumentStore):
    """Document store backed by DynamoDB tables named ``<prefix><collection>``."""

    key_name = 'id'

    def __init__(self, resource, table_prefix=''):
        self.resource = resource
        self.table_prefix = table_prefix
        self._tables = {}

    def table(self, collection):
        if collection not in self._tables:
            self._tables[collection] = self.resource.Table(f'{self.table_prefix}{collection}')
        return self._tables[collection]

    def get(self, collection, doc_id):
        try:
            response = self.table(collection).get_item(Key={self.key_name: doc_id})
        except (ClientError, BotoCoreError) as e:
            raise RemoteStoreError(f'Error getting {collection}/{doc_id}: {e}') from e

        item = response.get('Item')
        if item is None:
            return None
        return from_dynamo(item)

    def merge(self, collection, doc_id, fields):
        if not fields:
            return

        names = {}
        values = {}
        assignments = []
        for index, (field, value) in enumerate(fields.items()):
            names[f'#f{index}'] = field
            values[f':v{index}'] = to_dynamo(value)
            assignments.append(f'#f{index} = :v{index}')

        try:
            self.table(collection).update_item(
                Key={self.key_name: doc_id},
                UpdateExpression='SET ' + ', '.join(assignments),
                ExpressionAttributeNames=names,
                ExpressionAttributeValues=values,
            )
        except (ClientError, BotoCoreError) as e:
            raise RemoteStoreError(f'Error writing {collection}/{doc_id}: {e}') from e

    def add(self, collection, data):
        doc_id = uuid.uuid4().hex[:AUTO_ID_LENGTH]
        item = dict(to_dynamo(data))
        item[self.key_name] = doc_id

        try:
            self.table(collection).put_item(
                Item=item,
                ConditionExpression='attribute_not_exists(#id)',
                ExpressionAttributeNames={'#id': self.key_name},
            )
        except (ClientError, BotoCoreError) as e:
            raise RemoteStoreError(f'Error adding document to {collection}: {e}') from e

        logger.info('Document %s added to %s', doc_id, collection)
        return doc_id
