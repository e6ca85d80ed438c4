"""Product view and action events."""

import logging
import time
from datetime import datetime, timezone

from ..exceptions import RemoteStoreError

logger = logging.getLogger(__name__)

PRODUCT_VIEWS_COLLECTION = 'productViews'


def track_product_action(documents, user_id, product, action):
    """Record a product event for a signed-in user.

    Tracking is non-critical: store failures are logged and swallowed.
    """
    event_id = f'{user_id}_{product.id}_{int(time.time() * 1000)}'
    try:
        documents.merge(PRODUCT_VIEWS_COLLECTION, event_id, {
            'user_id': user_id,
            'product_id': product.id,
            'product_name': product.name,
            'product_image': product.image,
            'action': action,
            'viewed_at': datetime.now(timezone.utc).isoformat(),
        })
    except RemoteStoreError:
        logger.exception('Error tracking product action %s', action)
        return None
    return event_id
