"""Local snapshot model."""

from datetime import datetime, timezone
from storefront.extensions import db


def _utcnow():
    return datetime.now(timezone.utc)


class LocalSnapshot(db.Model):
    """Serialized JSON value stored under a fixed key for one browser."""
    __tablename__ = 'local_snapshots'
    __table_args__ = (
        db.UniqueConstraint('browser_id', 'key', name='uq_local_snapshots_browser_key'),
    )

    id = db.Column(db.Integer, primary_key=True)
    browser_id = db.Column(db.String(64), nullable=False, index=True)
    key = db.Column(db.String(150), nullable=False)
    value = db.Column(db.Text, nullable=False)
    updated_at = db.Column(db.DateTime, default=_utcnow, onupdate=_utcnow)

    def __repr__(self):
        return f'<LocalSnapshot {self.browser_id}:{self.key}>'
