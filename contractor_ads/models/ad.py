from sqlalchemy import Column, Integer, String, Text, Float, DateTime, Index
from datetime import datetime, timezone
from typing import Dict, Any

from contractor_ads.core.database import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def isoformat_utc(value: datetime) -> str:
    # SQLite hands datetimes back naive; they were written as UTC
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.isoformat()


class Ad(Base):
    __tablename__ = "ads"

    DEFAULT_STATUS = "pending_approval"

    # Columns a partial update may touch; everything else is fixed at creation
    UPDATABLE_FIELDS = ("status", "campaign_id", "ad_set_id", "fb_ad_ids", "notes", "error_details")

    id = Column(Integer, primary_key=True, autoincrement=True)
    service_type = Column(Text, nullable=False)
    location = Column(Text)
    status = Column(String(64), default=DEFAULT_STATUS, server_default=DEFAULT_STATUS)
    campaign_id = Column(Text, nullable=True)
    ad_set_id = Column(Text, nullable=True)
    fb_ad_ids = Column(Text, nullable=True)
    budget = Column(Float, nullable=True)
    max_daily_spend = Column(Float, nullable=True)
    image_url = Column(Text)
    customer_phone = Column(Text)
    ad_content = Column(Text)
    # "metadata" is reserved on declarative classes
    metadata_ = Column("metadata", Text)
    error_details = Column(Text, nullable=True)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    __table_args__ = (
        Index("idx_ads_campaign_id", "campaign_id"),
    )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'service_type': self.service_type,
            'location': self.location,
            'status': self.status,
            'campaign_id': self.campaign_id,
            'ad_set_id': self.ad_set_id,
            'fb_ad_ids': self.fb_ad_ids,
            'budget': self.budget,
            'max_daily_spend': self.max_daily_spend,
            'image_url': self.image_url,
            'customer_phone': self.customer_phone,
            'ad_content': self.ad_content,
            'metadata': self.metadata_,
            'error_details': self.error_details,
            'notes': self.notes,
            'created_at': isoformat_utc(self.created_at) if self.created_at else None,
            'updated_at': isoformat_utc(self.updated_at) if self.updated_at else None
        }

    def __repr__(self):
        return f'<Ad {self.id}>'
