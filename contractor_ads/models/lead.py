from sqlalchemy import Column, Integer, Text, DateTime
from typing import Dict, Any

from contractor_ads.core.database import Base
from contractor_ads.models.ad import utcnow, isoformat_utc

class Lead(Base):
    __tablename__ = 'leads'

    id = Column(Integer, primary_key=True, autoincrement=True)
    # External id from the ad platform; NULLs never collide
    lead_id = Column(Text, unique=True, nullable=True)
    campaign_id = Column(Text)
    ad_id = Column(Text)
    name = Column(Text)
    email = Column(Text)
    phone = Column(Text)
    zip_code = Column(Text)
    service_interest = Column(Text)
    message = Column(Text)
    created_time = Column(Text)
    logged_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'lead_id': self.lead_id,
            'campaign_id': self.campaign_id,
            'ad_id': self.ad_id,
            'name': self.name,
            'email': self.email,
            'phone': self.phone,
            'zip_code': self.zip_code,
            'service_interest': self.service_interest,
            'message': self.message,
            'created_time': self.created_time,
            'logged_at': isoformat_utc(self.logged_at) if self.logged_at else None
        }

    def __repr__(self):
        return f'<Lead {self.id}>'
