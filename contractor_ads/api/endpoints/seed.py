import json
from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from contractor_ads.core.dependencies import get_storage
from contractor_ads.services.storage import Storage

router = APIRouter()

SAMPLE_AD_CONTENT = [
    {
        "id": "A",
        "type": "pain_point",
        "headline": "Outdated Bathroom?",
        "body": "Full bathroom renovations in Phoenix. Licensed contractors, fixed quotes.",
        "cta": "BOOK_NOW",
    },
    {
        "id": "B",
        "type": "urgency",
        "headline": "Spring Slots Filling Fast",
        "body": "Book your Phoenix bathroom remodel consultation this week.",
        "cta": "GET_QUOTE",
    },
    {
        "id": "C",
        "type": "social_proof",
        "headline": "Trusted by 100+ Phoenix Homeowners",
        "body": "See why neighbours choose us for their bathroom renovations.",
        "cta": "LEARN_MORE",
    },
]

SAMPLE_METADATA = {
    "service_type": "bathroom renovation",
    "location": "Phoenix, AZ",
    "image_url": "https://picsum.photos/1200/628",
    "max_daily_spend": 50,
    "customer_phone": "+15551234567",
}

@router.post("/seed")
def seed_test_ad(storage: Storage = Depends(get_storage)):
    """Insert a sample ad so a fresh deployment can be smoke tested"""
    metadata = dict(SAMPLE_METADATA, created_at=datetime.now(timezone.utc).isoformat())
    ad_id = storage.insert_ad({
        "service_type": metadata["service_type"],
        "location": metadata["location"],
        "status": "pending_approval",
        "budget": 150,
        "max_daily_spend": metadata["max_daily_spend"],
        "image_url": metadata["image_url"],
        "customer_phone": metadata["customer_phone"],
        "ad_content": json.dumps(SAMPLE_AD_CONTENT),
        "metadata": json.dumps(metadata),
    })
    return {"id": ad_id, "message": "Test ad seeded"}
