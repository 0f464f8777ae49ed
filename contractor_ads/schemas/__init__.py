from contractor_ads.schemas.ad import (
    AdMetadata,
    AdCreate,
    AdUpdate,
    AdResponse,
    AdCreatedResponse,
    METADATA_DEFAULTS,
    to_stored_text
)
from contractor_ads.schemas.lead import LeadCreate, LeadResponse
from contractor_ads.schemas.common import SuccessResponse

__all__ = [
    "AdMetadata",
    "AdCreate",
    "AdUpdate",
    "AdResponse",
    "AdCreatedResponse",
    "METADATA_DEFAULTS",
    "to_stored_text",
    "LeadCreate",
    "LeadResponse",
    "SuccessResponse"
]
