from typing import Dict, Any, List

from contractor_ads.core.logger import get_logger
from contractor_ads.schemas.lead import LeadCreate
from contractor_ads.services.storage import Storage

logger = get_logger(__name__)

class LeadService:
    """Service for handling lead-related operations."""

    def __init__(self, storage: Storage):
        self.storage = storage

    def create_lead(self, lead_data: LeadCreate) -> Dict[str, Any]:
        # The response is the same whether the lead was new or a duplicate
        inserted = self.storage.insert_lead_ignore_duplicate(lead_data.model_dump())
        if inserted:
            logger.info(f"Stored lead {lead_data.lead_id} for campaign {lead_data.campaign_id}")
        else:
            logger.info(f"Ignored duplicate lead {lead_data.lead_id}")
        return {"success": True}

    def list_leads(self) -> List[Dict[str, Any]]:
        return [lead.to_dict() for lead in self.storage.list_leads()]
