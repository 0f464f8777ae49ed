from typing import List
from fastapi import APIRouter, Depends

from contractor_ads.core.dependencies import get_lead_service
from contractor_ads.schemas.common import SuccessResponse
from contractor_ads.schemas.lead import LeadCreate, LeadResponse
from contractor_ads.services.lead import LeadService

router = APIRouter()

@router.get("", response_model=List[LeadResponse])
def list_leads(lead_service: LeadService = Depends(get_lead_service)):
    """List all leads, newest first"""
    return lead_service.list_leads()

@router.post("", response_model=SuccessResponse)
def create_lead(
    lead_in: LeadCreate,
    lead_service: LeadService = Depends(get_lead_service)
):
    """Store a lead; a repeated lead_id is silently ignored"""
    return lead_service.create_lead(lead_in)
