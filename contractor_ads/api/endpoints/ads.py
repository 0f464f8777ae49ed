from typing import Any, Dict, List
from fastapi import APIRouter, Body, Depends

from contractor_ads.core.dependencies import get_ad_service
from contractor_ads.schemas.ad import AdResponse
from contractor_ads.schemas.common import SuccessResponse
from contractor_ads.services.ad import AdService

router = APIRouter()

@router.get("", response_model=List[AdResponse])
def list_ads(ad_service: AdService = Depends(get_ad_service)):
    """List all ads, newest first"""
    return ad_service.list_ads()

# Declared before /{ad_id} so the literal segment wins
@router.get("/by-campaign/{campaign_id}", response_model=AdResponse)
def get_ad_by_campaign(
    campaign_id: str,
    ad_service: AdService = Depends(get_ad_service)
):
    """Get the newest ad attached to a platform campaign"""
    return ad_service.get_ad_by_campaign(campaign_id)

@router.get("/{ad_id}", response_model=AdResponse)
def get_ad(
    ad_id: int,
    ad_service: AdService = Depends(get_ad_service)
):
    """Get a specific ad by ID"""
    return ad_service.get_ad(ad_id)

@router.patch("/{ad_id}", response_model=SuccessResponse)
def update_ad(
    ad_id: int,
    fields: Dict[str, Any] = Body(...),
    ad_service: AdService = Depends(get_ad_service)
):
    """Update the allow-listed fields of an ad; other keys are ignored"""
    return ad_service.update_ad(ad_id, fields)
