from typing import Any, Dict
from fastapi import APIRouter, Body, Depends

from contractor_ads.core.dependencies import get_ad_service
from contractor_ads.schemas.ad import AdCreatedResponse
from contractor_ads.services.ad import AdService

router = APIRouter()

@router.post("/ads/create", response_model=AdCreatedResponse)
def create_ad(
    body: Dict[str, Any] = Body(...),
    ad_service: AdService = Depends(get_ad_service)
):
    """Create an ad from the ad-generation webhook.

    ``metadata`` may be an object or its JSON encoding and must carry a
    ``service_type``; otherwise the request is rejected with 400 and the
    received body is echoed back.
    """
    return ad_service.create_ad(body)
