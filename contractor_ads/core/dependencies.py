from fastapi import Depends, Request

from contractor_ads.services.ad import AdService
from contractor_ads.services.lead import LeadService
from contractor_ads.services.storage import Storage


def get_storage(request: Request) -> Storage:
    """Dependency to provide the storage adapter the application was built with."""
    return request.app.state.storage

def get_ad_service(storage: Storage = Depends(get_storage)) -> AdService:
    return AdService(storage)

def get_lead_service(storage: Storage = Depends(get_storage)) -> LeadService:
    return LeadService(storage)
