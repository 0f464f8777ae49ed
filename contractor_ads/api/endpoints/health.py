from datetime import datetime, timezone

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from contractor_ads.core.dependencies import get_storage
from contractor_ads.core.exceptions import StorageError
from contractor_ads.services.storage import Storage

router = APIRouter()

def _now() -> str:
    return datetime.now(timezone.utc).isoformat()

@router.get("/", status_code=status.HTTP_200_OK)
async def root():
    return {"status": "ok", "message": "Contractor Ad API running", "time": _now()}

@router.get("/health", status_code=status.HTTP_200_OK)
async def health_check():
    return {"status": "ok", "time": _now()}

@router.get("/health/ready", status_code=status.HTTP_200_OK)
def readiness_check(storage: Storage = Depends(get_storage)):
    try:
        storage.ping()
    except StorageError as e:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "unavailable", "error": e.message},
        )
    return {"status": "ready"}

@router.get("/health/live", status_code=status.HTTP_200_OK)
async def liveness_check():
    return {"status": "alive"}
