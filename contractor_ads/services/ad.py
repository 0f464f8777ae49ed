import json
from typing import Dict, Any, List

from pydantic import ValidationError as PydanticValidationError

from contractor_ads.core.exceptions import ValidationError, NotFoundError, AD_ERRORS
from contractor_ads.core.logger import get_logger
from contractor_ads.models.ad import Ad
from contractor_ads.schemas.ad import AdCreate, AdMetadata, AdUpdate, to_stored_text
from contractor_ads.services.storage import Storage

logger = get_logger(__name__)


def _reject_constant(name: str):
    raise ValueError(f"non-finite number {name}")


def _is_json_compliant(value: Any) -> bool:
    try:
        json.dumps(value, allow_nan=False)
    except ValueError:
        return False
    return True


def _describe(exc: PydanticValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(part) for part in error['loc']) or 'body'}: {error['msg']}"
        for error in exc.errors()
    )


class AdService:
    """Service for handling ad-related operations."""

    def __init__(self, storage: Storage):
        self.storage = storage

    def parse_metadata(self, raw: Any, received: Dict[str, Any]) -> Dict[str, Any]:
        """Decode ``metadata`` to a dict, accepting either a JSON string or an object."""
        if isinstance(raw, str):
            try:
                raw = json.loads(raw, parse_constant=_reject_constant)
            except ValueError:
                raise ValidationError(AD_ERRORS['INVALID_METADATA'], received=received)
        if raw is None:
            raise ValidationError(AD_ERRORS['MISSING_SERVICE_TYPE'], received=received)
        if not isinstance(raw, dict):
            raise ValidationError(AD_ERRORS['METADATA_NOT_OBJECT'], received=received)
        return raw

    def build_ad_fields(self, body: Dict[str, Any]) -> Dict[str, Any]:
        """Validate a creation webhook body and map it onto ad columns."""
        # The body is echoed back on rejection, so it must be renderable as JSON
        if not _is_json_compliant(body):
            raise ValidationError(AD_ERRORS['NON_FINITE_NUMBER'])

        try:
            ad_in = AdCreate.model_validate(body)
        except PydanticValidationError as e:
            raise ValidationError(AD_ERRORS['INVALID_FIELDS'].format(details=_describe(e)), received=body)

        meta_dict = self.parse_metadata(ad_in.metadata, body)
        if not meta_dict.get("service_type"):
            raise ValidationError(AD_ERRORS['MISSING_SERVICE_TYPE'], received=body)
        try:
            meta = AdMetadata.model_validate(meta_dict)
        except PydanticValidationError as e:
            raise ValidationError(
                AD_ERRORS['INVALID_FIELDS'].format(details=_describe(e)), received=body
            )

        return {
            "service_type": meta.service_type,
            "location": meta.location,
            "status": ad_in.status or Ad.DEFAULT_STATUS,
            "budget": ad_in.budget,
            "max_daily_spend": meta.max_daily_spend,
            "image_url": meta.image_url,
            "customer_phone": meta.customer_phone,
            "ad_content": to_stored_text(ad_in.ad_content),
            "metadata": json.dumps(meta_dict),
        }

    def create_ad(self, body: Dict[str, Any]) -> Dict[str, Any]:
        fields = self.build_ad_fields(body)
        ad_id = self.storage.insert_ad(fields)
        logger.info(f"[WEBHOOK] Created ad {ad_id} for service_type '{fields['service_type']}'")
        return {"id": ad_id}

    def get_ad(self, ad_id: int) -> Dict[str, Any]:
        ad = self.storage.get_ad_by_id(ad_id)
        if ad is None:
            raise NotFoundError(AD_ERRORS['AD_NOT_FOUND'])
        return ad.to_dict()

    def get_ad_by_campaign(self, campaign_id: str) -> Dict[str, Any]:
        ad = self.storage.get_ad_by_campaign_id(campaign_id)
        if ad is None:
            raise NotFoundError(AD_ERRORS['AD_NOT_FOUND'])
        return ad.to_dict()

    def update_ad(self, ad_id: int, body: Dict[str, Any]) -> Dict[str, Any]:
        """Apply the allow-listed keys of *body*; every other key is dropped."""
        supplied = {k: v for k, v in body.items() if k in Ad.UPDATABLE_FIELDS}
        if not supplied:
            raise ValidationError(AD_ERRORS['NO_VALID_FIELDS'])
        try:
            update = AdUpdate.model_validate(supplied)
        except PydanticValidationError as e:
            raise ValidationError(AD_ERRORS['INVALID_FIELDS'].format(details=_describe(e)))

        # Only keys the caller actually sent; explicit nulls clear the column
        changes = update.model_dump(exclude_unset=True)
        if "fb_ad_ids" in changes:
            changes["fb_ad_ids"] = to_stored_text(changes["fb_ad_ids"])

        if not self.storage.update_ad(ad_id, changes):
            raise NotFoundError(AD_ERRORS['AD_NOT_FOUND'])
        logger.info(f"Updated ad {ad_id}: {', '.join(sorted(changes))}")
        return {"success": True}

    def list_ads(self) -> List[Dict[str, Any]]:
        return [ad.to_dict() for ad in self.storage.list_ads()]
