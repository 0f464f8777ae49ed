from datetime import datetime
import json
from typing import Optional, Any, Dict, Union, List
from pydantic import BaseModel, ConfigDict, Field, field_validator


def to_stored_text(value: Any) -> Optional[str]:
    """Resolve a text-or-structured input to the string form kept in storage.

    Raw text is stored as-is, any other JSON value is stored JSON-encoded.
    """
    if value is None or isinstance(value, str):
        return value
    return json.dumps(value)


# Fallbacks for optional metadata fields that are absent or null
METADATA_DEFAULTS = {
    "location": "",
    "max_daily_spend": 50.0,
    "image_url": "",
    "customer_phone": "",
}


class AdMetadata(BaseModel):
    """Caller-supplied description of an ad, projected into ad columns.

    Optional fields that are absent or null fall back to the defaults below.
    Unknown keys are kept so the stored metadata round-trips untouched.
    """
    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True, allow_inf_nan=False)

    service_type: str = Field(..., description="Service being advertised")
    location: str = Field(METADATA_DEFAULTS["location"], description="Target location")
    max_daily_spend: float = Field(METADATA_DEFAULTS["max_daily_spend"], description="Daily spend cap")
    image_url: str = Field(METADATA_DEFAULTS["image_url"], description="Creative image URL")
    customer_phone: str = Field(METADATA_DEFAULTS["customer_phone"], description="Contractor phone number")

    @field_validator("service_type")
    def service_type_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("service_type must not be empty")
        return v

    @field_validator("location", "max_daily_spend", "image_url", "customer_phone", mode="before")
    def null_means_default(cls, v, info):
        if v is None:
            return METADATA_DEFAULTS[info.field_name]
        return v


class AdCreate(BaseModel):
    """Body of the ad-creation webhook."""
    model_config = ConfigDict(allow_inf_nan=False)

    ad_content: Optional[Any] = Field(None, description="Ad copy, text or structured")
    budget: Optional[float] = Field(None, description="Total budget")
    status: Optional[str] = Field(None, description="Initial status")
    metadata: Optional[Any] = Field(None, description="AdMetadata object or its JSON encoding")


class AdUpdate(BaseModel):
    """Allow-listed fields of a partial ad update."""
    model_config = ConfigDict(extra="ignore")

    status: Optional[str] = Field(None, max_length=64, description="Lifecycle status")
    campaign_id: Optional[str] = Field(None, description="Platform campaign ID")
    ad_set_id: Optional[str] = Field(None, description="Platform ad set ID")
    fb_ad_ids: Optional[Union[str, List[Any], Dict[str, Any]]] = Field(None, description="Platform ad IDs")
    notes: Optional[str] = Field(None, description="Free-text notes")
    error_details: Optional[str] = Field(None, description="Last error reported for this ad")


class AdResponse(BaseModel):
    id: int = Field(..., description="Ad ID")
    service_type: str
    location: Optional[str] = None
    status: Optional[str] = None
    campaign_id: Optional[str] = None
    ad_set_id: Optional[str] = None
    fb_ad_ids: Optional[str] = None
    budget: Optional[float] = None
    max_daily_spend: Optional[float] = None
    image_url: Optional[str] = None
    customer_phone: Optional[str] = None
    ad_content: Optional[str] = None
    metadata: Optional[str] = Field(None, description="JSON-encoded AdMetadata")
    error_details: Optional[str] = None
    notes: Optional[str] = None
    created_at: datetime = Field(..., description="Creation timestamp")
    updated_at: datetime = Field(..., description="Last update timestamp")


class AdCreatedResponse(BaseModel):
    id: int
