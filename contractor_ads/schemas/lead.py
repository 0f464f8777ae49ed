from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

class LeadBase(BaseModel):
    # Ad platforms send zip codes and phone numbers as bare numbers
    model_config = ConfigDict(coerce_numbers_to_str=True)

    lead_id: Optional[str] = Field(None, description="External lead ID, unique when present")
    campaign_id: Optional[str] = Field(None, description="Campaign ID")
    ad_id: Optional[str] = Field(None, description="Ad ID")
    name: Optional[str] = Field(None, description="Full name")
    email: Optional[str] = Field(None, description="Email address")
    phone: Optional[str] = Field(None, description="Phone number")
    zip_code: Optional[str] = Field(None, description="ZIP code")
    service_interest: Optional[str] = Field(None, description="Service the lead asked about")
    message: Optional[str] = Field(None, description="Free-text message")
    created_time: Optional[str] = Field(None, description="Creation time reported by the platform")

class LeadCreate(LeadBase):
    pass

class LeadResponse(LeadBase):
    id: int = Field(..., description="Lead row ID")
    logged_at: datetime = Field(..., description="Time the lead was stored")
