from pydantic import BaseModel, Field

class SuccessResponse(BaseModel):
    success: bool = Field(True, description="Always true on success")
