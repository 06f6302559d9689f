from pydantic import BaseModel, Field

class ServiceOffering(BaseModel):
    id: str
    stylistId: str
    name: str = ""
    durationMinutes: int = Field(..., gt=0)
    price: float = Field(0, ge=0)
    isActive: bool = True
