from pydantic import BaseModel
from enum import Enum

class ActorRole(str, Enum):
    CUSTOMER = "customer"
    STYLIST = "stylist"

class Actor(BaseModel):
    id: str
    role: ActorRole
