from typing import Optional
from pydantic import BaseModel

from app.schemas.common import UTCDatetime


class SupplierResponse(BaseModel):
    contact_email: str
    contact_name: Optional[str] = None
    company_name: str
    last_used: Optional[UTCDatetime] = None

    class Config:
        from_attributes = True
