from typing import Optional
from pydantic import BaseModel, computed_field

from app.schemas.common import UTCDatetime
from app.services import lifecycle


class AuctionCreate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    product_details: Optional[str] = None
    quantity: Optional[int] = None
    unit: Optional[str] = None
    delivery_location: Optional[str] = None
    starts_at: Optional[UTCDatetime] = None
    ends_at: Optional[UTCDatetime] = None
    notes: Optional[str] = None

    # The setup form sends the creator under several names
    created_by_admin_email: Optional[str] = None
    createdByAdminEmail: Optional[str] = None
    created_by_email: Optional[str] = None
    created_by_company: Optional[str] = None

    date_requested: Optional[str] = None
    requestor: Optional[str] = None
    requestor_email: Optional[str] = None
    group_site: Optional[str] = None
    event_type: Optional[str] = None
    target_lead_time: Optional[str] = None

    def creator_email(self) -> str:
        raw = self.created_by_admin_email or self.createdByAdminEmail or self.created_by_email or ""
        return raw.strip().lower()


class AuctionPatch(BaseModel):
    status: Optional[str] = None
    winner_vendor_email: Optional[str] = None


class AuctionResponse(BaseModel):
    id: int
    title: str
    description: str = ""
    product_details: str = ""
    quantity: int
    unit: str
    delivery_location: str
    starts_at: UTCDatetime
    ends_at: UTCDatetime
    status: str
    created_by_email: str
    created_by_company: str = ""
    notes: Optional[str] = None
    date_requested: Optional[str] = None
    requestor: Optional[str] = None
    requestor_email: Optional[str] = None
    group_site: Optional[str] = None
    event_type: Optional[str] = None
    target_lead_time: Optional[str] = None
    winner_vendor_email: Optional[str] = None
    winner_vendor_company: Optional[str] = None
    awarded_at: Optional[UTCDatetime] = None
    created_at: Optional[UTCDatetime] = None

    class Config:
        from_attributes = True

    @computed_field
    @property
    def effective_status(self) -> str:
        """not_started | active | closed | awarded, derived from the clock."""
        return lifecycle.effective_status(self)


class AuctionEventResponse(BaseModel):
    id: int
    auction_id: int
    action: str
    actor: Optional[str] = None
    detail: Optional[str] = None
    created_at: Optional[UTCDatetime] = None

    class Config:
        from_attributes = True
