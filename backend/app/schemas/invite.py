from typing import Optional, List
from pydantic import BaseModel

from app.schemas.auction import AuctionResponse
from app.schemas.common import UTCDatetime


class InviteVendor(BaseModel):
    email: Optional[str] = None
    company: Optional[str] = None


class InviteCreate(BaseModel):
    auction_id: Optional[int] = None
    vendors: List[InviteVendor] = []
    invite_method: Optional[str] = "manual"


class InviteResponse(BaseModel):
    id: int
    auction_id: int
    vendor_email: str
    vendor_company: str
    invite_token: str
    invite_sent_at: Optional[UTCDatetime] = None
    invite_method: str
    status: str
    accessed_at: Optional[UTCDatetime] = None

    class Config:
        from_attributes = True


class InviteResult(InviteResponse):
    email_sent: bool = False
    email_error: Optional[str] = None


class VendorTokenBody(BaseModel):
    token: Optional[str] = None
    email: Optional[str] = None


class VendorSession(BaseModel):
    """What a vendor sees after entering a valid invite code."""
    invite: InviteResponse
    auction: AuctionResponse
