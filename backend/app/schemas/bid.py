from typing import Optional
from pydantic import BaseModel

from app.schemas.common import UTCDatetime


class BidSubmit(BaseModel):
    vendor_email: Optional[str] = None
    vendor_company: Optional[str] = None
    company_name: Optional[str] = None
    contact_name: Optional[str] = None
    contact_phone: Optional[str] = None
    delivery_time_days: int
    cost_per_unit: float
    notes: Optional[str] = None


class BidResponse(BaseModel):
    id: int
    auction_id: int
    vendor_email: str
    vendor_company: str = ""
    company_name: str = ""
    contact_name: str = ""
    contact_phone: str = ""
    delivery_time_days: int
    cost_per_unit: float
    total_cost: float
    notes: str = ""
    submitted_at: Optional[UTCDatetime] = None

    class Config:
        from_attributes = True


class RankedBidResponse(BidResponse):
    rank: int


class RankResponse(BaseModel):
    rank: int
    total_bids: int
    leading_delivery_time_days: int
    leading_cost_per_unit: float
    vendor_bid: Optional[BidResponse] = None

