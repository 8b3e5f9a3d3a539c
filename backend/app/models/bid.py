from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, Float, UniqueConstraint
from sqlalchemy.orm import relationship

from app.models.base import Base
from app.utils import utcnow


class Bid(Base):
    """One row per (auction, vendor); a resubmission overwrites it."""
    __tablename__ = "bids"
    __table_args__ = (UniqueConstraint("auction_id", "vendor_email", name="uq_bid_auction_vendor"),)

    id = Column(Integer, primary_key=True, index=True)
    auction_id = Column(Integer, ForeignKey("auctions.id"), nullable=False, index=True)
    vendor_email = Column(String(256), nullable=False, index=True)
    vendor_company = Column(String(256), default="", nullable=False)
    company_name = Column(String(256), default="", nullable=False)
    contact_name = Column(String(256), default="", nullable=False)
    contact_phone = Column(String(50), default="", nullable=False)
    delivery_time_days = Column(Integer, nullable=False)
    cost_per_unit = Column(Float, nullable=False)
    total_cost = Column(Float, nullable=False)  # cost_per_unit * auction.quantity
    notes = Column(Text, default="", nullable=False)
    submitted_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    auction = relationship("Auction", back_populates="bids")
