from sqlalchemy import Column, Integer, String, Text, DateTime
from sqlalchemy.orm import relationship

from app.models.base import Base
from app.utils import utcnow


class AuctionStatus:
    UPCOMING = "upcoming"
    ACTIVE = "active"
    COMPLETED = "completed"
    MANUALLY_CLOSED = "manually_closed"

    ALL = (UPCOMING, ACTIVE, COMPLETED, MANUALLY_CLOSED)
    TERMINAL = (COMPLETED, MANUALLY_CLOSED)


class Auction(Base):
    __tablename__ = "auctions"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(200), nullable=False)
    description = Column(Text, default="", nullable=False)
    product_details = Column(Text, default="", nullable=False)
    quantity = Column(Integer, nullable=False)
    unit = Column(String(50), nullable=False)
    delivery_location = Column(String(200), nullable=False)
    starts_at = Column(DateTime(timezone=True), nullable=False)
    ends_at = Column(DateTime(timezone=True), nullable=False)
    status = Column(String(50), default=AuctionStatus.UPCOMING, nullable=False)
    created_by_email = Column(String(256), nullable=False, index=True)
    created_by_company = Column(String(256), default="", nullable=False)
    notes = Column(Text, nullable=True)

    # Request metadata captured by the setup form
    date_requested = Column(String(50), nullable=True)
    requestor = Column(String(256), nullable=True)
    requestor_email = Column(String(256), nullable=True)
    group_site = Column(String(256), nullable=True)
    event_type = Column(String(100), nullable=True)
    target_lead_time = Column(String(100), nullable=True)

    winner_vendor_email = Column(String(256), nullable=True)
    winner_vendor_company = Column(String(256), nullable=True)
    awarded_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    invites = relationship("VendorInvite", back_populates="auction")
    bids = relationship("Bid", back_populates="auction")
    events = relationship("AuctionEvent", back_populates="auction", order_by="AuctionEvent.id")
