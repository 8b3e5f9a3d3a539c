from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from app.models.base import Base
from app.utils import utcnow


class AuctionEvent(Base):
    """Audit trail: who did what on an auction and when."""
    __tablename__ = "auction_events"

    id = Column(Integer, primary_key=True, index=True)
    auction_id = Column(Integer, ForeignKey("auctions.id"), nullable=False, index=True)
    action = Column(String(50), nullable=False)  # created, invites_sent, invite_accessed, bid_submitted, winner_selected, closed
    actor = Column(String(256), nullable=True)  # admin or vendor email
    detail = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    auction = relationship("Auction", back_populates="events")
