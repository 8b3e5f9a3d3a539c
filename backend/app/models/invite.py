from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship

from app.models.base import Base
from app.utils import utcnow


class InviteStatus:
    PENDING = "pending"
    ACCESSED = "accessed"


class VendorInvite(Base):
    __tablename__ = "vendor_invites"
    __table_args__ = (UniqueConstraint("auction_id", "vendor_email", name="uq_invite_auction_vendor"),)

    id = Column(Integer, primary_key=True, index=True)
    auction_id = Column(Integer, ForeignKey("auctions.id"), nullable=False, index=True)
    vendor_email = Column(String(256), nullable=False, index=True)
    vendor_company = Column(String(256), nullable=False, default="External Guest")
    invite_token = Column(String(64), unique=True, nullable=False, index=True)
    invite_sent_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    invite_method = Column(String(20), default="manual", nullable=False)  # manual | email | seed
    status = Column(String(20), default=InviteStatus.PENDING, nullable=False)
    accessed_at = Column(DateTime(timezone=True), nullable=True)

    auction = relationship("Auction", back_populates="invites")
