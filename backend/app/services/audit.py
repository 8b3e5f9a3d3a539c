"""
Auction activity trail.

record_event() only ADDS an AuctionEvent to the session; the calling route
owns the commit. Events are never updated or deleted.
"""
import logging
from typing import Optional

from sqlalchemy.orm import Session

from app.models.auction_event import AuctionEvent

logger = logging.getLogger(__name__)


class AuctionAction:
    CREATED = "created"
    INVITES_SENT = "invites_sent"
    INVITE_ACCESSED = "invite_accessed"
    BID_SUBMITTED = "bid_submitted"
    WINNER_SELECTED = "winner_selected"
    CLOSED = "closed"


def record_event(
    db: Session,
    auction_id: int,
    action: str,
    actor: Optional[str] = None,
    detail: Optional[str] = None,
) -> AuctionEvent:
    event = AuctionEvent(auction_id=auction_id, action=action, actor=actor, detail=detail)
    db.add(event)
    logger.info("auction %s: %s by %s", auction_id, action, actor or "system")
    return event
