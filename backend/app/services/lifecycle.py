"""
Auction state machine.

    upcoming -> active -> completed | manually_closed

upcoming -> active is never written: it follows from the clock
(now >= starts_at). completed is reached by selecting a winner;
manually_closed by an explicit close. Both are terminal and nothing moves
backwards.
"""
from datetime import datetime
from typing import Any, Optional

from app.models.auction import AuctionStatus
from app.utils import as_utc, utcnow

_ORDER = {
    AuctionStatus.UPCOMING: 0,
    AuctionStatus.ACTIVE: 1,
    AuctionStatus.COMPLETED: 2,
    AuctionStatus.MANUALLY_CLOSED: 2,
}


class InvalidTransition(ValueError):
    pass


class Phase:
    NOT_STARTED = "not_started"
    ACTIVE = "active"
    CLOSED = "closed"
    AWARDED = "awarded"


def initial_status(starts_at: datetime, now: Optional[datetime] = None) -> str:
    now = now or utcnow()
    return AuctionStatus.UPCOMING if as_utc(starts_at) > now else AuctionStatus.ACTIVE


def has_started(auction: Any, now: Optional[datetime] = None) -> bool:
    now = now or utcnow()
    return now >= as_utc(auction.starts_at)


def stored_status(auction: Any, now: Optional[datetime] = None) -> str:
    """Stored status with the time-derived upcoming -> active step applied."""
    status = auction.status or AuctionStatus.UPCOMING
    if status == AuctionStatus.UPCOMING and has_started(auction, now):
        return AuctionStatus.ACTIVE
    return status


def effective_status(auction: Any, now: Optional[datetime] = None) -> str:
    now = now or utcnow()
    if auction.winner_vendor_email:
        return Phase.AWARDED
    if not has_started(auction, now):
        return Phase.NOT_STARTED
    if auction.status in AuctionStatus.TERMINAL or now > as_utc(auction.ends_at):
        return Phase.CLOSED
    return Phase.ACTIVE


def is_accepting_bids(auction: Any, now: Optional[datetime] = None) -> bool:
    return effective_status(auction, now) == Phase.ACTIVE


def check_transition(current: str, target: str) -> None:
    if target not in AuctionStatus.ALL:
        raise InvalidTransition(f"Unknown status '{target}'")
    if current == target:
        return
    if current in AuctionStatus.TERMINAL:
        raise InvalidTransition(f"Auction is already {current}; no further changes allowed")
    if current == AuctionStatus.UPCOMING and target == AuctionStatus.ACTIVE:
        raise InvalidTransition("Auctions become active when their start time arrives")
    if _ORDER[target] < _ORDER.get(current, 0):
        raise InvalidTransition(f"Cannot move auction from {current} back to {target}")
