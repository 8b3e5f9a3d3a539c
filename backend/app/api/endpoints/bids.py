import logging
import math

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException
from sqlalchemy.orm import Session

from app.api.deps import get_auction_or_404
from app.database import get_db
from app.models.bid import Bid
from app.models.invite import VendorInvite
from app.schemas.bid import BidSubmit, BidResponse, RankedBidResponse, RankResponse
from app.services import lifecycle
from app.services.audit import AuctionAction, record_event
from app.services.ranking import rank_bids, vendor_rank
from app.services.realtime import hub
from app.utils import MAX_INT_COLUMN, normalize_email, utcnow

router = APIRouter(prefix="/api/auctions", tags=["bids"])
logger = logging.getLogger(__name__)


def _clean(value: str | None) -> str:
    return (value or "").strip()


@router.post("/{auction_id}/bids", response_model=BidResponse)
def submit_bid(
    auction_id: int,
    payload: BidSubmit,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
):
    """Vendor submits or replaces their bid. One row per (auction, vendor)."""
    auction = get_auction_or_404(db, auction_id)
    if not lifecycle.is_accepting_bids(auction):
        raise HTTPException(status_code=400, detail="Auction is not currently active")

    email = normalize_email(payload.vendor_email)
    if not email:
        raise HTTPException(status_code=400, detail="vendor_email is required")
    if payload.delivery_time_days <= 0:
        raise HTTPException(status_code=400, detail="delivery_time_days must be > 0")
    if payload.delivery_time_days > MAX_INT_COLUMN:
        raise HTTPException(status_code=400, detail="delivery_time_days is too large")
    if not math.isfinite(payload.cost_per_unit) or payload.cost_per_unit <= 0:
        raise HTTPException(status_code=400, detail="cost_per_unit must be > 0")

    invited = (
        db.query(VendorInvite.id)
        .filter(VendorInvite.auction_id == auction.id, VendorInvite.vendor_email == email)
        .first()
    )
    if not invited:
        raise HTTPException(status_code=403, detail="Vendor is not invited to this auction")

    total_cost = round(payload.cost_per_unit * auction.quantity, 2)
    if not math.isfinite(total_cost):
        raise HTTPException(status_code=400, detail="cost_per_unit is too large")
    bid = db.query(Bid).filter(Bid.auction_id == auction.id, Bid.vendor_email == email).first()
    if bid is None:
        bid = Bid(auction_id=auction.id, vendor_email=email)
        db.add(bid)
    bid.vendor_company = _clean(payload.vendor_company)
    bid.company_name = _clean(payload.company_name)
    bid.contact_name = _clean(payload.contact_name)
    bid.contact_phone = _clean(payload.contact_phone)
    bid.delivery_time_days = payload.delivery_time_days
    bid.cost_per_unit = payload.cost_per_unit
    bid.total_cost = total_cost
    bid.notes = _clean(payload.notes)
    bid.submitted_at = utcnow()

    record_event(
        db,
        auction.id,
        AuctionAction.BID_SUBMITTED,
        actor=email,
        detail=f"{payload.delivery_time_days}d @ {payload.cost_per_unit:.2f}/unit",
    )
    db.commit()
    db.refresh(bid)
    logger.info("Bid from %s on auction %s: %sd @ %s", email, auction.id, bid.delivery_time_days, bid.cost_per_unit)

    background_tasks.add_task(hub.notify_auction, auction.id, "bidChanged", "rankChanged")
    return bid


@router.get("/{auction_id}/bids", response_model=list[RankedBidResponse])
def list_bids(auction_id: int, db: Session = Depends(get_db)):
    """Leaderboard: bids best first, each with its rank."""
    get_auction_or_404(db, auction_id)
    bids = db.query(Bid).filter(Bid.auction_id == auction_id).all()
    return [
        RankedBidResponse(**BidResponse.model_validate(r.bid).model_dump(), rank=r.rank)
        for r in rank_bids(bids)
    ]


@router.get("/{auction_id}/bids/vendor", response_model=BidResponse | None)
def get_vendor_bid(auction_id: int, vendorEmail: str | None = None, db: Session = Depends(get_db)):
    get_auction_or_404(db, auction_id)
    email = normalize_email(vendorEmail)
    if not email:
        return None
    return db.query(Bid).filter(Bid.auction_id == auction_id, Bid.vendor_email == email).first()


@router.get("/{auction_id}/rank", response_model=RankResponse)
def get_rank(auction_id: int, vendorEmail: str | None = None, db: Session = Depends(get_db)):
    """The vendor's standing plus the leading delivery time and price."""
    get_auction_or_404(db, auction_id)
    bids = db.query(Bid).filter(Bid.auction_id == auction_id).all()
    summary = vendor_rank(bids, vendorEmail)
    return RankResponse(
        rank=summary.rank,
        total_bids=summary.total_bids,
        leading_delivery_time_days=summary.leading_delivery_time_days,
        leading_cost_per_unit=summary.leading_cost_per_unit,
        vendor_bid=BidResponse.model_validate(summary.vendor_bid) if summary.vendor_bid else None,
    )
