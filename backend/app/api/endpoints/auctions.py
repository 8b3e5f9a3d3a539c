import logging
from typing import Optional

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException
from sqlalchemy.orm import Session

from app.api.deps import find_admin, get_actor, get_auction_or_404
from app.database import get_db
from app.models.admin import Admin
from app.models.auction import Auction, AuctionStatus
from app.models.auction_event import AuctionEvent
from app.models.bid import Bid
from app.schemas.auction import AuctionCreate, AuctionPatch, AuctionResponse, AuctionEventResponse
from app.services import lifecycle
from app.services.audit import AuctionAction, record_event
from app.services.permissions import get_permissions
from app.services.realtime import hub
from app.utils import MAX_INT_COLUMN, normalize_email, utcnow

router = APIRouter(prefix="/api/auctions", tags=["auctions"])
logger = logging.getLogger(__name__)


def _require_text(value: str | None, name: str) -> str:
    value = (value or "").strip()
    if not value:
        raise HTTPException(status_code=400, detail=f"{name} is required")
    return value


@router.get("", response_model=list[AuctionResponse])
def list_auctions(adminEmail: str | None = None, db: Session = Depends(get_db)):
    """All auctions, newest first. With adminEmail, non-global roles only see their own."""
    q = db.query(Auction)
    email = normalize_email(adminEmail)
    if email:
        admin = find_admin(db, email)
        if not (admin and get_permissions(admin.role).has_global_view):
            q = q.filter(Auction.created_by_email == email)
    return q.order_by(Auction.created_at.desc(), Auction.id.desc()).all()


@router.post("", response_model=AuctionResponse, status_code=201)
def create_auction(payload: AuctionCreate, db: Session = Depends(get_db)):
    title = _require_text(payload.title, "title")
    delivery_location = _require_text(payload.delivery_location, "delivery_location")
    if payload.quantity is None or payload.quantity <= 0:
        raise HTTPException(status_code=400, detail="quantity must be > 0")
    if payload.quantity > MAX_INT_COLUMN:
        raise HTTPException(status_code=400, detail="quantity is too large")
    unit = _require_text(payload.unit, "unit")
    if payload.starts_at is None:
        raise HTTPException(status_code=400, detail="starts_at must be a valid ISO datetime")
    if payload.ends_at is None:
        raise HTTPException(status_code=400, detail="ends_at must be a valid ISO datetime")
    if payload.ends_at <= payload.starts_at:
        raise HTTPException(status_code=400, detail="ends_at must be after starts_at")

    creator_email = payload.creator_email()
    if not creator_email:
        raise HTTPException(status_code=400, detail="created_by_email (or created_by_admin_email) is required")
    creator = find_admin(db, creator_email)
    if not creator:
        raise HTTPException(status_code=400, detail="created_by_email must belong to a registered account")
    if not get_permissions(creator.role).can_create_auction:
        raise HTTPException(status_code=403, detail="This account cannot create auctions")

    auction = Auction(
        title=title,
        description=payload.description or "",
        product_details=payload.product_details or "",
        quantity=payload.quantity,
        unit=unit,
        delivery_location=delivery_location,
        starts_at=payload.starts_at,
        ends_at=payload.ends_at,
        status=lifecycle.initial_status(payload.starts_at),
        created_by_email=creator_email,
        created_by_company=(payload.created_by_company or "").strip() or creator.company_name,
        notes=payload.notes,
        date_requested=payload.date_requested,
        requestor=payload.requestor,
        requestor_email=payload.requestor_email,
        group_site=payload.group_site,
        event_type=payload.event_type,
        target_lead_time=payload.target_lead_time,
    )
    db.add(auction)
    db.flush()
    record_event(db, auction.id, AuctionAction.CREATED, actor=creator_email)
    db.commit()
    db.refresh(auction)
    logger.info("Created auction %s '%s' for %s", auction.id, auction.title, creator_email)
    return auction


@router.get("/{auction_id}", response_model=AuctionResponse)
def get_auction(auction_id: int, db: Session = Depends(get_db)):
    return get_auction_or_404(db, auction_id)


@router.patch("/{auction_id}", response_model=AuctionResponse)
def update_auction(
    auction_id: int,
    payload: AuctionPatch,
    background_tasks: BackgroundTasks,
    actor: Optional[Admin] = Depends(get_actor),
    db: Session = Depends(get_db),
):
    """Select a winner (winner_vendor_email) or close the auction (status=manually_closed)."""
    auction = get_auction_or_404(db, auction_id)
    if payload.status is None and payload.winner_vendor_email is None:
        raise HTTPException(status_code=400, detail="Patch body is required")

    current = lifecycle.stored_status(auction)
    actor_email = actor.email if actor else None

    if payload.winner_vendor_email is not None:
        winner_email = normalize_email(payload.winner_vendor_email)
        if not winner_email:
            raise HTTPException(status_code=400, detail="winner_vendor_email cannot be blank")
        if payload.status not in (None, AuctionStatus.COMPLETED):
            raise HTTPException(status_code=400, detail="Selecting a winner completes the auction")
        try:
            lifecycle.check_transition(current, AuctionStatus.COMPLETED)
        except lifecycle.InvalidTransition as e:
            raise HTTPException(status_code=400, detail=str(e)) from e
        bid = db.query(Bid).filter(Bid.auction_id == auction.id, Bid.vendor_email == winner_email).first()
        if not bid:
            raise HTTPException(status_code=400, detail="Winner must have submitted a bid on this auction")
        # Last write wins; no concurrency check on winner selection
        auction.status = AuctionStatus.COMPLETED
        auction.winner_vendor_email = winner_email
        auction.winner_vendor_company = bid.vendor_company or bid.company_name or None
        auction.awarded_at = utcnow()
        record_event(db, auction.id, AuctionAction.WINNER_SELECTED, actor=actor_email, detail=winner_email)
        logger.info("Auction %s awarded to %s", auction.id, winner_email)
    else:
        target = payload.status.strip()
        if target == AuctionStatus.COMPLETED:
            raise HTTPException(status_code=400, detail="Select a winner to complete an auction")
        try:
            lifecycle.check_transition(current, target)
        except lifecycle.InvalidTransition as e:
            raise HTTPException(status_code=400, detail=str(e)) from e
        auction.status = target
        if target == AuctionStatus.MANUALLY_CLOSED and current != target:
            record_event(db, auction.id, AuctionAction.CLOSED, actor=actor_email)
            logger.info("Auction %s manually closed", auction.id)

    db.commit()
    db.refresh(auction)
    background_tasks.add_task(hub.notify_auction, auction.id, "auctionChanged")
    return auction


@router.delete("/{auction_id}")
def delete_auction(
    auction_id: int,
    actor: Optional[Admin] = Depends(get_actor),
    db: Session = Depends(get_db),
):
    """Auctions are kept for the audit trail; this only reports why nothing was deleted."""
    get_auction_or_404(db, auction_id)
    if not (actor and get_permissions(actor.role).can_delete):
        raise HTTPException(status_code=403, detail="Only the Product Owner can delete auctions")
    raise HTTPException(
        status_code=409,
        detail="Deletion is disabled. All auctions are maintained for audit trail compliance.",
    )


@router.get("/{auction_id}/events", response_model=list[AuctionEventResponse])
def list_auction_events(auction_id: int, db: Session = Depends(get_db)):
    get_auction_or_404(db, auction_id)
    return (
        db.query(AuctionEvent)
        .filter(AuctionEvent.auction_id == auction_id)
        .order_by(AuctionEvent.created_at, AuctionEvent.id)
        .all()
    )
