import logging
import secrets
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.api.deps import get_actor, get_auction_or_404
from app.database import get_db
from app.models.admin import Admin
from app.models.invite import VendorInvite, InviteStatus
from app.models.supplier import Supplier
from app.schemas.invite import InviteCreate, InviteResponse, InviteResult
from app.services.audit import AuctionAction, record_event
from app.services.email_service import EmailNotConfigured, send_invite_email
from app.utils import normalize_email, utcnow

router = APIRouter(prefix="/api", tags=["invites"])
logger = logging.getLogger(__name__)

DEFAULT_VENDOR_COMPANY = "External Guest"


def _generate_unique_token(db: Session, taken: set[str]) -> str:
    """12 upper-case hex chars, unique across all invites."""
    while True:
        token = secrets.token_hex(6).upper()
        if token in taken:
            continue
        if not db.query(VendorInvite.id).filter(VendorInvite.invite_token == token).first():
            taken.add(token)
            return token


def _touch_supplier(db: Session, email: str, company: str) -> None:
    supplier = db.get(Supplier, email)
    if supplier is None:
        db.add(Supplier(contact_email=email, company_name=company, last_used=utcnow()))
    else:
        supplier.company_name = company
        supplier.last_used = utcnow()


@router.get("/invites", response_model=list[InviteResponse])
def list_invites(auctionId: int | None = None, db: Session = Depends(get_db)):
    q = db.query(VendorInvite)
    if auctionId is not None:
        q = q.filter(VendorInvite.auction_id == auctionId)
    return q.order_by(VendorInvite.invite_sent_at.desc(), VendorInvite.id.desc()).all()


@router.post("/invites", response_model=list[InviteResult])
def create_invites(
    payload: InviteCreate,
    actor: Optional[Admin] = Depends(get_actor),
    db: Session = Depends(get_db),
):
    """Create or refresh invites, then email each vendor its code. Re-posting resends."""
    if payload.auction_id is None:
        raise HTTPException(status_code=400, detail="auction_id is required")
    auction = get_auction_or_404(db, payload.auction_id)
    if not payload.vendors:
        raise HTTPException(status_code=400, detail="vendors is required")

    method = (payload.invite_method or "").strip().lower() or "manual"
    now = utcnow()
    taken: set[str] = set()
    invites: dict[str, VendorInvite] = {}

    for v in payload.vendors:
        email = normalize_email(v.email)
        if not email or "@" not in email:
            continue
        company = (v.company or "").strip() or DEFAULT_VENDOR_COMPANY
        if email in invites:
            invites[email].vendor_company = company
            continue

        invite = (
            db.query(VendorInvite)
            .filter(VendorInvite.auction_id == auction.id, VendorInvite.vendor_email == email)
            .first()
        )
        if invite is None:
            invite = VendorInvite(
                auction_id=auction.id,
                vendor_email=email,
                vendor_company=company,
                invite_token=_generate_unique_token(db, taken),
                invite_sent_at=now,
                invite_method=method,
                status=InviteStatus.PENDING,
            )
            db.add(invite)
        else:
            invite.vendor_company = company
            invite.invite_method = method
            invite.invite_sent_at = now
        invites[email] = invite

    # One directory entry per email, carrying the last company given
    for email, invite in invites.items():
        _touch_supplier(db, email, invite.vendor_company)

    invites_list = list(invites.values())
    if invites_list:
        record_event(
            db,
            auction.id,
            AuctionAction.INVITES_SENT,
            actor=actor.email if actor else None,
            detail=", ".join(i.vendor_email for i in invites_list),
        )
    db.commit()

    # Send only after commit so every token in an email exists
    results = []
    for invite in invites_list:
        db.refresh(invite)
        email_sent, email_error = False, None
        try:
            send_invite_email(auction, invite)
            email_sent = True
        except EmailNotConfigured as e:
            email_error = str(e)
        except OSError as e:
            email_error = str(e)
            logger.warning("Invite email to %s failed: %s", invite.vendor_email, e)
        results.append(
            InviteResult(
                **InviteResponse.model_validate(invite).model_dump(),
                email_sent=email_sent,
                email_error=email_error,
            )
        )
    logger.info("Auction %s: %d invite(s) processed", auction.id, len(results))
    return results


@router.get("/auctions/{auction_id}/invites", response_model=list[InviteResponse])
def list_invites_for_auction(auction_id: int, db: Session = Depends(get_db)):
    get_auction_or_404(db, auction_id)
    return list_invites(auctionId=auction_id, db=db)


@router.post("/auctions/{auction_id}/invites", response_model=list[InviteResult])
def create_invites_for_auction(
    auction_id: int,
    payload: InviteCreate,
    actor: Optional[Admin] = Depends(get_actor),
    db: Session = Depends(get_db),
):
    payload = payload.model_copy(update={"auction_id": auction_id})
    return create_invites(payload, actor=actor, db=db)
