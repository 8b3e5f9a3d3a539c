"""Vendor entry by invite code."""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from app.database import get_db
from app.models.auction import Auction
from app.models.invite import VendorInvite, InviteStatus
from app.schemas.invite import VendorTokenBody, VendorSession, InviteResponse
from app.schemas.auction import AuctionResponse
from app.services.audit import AuctionAction, record_event
from app.utils import normalize_email, utcnow

router = APIRouter(prefix="/api/vendor", tags=["vendor"])
logger = logging.getLogger(__name__)


def _find_invite(db: Session, token: str | None) -> Optional[VendorInvite]:
    token = (token or "").strip().upper()
    if not token:
        return None
    return db.query(VendorInvite).filter(VendorInvite.invite_token == token).first()


def _mark_accessed(db: Session, invite: VendorInvite) -> None:
    first_access = invite.status == InviteStatus.PENDING
    invite.status = InviteStatus.ACCESSED
    invite.accessed_at = utcnow()
    if first_access:
        record_event(db, invite.auction_id, AuctionAction.INVITE_ACCESSED, actor=invite.vendor_email)


@router.post("/validate", response_model=Optional[VendorSession])
def validate_invite(payload: VendorTokenBody, db: Session = Depends(get_db)):
    """Return the invite and its auction for a valid code, else null. First use marks it accessed."""
    invite = _find_invite(db, payload.token)
    if invite is None:
        return None
    email = normalize_email(payload.email)
    if email and email != invite.vendor_email:
        logger.info("Invite code used with mismatched email %s", email)
        return None
    auction = db.query(Auction).filter(Auction.id == invite.auction_id).first()
    if auction is None:
        return None

    if invite.status == InviteStatus.PENDING:
        _mark_accessed(db, invite)
        db.commit()
        db.refresh(invite)

    return VendorSession(
        invite=InviteResponse.model_validate(invite),
        auction=AuctionResponse.model_validate(auction),
    )


@router.post("/access", status_code=204)
def record_access(payload: VendorTokenBody, db: Session = Depends(get_db)):
    invite = _find_invite(db, payload.token)
    if invite is not None:
        _mark_accessed(db, invite)
        db.commit()
    return Response(status_code=204)
