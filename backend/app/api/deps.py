"""Shared route dependencies: the acting admin and auction lookup."""
from typing import Optional

from fastapi import Depends, Header, HTTPException
from sqlalchemy.orm import Session

from app.database import get_db
from app.models.admin import Admin
from app.models.auction import Auction
from app.utils import normalize_email


def find_admin(db: Session, email: str | None) -> Optional[Admin]:
    email = normalize_email(email)
    if not email:
        return None
    return db.query(Admin).filter(Admin.email == email).first()


def get_actor(
    x_admin_email: str | None = Header(None, alias="X-Admin-Email"),
    db: Session = Depends(get_db),
) -> Optional[Admin]:
    """The admin performing the request, or None when the header is absent/unknown."""
    return find_admin(db, x_admin_email)


def get_auction_or_404(db: Session, auction_id: int) -> Auction:
    auction = db.query(Auction).filter(Auction.id == auction_id).first()
    if not auction:
        raise HTTPException(status_code=404, detail="Auction not found")
    return auction
