"""
Startup seed data. Safe to run on every boot: existing rows are left alone.

- Preset accounts, one per internal role, sharing PRESET_ACCOUNT_PASSWORD.
- Optional demo auction (SEED_DEMO_AUCTION) with one pending invite whose
  code is logged so a vendor login can be tried right away.
"""
import logging
import secrets
from datetime import timedelta

from sqlalchemy.orm import Session

from app import config
from app.models.admin import Admin, AdminRole
from app.models.auction import Auction, AuctionStatus
from app.models.invite import VendorInvite, InviteStatus
from app.utils import utcnow

logger = logging.getLogger(__name__)

PRESET_ACCOUNTS = [
    ("product.owner@example.com", "Product Owner", AdminRole.PRODUCT_OWNER),
    ("global.admin@example.com", "Global Admin", AdminRole.GLOBAL_ADMIN),
    ("internal.user@example.com", "Internal User", AdminRole.INTERNAL_USER),
]

DEMO_VENDOR_EMAIL = "supplier@example.com"


def seed_preset_accounts(db: Session, password: str | None = None) -> int:
    password = password or config.PRESET_ACCOUNT_PASSWORD
    created = 0
    for email, company, role in PRESET_ACCOUNTS:
        if db.query(Admin.id).filter(Admin.email == email).first():
            continue
        admin = Admin(email=email, company_name=company, role=role)
        admin.set_password(password)
        db.add(admin)
        created += 1
    db.commit()
    logger.info("Preset accounts: created %d", created)
    return created


def seed_demo_auction(db: Session) -> VendorInvite | None:
    if db.query(Auction.id).first():
        return None
    now = utcnow()
    auction = Auction(
        title="Demo Auction",
        description="Seeded auction for trying the vendor flow",
        product_details="DEMO-ITEM-001",
        quantity=10,
        unit="EA",
        delivery_location="Main Warehouse",
        starts_at=now - timedelta(minutes=5),
        ends_at=now + timedelta(hours=2),
        status=AuctionStatus.ACTIVE,
        created_by_email=PRESET_ACCOUNTS[0][0],
        created_by_company=PRESET_ACCOUNTS[0][1],
        notes="Created automatically because SEED_DEMO_AUCTION is set.",
    )
    db.add(auction)
    db.flush()
    invite = VendorInvite(
        auction_id=auction.id,
        vendor_email=DEMO_VENDOR_EMAIL,
        vendor_company="Supplier Co",
        invite_token=secrets.token_hex(6).upper(),
        invite_sent_at=now,
        invite_method="seed",
        status=InviteStatus.PENDING,
    )
    db.add(invite)
    db.commit()
    logger.info("Demo auction %s, vendor %s, invite code %s", auction.id, DEMO_VENDOR_EMAIL, invite.invite_token)
    return invite
