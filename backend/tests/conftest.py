import os

# Configure before the app modules read their settings
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SEED_PRESET_ACCOUNTS"] = "0"
os.environ["SEED_DEMO_AUCTION"] = "0"
os.environ["SMTP_HOST"] = ""
os.environ["SMTP_FROM_EMAIL"] = ""

from datetime import timedelta

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.database import get_db
from app.main import app
from app.models import Admin, AdminRole, Auction, AuctionStatus, Bid, VendorInvite, InviteStatus
from app.models.base import Base
from app.services.realtime import hub
from app.utils import utcnow

engine = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db():
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db):
    def override_get_db():
        session = TestingSessionLocal()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
        hub._groups.clear()


def make_admin(db, email, role, company="Acme Buying", password=None):
    admin = Admin(email=email, company_name=company, role=role)
    if password:
        admin.set_password(password)
    db.add(admin)
    db.commit()
    db.refresh(admin)
    return admin


def make_auction(db, creator="buyer@corp.com", starts_in=timedelta(minutes=-5), ends_in=timedelta(hours=2), **kw):
    now = utcnow()
    fields = dict(
        title="Steel brackets",
        description="",
        product_details="BRK-100",
        quantity=10,
        unit="EA",
        delivery_location="Plant 4",
        starts_at=now + starts_in,
        ends_at=now + ends_in,
        status=AuctionStatus.ACTIVE if starts_in <= timedelta(0) else AuctionStatus.UPCOMING,
        created_by_email=creator,
        created_by_company="Corp",
    )
    fields.update(kw)
    auction = Auction(**fields)
    db.add(auction)
    db.commit()
    db.refresh(auction)
    return auction


def make_invite(db, auction, email, token=None, company="Vendor Co"):
    invite = VendorInvite(
        auction_id=auction.id,
        vendor_email=email,
        vendor_company=company,
        invite_token=token or f"TOK{auction.id}{email.split('@')[0].upper()}"[:12],
        invite_method="manual",
        status=InviteStatus.PENDING,
    )
    db.add(invite)
    db.commit()
    db.refresh(invite)
    return invite


def make_bid(db, auction, email, days, price, submitted_at=None):
    bid = Bid(
        auction_id=auction.id,
        vendor_email=email,
        vendor_company=email.split("@")[1],
        delivery_time_days=days,
        cost_per_unit=price,
        total_cost=round(price * auction.quantity, 2),
        submitted_at=submitted_at or utcnow(),
    )
    db.add(bid)
    db.commit()
    db.refresh(bid)
    return bid


@pytest.fixture
def owner(db):
    return make_admin(db, "owner@corp.com", AdminRole.PRODUCT_OWNER, password="secret")


@pytest.fixture
def global_admin(db):
    return make_admin(db, "gadmin@corp.com", AdminRole.GLOBAL_ADMIN)


@pytest.fixture
def buyer(db):
    return make_admin(db, "buyer@corp.com", AdminRole.INTERNAL_USER)


@pytest.fixture
def live_auction(db, buyer):
    return make_auction(db, creator=buyer.email)
