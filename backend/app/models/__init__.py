from app.models.admin import Admin, AdminRole
from app.models.auction import Auction, AuctionStatus
from app.models.auction_event import AuctionEvent
from app.models.invite import VendorInvite, InviteStatus
from app.models.bid import Bid
from app.models.supplier import Supplier

__all__ = [
    "Admin",
    "AdminRole",
    "Auction",
    "AuctionStatus",
    "AuctionEvent",
    "VendorInvite",
    "InviteStatus",
    "Bid",
    "Supplier",
]
