import asyncio

import pytest
from fastapi.testclient import TestClient

from app.main import app
from app.services.realtime import AuctionHub, auction_group, hub, vendor_group

from conftest import make_bid, make_invite


class FakeSocket:
    def __init__(self, fail=False):
        self.sent = []
        self.fail = fail

    async def send_json(self, message):
        if self.fail:
            raise RuntimeError("socket closed")
        self.sent.append(message)


def test_group_names():
    assert auction_group(7) == "auction:7"
    assert vendor_group(7, " Sales@Vendor.com ") == "auction:7:vendor:sales@vendor.com"


def test_notify_reaches_auction_group_only():
    h = AuctionHub()
    watching, elsewhere = FakeSocket(), FakeSocket()
    h.join(watching, auction_group(1))
    h.join(elsewhere, auction_group(2))

    asyncio.run(h.notify_auction(1, "bidChanged", "rankChanged"))

    assert watching.sent == [
        {"type": "bidChanged", "auctionId": 1},
        {"type": "rankChanged", "auctionId": 1},
    ]
    assert elsewhere.sent == []


def test_dead_socket_is_dropped():
    h = AuctionHub()
    alive, dead = FakeSocket(), FakeSocket(fail=True)
    h.join(alive, auction_group(1))
    h.join(dead, auction_group(1))
    h.join(dead, vendor_group(1, "v@x.com"))

    delivered = asyncio.run(h.broadcast(auction_group(1), "auctionChanged", {"auctionId": 1}))

    assert delivered == 1
    assert h.members(auction_group(1)) == 1
    assert h.members(vendor_group(1, "v@x.com")) == 0


def test_leave_removes_from_every_group():
    h = AuctionHub()
    ws = FakeSocket()
    h.join(ws, auction_group(3))
    h.join(ws, vendor_group(3, "v@x.com"))
    h.leave(ws)
    assert h.members(auction_group(3)) == 0
    assert h.members(vendor_group(3, "v@x.com")) == 0


def test_websocket_join(client):
    with client.websocket_connect("/hubs/auction?auctionId=5&vendorEmail=V@x.com") as ws:
        assert ws.receive_json() == {"type": "joined", "auctionId": 5}
        assert hub.members(auction_group(5)) == 1
        assert hub.members(vendor_group(5, "v@x.com")) == 1


@pytest.fixture
def live_client(client):
    # Entered so requests and websockets share one event loop
    with TestClient(app) as tc:
        yield tc


def test_bid_submission_pushes_bid_and_rank_changes(live_client, db, live_auction):
    make_invite(db, live_auction, "v1@vendor.com")
    with live_client.websocket_connect(f"/hubs/auction?auctionId={live_auction.id}") as ws:
        assert ws.receive_json()["type"] == "joined"
        r = live_client.post(
            f"/api/auctions/{live_auction.id}/bids",
            json={"vendor_email": "v1@vendor.com", "delivery_time_days": 3, "cost_per_unit": 9.0},
        )
        assert r.status_code == 200
        assert ws.receive_json() == {"type": "bidChanged", "auctionId": live_auction.id}
        assert ws.receive_json() == {"type": "rankChanged", "auctionId": live_auction.id}


def test_winner_selection_pushes_auction_change(live_client, db, live_auction):
    make_bid(db, live_auction, "v1@vendor.com", 3, 9.0)
    with live_client.websocket_connect(f"/hubs/auction?auctionId={live_auction.id}") as ws:
        ws.receive_json()
        r = live_client.patch(f"/api/auctions/{live_auction.id}", json={"winner_vendor_email": "v1@vendor.com"})
        assert r.status_code == 200
        assert ws.receive_json() == {"type": "auctionChanged", "auctionId": live_auction.id}
