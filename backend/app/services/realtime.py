"""
Live auction change feed.

Clients open the /hubs/auction websocket for one auction (optionally as a
vendor) and receive small JSON events: bidChanged, rankChanged and
auctionChanged. Delivery is best effort. A client that misses events
reconnects and refetches; nothing is queued or replayed.
"""
import logging
from collections import defaultdict

from fastapi import WebSocket, WebSocketDisconnect

from app.utils import normalize_email

logger = logging.getLogger(__name__)


def auction_group(auction_id: int) -> str:
    return f"auction:{auction_id}"


def vendor_group(auction_id: int, vendor_email: str) -> str:
    return f"auction:{auction_id}:vendor:{normalize_email(vendor_email)}"


class AuctionHub:
    def __init__(self):
        self._groups: dict[str, set[WebSocket]] = defaultdict(set)

    def join(self, websocket: WebSocket, group: str) -> None:
        self._groups[group].add(websocket)

    def leave(self, websocket: WebSocket) -> None:
        for group in list(self._groups):
            self._groups[group].discard(websocket)
            if not self._groups[group]:
                del self._groups[group]

    def members(self, group: str) -> int:
        return len(self._groups.get(group, ()))

    async def broadcast(self, group: str, event: str, payload: dict) -> int:
        """Send one event to every socket in the group. Returns how many received it."""
        message = {"type": event, **payload}
        delivered = 0
        for ws in list(self._groups.get(group, ())):
            try:
                await ws.send_json(message)
                delivered += 1
            except (WebSocketDisconnect, RuntimeError, OSError) as e:
                logger.warning("Dropping dead socket from %s: %s", group, e)
                self.leave(ws)
        return delivered

    async def notify_auction(self, auction_id: int, *events: str) -> None:
        for event in events:
            await self.broadcast(auction_group(auction_id), event, {"auctionId": auction_id})


hub = AuctionHub()
