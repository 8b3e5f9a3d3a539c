"""Websocket feed of auction changes (see app.services.realtime)."""
import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from app.services.realtime import auction_group, hub, vendor_group

router = APIRouter(tags=["live"])
logger = logging.getLogger(__name__)


@router.websocket("/hubs/auction")
async def auction_feed(websocket: WebSocket, auctionId: int, vendorEmail: str | None = None):
    await websocket.accept()
    hub.join(websocket, auction_group(auctionId))
    if vendorEmail:
        hub.join(websocket, vendor_group(auctionId, vendorEmail))
    await websocket.send_json({"type": "joined", "auctionId": auctionId})
    try:
        while True:
            # Clients may send keep-alive pings; content is ignored
            await websocket.receive_text()
    except WebSocketDisconnect:
        logger.debug("Live client left auction %s", auctionId)
    finally:
        hub.leave(websocket)
