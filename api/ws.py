"""
WS /ws: live-update feed for storefront and admin tabs.

Each connection is one NotificationBus subscription. Two tasks run per
connection: a sender draining the subscription into the socket and a
receiver watching for close (and answering "ping" with "pong"). Whichever
finishes first ends the connection.
"""

import asyncio
import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from core.config import NotificationConfig
from core.notification_bus import NotificationBus, Subscription

logger = logging.getLogger(__name__)


async def _send_loop(websocket: WebSocket, subscription: Subscription, timeout: float) -> None:
    while True:
        message = await subscription.next_message()
        try:
            await asyncio.wait_for(websocket.send_text(message), timeout=timeout)
        except asyncio.TimeoutError:
            logger.info("Live-update client %s too slow, disconnecting", subscription.id)
            return
        except (WebSocketDisconnect, RuntimeError):
            return


async def _receive_loop(websocket: WebSocket) -> None:
    while True:
        message = await websocket.receive()
        if message["type"] == "websocket.disconnect":
            return
        if message.get("text") == "ping":
            await websocket.send_text("pong")
        # Anything else from the client is ignored


def create_ws_router(notification_bus: NotificationBus, config: NotificationConfig) -> APIRouter:
    router = APIRouter()

    @router.websocket("/ws")
    async def live_updates(websocket: WebSocket):
        # Subscribe before accepting so nothing broadcast after the handshake is missed
        subscription = notification_bus.subscribe()
        tasks = set()
        try:
            await websocket.accept()

            tasks = {
                asyncio.create_task(
                    _send_loop(websocket, subscription, config.send_timeout_seconds)
                ),
                asyncio.create_task(_receive_loop(websocket)),
            }
            done, _ = await asyncio.wait(tasks, return_when=asyncio.FIRST_COMPLETED)

            for task in done:
                if not task.cancelled() and task.exception() is not None:
                    logger.warning(
                        "Live-update connection %s ended with error: %r",
                        subscription.id, task.exception(),
                    )
        finally:
            notification_bus.unsubscribe(subscription)
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)

    return router
