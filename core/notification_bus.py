"""
Live-update fan-out to connected browser tabs.

Every broadcast goes to every open subscription, in broadcast order, with no
topic filtering: each tab decides which event types it cares about. Delivery
is best effort and at most once:
- no replay: a tab that connects later fetches current state instead
- no acknowledgement: a subscriber whose queue is full misses that event
- a closed subscription is dropped from the fan-out set

The bus owns its registry. Nothing outside subscribe()/unsubscribe() adds or
removes subscribers.
"""

import asyncio
import logging
import threading
from uuid import uuid4

from core.config import NotificationConfig
from core.events import ChangeEvent
from utils.timezone import now_utc

logger = logging.getLogger(__name__)


def _running_loop() -> asyncio.AbstractEventLoop | None:
    try:
        return asyncio.get_running_loop()
    except RuntimeError:
        return None


class Subscription:
    """
    One connected client's mailbox.

    A bounded FIFO of serialized messages. The transport drains it with
    next_message(); when the transport falls behind and the queue fills,
    further messages are dropped for this subscriber only.
    """

    def __init__(self, max_pending: int):
        self.id = str(uuid4())
        self.connected_at = now_utc()
        self.delivered = 0
        self.dropped = 0
        self._queue: asyncio.Queue[str] = asyncio.Queue(maxsize=max_pending)
        self._loop = _running_loop()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def offer(self, message: str) -> bool:
        """
        Enqueue without blocking. False if closed or full.

        Calls from a thread other than the owning event loop are handed to
        that loop; ordering is preserved and the result is optimistic.
        """
        if self._closed:
            return False
        if self._loop is None or _running_loop() is self._loop:
            return self._enqueue(message)
        self._loop.call_soon_threadsafe(self._enqueue, message)
        return True

    def _enqueue(self, message: str) -> bool:
        try:
            self._queue.put_nowait(message)
        except asyncio.QueueFull:
            self.dropped += 1
            logger.debug("Subscriber %s not keeping up, dropped message", self.id)
            return False
        self.delivered += 1
        return True

    async def next_message(self) -> str:
        """Wait for the next message."""
        return await self._queue.get()

    def drain(self) -> list[str]:
        """Take everything queued right now without waiting."""
        messages = []
        while True:
            try:
                messages.append(self._queue.get_nowait())
            except asyncio.QueueEmpty:
                return messages

    def close(self) -> None:
        self._closed = True


class NotificationBus:
    """
    Registry of open subscriptions plus broadcast.

    Usage:
        bus = NotificationBus(NotificationConfig())
        subscription = bus.subscribe()
        try:
            message = await subscription.next_message()
        finally:
            bus.unsubscribe(subscription)
    """

    def __init__(self, config: NotificationConfig | None = None):
        self._config = config or NotificationConfig()
        self._subscriptions: dict[str, Subscription] = {}
        self._lock = threading.Lock()

    @property
    def subscriber_count(self) -> int:
        with self._lock:
            return len(self._subscriptions)

    def subscribe(self) -> Subscription:
        """Open a subscription. It receives broadcasts issued from now on."""
        subscription = Subscription(self._config.max_pending_messages)
        with self._lock:
            self._subscriptions[subscription.id] = subscription
            count = len(self._subscriptions)
        logger.info("Live-update client connected (%s open)", count)
        return subscription

    def unsubscribe(self, subscription: Subscription) -> None:
        """Close and forget a subscription. Safe to call twice."""
        subscription.close()
        with self._lock:
            removed = self._subscriptions.pop(subscription.id, None)
            count = len(self._subscriptions)
        if removed is not None:
            logger.info(
                "Live-update client disconnected (%s open, %s dropped)",
                count, subscription.dropped,
            )

    def broadcast(self, event: ChangeEvent) -> int:
        """
        Push an event to every open subscription.

        Returns the number of subscribers that accepted it.
        """
        message = event.to_json()

        with self._lock:
            subscriptions = list(self._subscriptions.values())

        delivered = 0
        for subscription in subscriptions:
            if subscription.closed:
                self.unsubscribe(subscription)
                continue
            if subscription.offer(message):
                delivered += 1

        logger.debug("Broadcast %s to %s/%s subscribers", event.type, delivered, len(subscriptions))
        return delivered

    def close_all(self) -> None:
        """Close every subscription (shutdown)."""
        with self._lock:
            subscriptions = list(self._subscriptions.values())
            self._subscriptions.clear()
        for subscription in subscriptions:
            subscription.close()
