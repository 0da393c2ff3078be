"""
Handler for ChangeEvent events.

Forwards every admin change to the live-update NotificationBus so open
storefront tabs can refetch the affected resource.
"""

import logging
from typing import Callable

from core.events import ChangeEvent

logger = logging.getLogger(__name__)


def handle_change_event(notification_bus) -> Callable:
    """
    Factory that returns a ChangeEvent handler.

    Args:
        notification_bus: NotificationBus instance

    Returns:
        Handler callable that broadcasts the change
    """

    def handler(event: ChangeEvent):
        delivered = notification_bus.broadcast(event)
        logger.debug(f"{event.type} pushed to {delivered} live client(s)")

    return handler
