"""
In-process order event bus.

Admin views subscribe to order events and refetch when something changes.
Subscribers are asyncio queues owned by the event loop that serves the
subscription; publishers may run on worker threads (sync routes), so events
are handed to each queue through its loop.
"""

import asyncio
import json
import logging
import threading
import uuid
from dataclasses import dataclass, field, asdict
from datetime import datetime, timezone
from typing import Dict, Optional, Tuple

logger = logging.getLogger("honestmeals.notifications")

ORDER_CREATED = "order_created"
ORDER_STATUS_CHANGED = "order_status_changed"


@dataclass
class OrderEvent:
    type: str
    order_id: str
    status: str
    total_amount: Optional[str] = None
    event_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    occurred_at: str = field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat()
    )

    @classmethod
    def from_order(cls, event_type: str, order) -> "OrderEvent":
        status = getattr(order.status, "value", order.status)
        return cls(
            type=event_type,
            order_id=str(order.id),
            status=str(status),
            total_amount=str(order.total_amount),
        )

    def to_sse(self) -> str:
        """Server-Sent Events frame"""
        return f"event: {self.type}\nid: {self.event_id}\ndata: {json.dumps(asdict(self))}\n\n"


class OrderEventBus:
    """Fan-out of order events to every connected subscriber.

    Delivery is best effort: a subscriber whose queue is full misses the
    event, which only delays its next refetch.
    """

    def __init__(self, queue_size: int = 100) -> None:
        self._queue_size = queue_size
        self._subscribers: Dict[int, Tuple[asyncio.AbstractEventLoop, asyncio.Queue]] = {}
        self._lock = threading.Lock()

    @property
    def subscriber_count(self) -> int:
        with self._lock:
            return len(self._subscribers)

    def subscribe(self) -> asyncio.Queue:
        """Register a queue bound to the running event loop."""
        loop = asyncio.get_running_loop()
        queue: asyncio.Queue = asyncio.Queue(maxsize=self._queue_size)
        with self._lock:
            self._subscribers[id(queue)] = (loop, queue)
        logger.info(f"subscriber_added total={self.subscriber_count}")
        return queue

    def unsubscribe(self, queue: asyncio.Queue) -> None:
        with self._lock:
            self._subscribers.pop(id(queue), None)
        logger.info(f"subscriber_removed total={self.subscriber_count}")

    def publish(self, event: OrderEvent) -> int:
        """Hand the event to every subscriber; returns how many were reached."""
        with self._lock:
            targets = list(self._subscribers.items())

        delivered = 0
        for key, (loop, queue) in targets:
            try:
                loop.call_soon_threadsafe(self._offer, queue, event)
                delivered += 1
            except RuntimeError:
                # loop already closed; the subscription is gone
                with self._lock:
                    self._subscribers.pop(key, None)
                logger.warning(f"subscriber_dropped reason=loop_closed event={event.type}")

        logger.info(
            f"order_event_published type={event.type} order_id={event.order_id} "
            f"subscribers={delivered}"
        )
        return delivered

    def close_all(self) -> int:
        """
        End every open subscription, as on shutdown.

        Each subscriber receives None after any pending events; streams stop
        when they read it. Returns how many subscriptions were closed.
        """
        with self._lock:
            targets = list(self._subscribers.values())
            self._subscribers.clear()

        closed = 0
        for loop, queue in targets:
            try:
                loop.call_soon_threadsafe(self._close, queue)
                closed += 1
            except RuntimeError:
                logger.warning("subscriber_dropped reason=loop_closed event=close")
        logger.info(f"subscribers_closed total={closed}")
        return closed

    @staticmethod
    def _offer(queue: asyncio.Queue, event: OrderEvent) -> None:
        try:
            queue.put_nowait(event)
        except asyncio.QueueFull:
            logger.warning(
                f"order_event_dropped type={event.type} order_id={event.order_id} "
                "reason=queue_full"
            )

    @staticmethod
    def _close(queue: asyncio.Queue) -> None:
        if queue.full():
            # the end marker must get through; drop the oldest event
            queue.get_nowait()
        queue.put_nowait(None)


def _default_bus() -> OrderEventBus:
    from app.config import settings

    return OrderEventBus(queue_size=settings.event_queue_size)


# Process-wide bus used by the order service and the admin stream
order_events = _default_bus()
