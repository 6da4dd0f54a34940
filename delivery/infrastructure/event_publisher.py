import json
import logging
from collections import defaultdict
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Callable

import redis
from redis.exceptions import RedisError

from delivery.interfaces.IEventPublisher import IEventPublisher

logger = logging.getLogger(__name__)

EventHandler = Callable[[Any], None]


class EventPublisher(IEventPublisher):
    """
    Publishes lifecycle events on Redis channels ``<prefix>:<event>`` and
    hands them to in-process subscribers on a small thread pool, so a slow
    subscriber (e.g. the WhatsApp notifier) never holds up the request.

    Delivery is best-effort: a broken broker or a failing handler is logged
    and never reaches the caller, which has already committed its change.
    """

    def __init__(self, redis_url: str | None = None, channel_prefix: str = "orders", max_workers: int = 4):
        self.channel_prefix = channel_prefix
        self._subscribers: dict[str, list[EventHandler]] = defaultdict(list)
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="event-handler")

        # 1. Broker (Redis)
        self.redis = None
        self.redis_available = False
        if redis_url:
            try:
                self.redis = redis.from_url(
                    redis_url,
                    decode_responses=True,
                    socket_connect_timeout=1,  # Fail fast if Redis is down
                    socket_timeout=1
                )
                self.redis.ping()
                self.redis_available = True
                logger.info("✅ EventPublisher: Connected to Redis.")
            except (RedisError, ValueError) as e:
                logger.warning(f"⚠️ EventPublisher: Redis unreachable ({e}). In-process delivery only.")
        else:
            logger.info("EventPublisher: REDIS_URL not set. In-process delivery only.")

    def channel(self, event: str) -> str:
        return f"{self.channel_prefix}:{event}"

    def subscribe(self, event: str, handler: EventHandler):
        self._subscribers[event].append(handler)

    def publish(self, event: str, payload: Any) -> list[Future]:
        """Returns the futures of the scheduled handlers."""
        # Try Redis
        if self.redis_available:
            try:
                self.redis.publish(self.channel(event), json.dumps(payload, default=str))
            except (RedisError, TypeError) as e:
                self._handle_redis_error(e)

        # Local subscribers
        futures = []
        for handler in list(self._subscribers.get(event, [])):
            try:
                futures.append(self._executor.submit(self._dispatch, event, handler, payload))
            except RuntimeError as e:
                # Submitting after shutdown
                logger.warning(f"⚠️ Dropping {event} for {handler!r}: {e}")
        return futures

    def shutdown(self, wait: bool = True):
        """Stops accepting events; with ``wait`` the queued handlers finish first."""
        self._executor.shutdown(wait=wait)

    @staticmethod
    def _dispatch(event: str, handler: EventHandler, payload: Any):
        try:
            handler(payload)
        except Exception:
            logger.exception(f"❌ Handler {handler!r} failed for {event}")

    def _handle_redis_error(self, e):
        """Log error and stop publishing to Redis."""
        logger.error(f"❌ Redis Error: {e}. Switching to in-process delivery.")
        self.redis_available = False
