import json
import logging
from redis.asyncio import from_url as redis_from_url
from clearhead.platform.ports.event_bus import EventBusPort
from clearhead.core.config import settings

log = logging.getLogger("bus.redis")

class RedisEventBus(EventBusPort):
    """Appends events to a Redis stream; consumers group on ``event_type``."""

    def __init__(self):
        if not settings.REDIS_URL:
            raise RuntimeError("REDIS_URL not configured")
        self.redis = redis_from_url(settings.REDIS_URL, encoding="utf-8", decode_responses=True)
        self.stream = settings.REDIS_STREAM or "clearhead.events"

    async def publish(self, topic: str, key: str, value: dict) -> None:
        fields = {
            "topic": topic,
            "key": key,
            "event_type": value.get("event_type", ""),
            "outbox_id": value.get("outbox_id", ""),
            # Decimal amounts and dates go over the wire as strings
            "value": json.dumps(value, default=str),
        }
        msg_id = await self.redis.xadd(self.stream, fields, maxlen=settings.REDIS_STREAM_MAXLEN, approximate=True)
        log.debug(f"[REDIS BUS] {fields['event_type']} -> {self.stream} id={msg_id} key={key}")

    async def close(self) -> None:
        await self.redis.aclose()
