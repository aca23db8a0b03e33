import logging
from clearhead.platform.ports.event_bus import EventBusPort

log = logging.getLogger("bus.noop")

class NoopEventBus(EventBusPort):
    async def publish(self, topic: str, key: str, value: dict) -> None:
        log.debug(f"[NOOP BUS] {value.get('event_type')} {value.get('subject')} topic={topic} key={key}")

    async def close(self) -> None:
        return None
