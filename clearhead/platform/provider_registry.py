from clearhead.core.config import settings
from clearhead.platform.ports.event_bus import EventBusPort
from clearhead.platform.adapters.bus_noop import NoopEventBus
from clearhead.platform.adapters.bus_redis import RedisEventBus
from clearhead.platform.ports.notifier import NotifierPort
from clearhead.platform.adapters.notifier_noop import NoopNotifier
from clearhead.platform.adapters.notifier_smtp import SmtpNotifier

class ProviderRegistry:
    _event_bus: EventBusPort | None = None
    _notifier: NotifierPort | None = None

    @classmethod
    def event_bus(cls) -> EventBusPort:
        if cls._event_bus is None:
            prov = (settings.EVENT_BUS_PROVIDER or "noop").lower()
            if prov == "redis":
                cls._event_bus = RedisEventBus()
            else:
                cls._event_bus = NoopEventBus()
        return cls._event_bus

    @classmethod
    def notifier(cls) -> NotifierPort:
        if cls._notifier is None:
            prov = (settings.NOTIFIER_PROVIDER or "noop").lower()
            if prov == "smtp":
                cls._notifier = SmtpNotifier()
            else:
                cls._notifier = NoopNotifier()
        return cls._notifier

    @classmethod
    async def close(cls) -> None:
        # only adapters that were actually built hold connections
        if cls._event_bus is not None:
            await cls._event_bus.close()
            cls._event_bus = None

registry = ProviderRegistry()
