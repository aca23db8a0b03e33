from typing import Protocol, runtime_checkable

@runtime_checkable
class EventBusPort(Protocol):
    """Where committed outbox events go. ``value`` is the JSON-ready event envelope."""

    async def publish(self, topic: str, key: str, value: dict) -> None: ...

    async def close(self) -> None: ...
