from typing import Protocol, runtime_checkable

@runtime_checkable
class NotifierPort(Protocol):
    async def send(self, to: str, subject: str, body: str, kind: str) -> None: ...
