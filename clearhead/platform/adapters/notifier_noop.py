import logging
from clearhead.platform.ports.notifier import NotifierPort

log = logging.getLogger("notifier.noop")

class NoopNotifier(NotifierPort):
    async def send(self, to: str, subject: str, body: str, kind: str) -> None:
        log.info(f"[NOOP NOTIFIER] kind={kind} to={to} subject={subject!r} body_len={len(body)}")
