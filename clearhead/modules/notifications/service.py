import logging
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from clearhead.core.errors import NotificationFailure
from clearhead.modules.notifications.models import MessageTemplate, OutboundMessage
from clearhead.modules.notifications.templates import DEFAULTS, render
from clearhead.platform.ports.notifier import NotifierPort
from clearhead.platform.provider_registry import registry

logger = logging.getLogger(__name__)

class NotificationsService:
    def __init__(self, s: AsyncSession, notifier: NotifierPort | None = None):
        self.s = s
        self.notifier = notifier or registry.notifier()

    async def create_template(self, *, name: str, channel: str, subject: str | None, body: str) -> MessageTemplate:
        t = MessageTemplate(name=name, channel=channel, subject=subject, body=body)
        self.s.add(t); await self.s.flush(); await self.s.commit(); return t

    async def render(self, kind: str, variables: dict | None) -> tuple[str, str]:
        # admin-stored template wins over the built-in one
        res = await self.s.execute(
            select(MessageTemplate)
            .where(MessageTemplate.name == kind, MessageTemplate.channel == "email")
            .order_by(MessageTemplate.created_at.desc())
            .limit(1)
        )
        t = res.scalar_one_or_none()
        if t:
            return render(t.subject, t.body, variables or {})
        if kind not in DEFAULTS:
            raise ValueError("template_not_found")
        subject, body = DEFAULTS[kind]
        return render(subject, body, variables or {})

    async def deliver(self, to: str, kind: str, subject: str, body: str) -> str | None:
        """Hand one rendered message to the notifier. Returns the error text, or None when sent."""
        try:
            await self.notifier.send(to, subject, body, kind)
            return None
        except Exception as e:
            logger.error(f"Notifier failed kind={kind} to={to}: {e}")
            return str(e) or e.__class__.__name__

    async def record(self, *, to: str, kind: str, subject: str, body: str, variables: dict | None, error: str | None) -> OutboundMessage:
        m = OutboundMessage(
            channel="email", kind=kind, to=to, subject=subject or None, body=body,
            meta=variables or {}, status="failed" if error else "sent", error=error,
        )
        self.s.add(m); await self.s.flush()
        return m

    async def send(self, *, to: str, kind: str, variables: dict | None) -> OutboundMessage:
        subject, body = await self.render(kind, variables)
        error = await self.deliver(to, kind, subject, body)
        m = await self.record(to=to, kind=kind, subject=subject, body=body, variables=variables, error=error)
        await self.s.commit()
        if error:
            raise NotificationFailure(detail=f"{kind} to {to} failed: {error}")
        return m
