import asyncio
import logging
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from clearhead.platform.ports.notifier import NotifierPort
from clearhead.core.config import settings

log = logging.getLogger("notifier.smtp")

class SmtpNotifier(NotifierPort):
    def __init__(self):
        if not settings.SMTP_HOST:
            raise RuntimeError("SMTP_HOST not configured")
        self.host = settings.SMTP_HOST
        self.port = settings.SMTP_PORT
        self.user = settings.SMTP_USER
        self.password = settings.SMTP_PASSWORD
        self.use_tls = settings.SMTP_USE_TLS
        self.sender = settings.EMAIL_FROM

    def _build(self, to: str, subject: str, body: str) -> MIMEMultipart:
        msg = MIMEMultipart("alternative")
        msg["From"] = self.sender
        msg["To"] = to
        msg["Subject"] = subject
        msg.attach(MIMEText(body, "html", "utf-8"))
        return msg

    def _send_blocking(self, to: str, subject: str, body: str) -> None:
        msg = self._build(to, subject, body)
        with smtplib.SMTP(self.host, self.port, timeout=30) as server:
            if self.use_tls:
                server.starttls()
            if self.user and self.password:
                server.login(self.user, self.password)
            server.sendmail(self.sender, [to], msg.as_string())

    async def send(self, to: str, subject: str, body: str, kind: str) -> None:
        await asyncio.to_thread(self._send_blocking, to, subject, body)
        log.info(f"Email sent kind={kind} to={to}")
