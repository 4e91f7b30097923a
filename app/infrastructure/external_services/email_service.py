"""Email delivery: SendGrid first, SMTP relay as fallback, every payload archived"""

import asyncio
import json
import logging
import os
import smtplib
import uuid
from dataclasses import dataclass, asdict
from datetime import datetime
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import make_msgid
from typing import List, Optional, Sequence

import httpx

from ...core.config import settings
from ...domain.enums import DeliveryMethod, EmailKind
from .email_templates import render

logger = logging.getLogger(__name__)


class EmailProviderNotConfigured(Exception):
    pass


@dataclass(frozen=True)
class OutgoingEmail:
    kind: EmailKind
    to_email: str
    from_email: str
    from_name: str
    subject: str
    html: str
    submission_id: Optional[str] = None


@dataclass
class EmailResult:
    success: bool
    message_id: Optional[str] = None
    method: Optional[str] = None
    error: Optional[str] = None
    sent_to: Optional[str] = None


class SendGridProvider:
    """Primary transactional email provider (SendGrid v3 HTTP API)"""

    method = DeliveryMethod.SENDGRID

    def __init__(self, api_key: Optional[str] = None, api_url: Optional[str] = None,
                 http_client: Optional[httpx.AsyncClient] = None, timeout: float = 10.0):
        self.api_key = api_key if api_key is not None else settings.SENDGRID_API_KEY
        self.api_url = api_url or settings.SENDGRID_API_URL
        self._http_client = http_client
        self.timeout = timeout

    async def send(self, email: OutgoingEmail) -> str:
        if not self.api_key:
            raise EmailProviderNotConfigured("SENDGRID_API_KEY is not set")

        payload = {
            "personalizations": [{"to": [{"email": email.to_email}]}],
            "from": {"email": email.from_email, "name": email.from_name},
            "subject": email.subject,
            "content": [{"type": "text/html", "value": email.html}],
        }
        headers = {"Authorization": f"Bearer {self.api_key}"}

        if self._http_client is not None:
            response = await self._http_client.post(self.api_url, json=payload, headers=headers)
        else:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(self.api_url, json=payload, headers=headers)
        response.raise_for_status()
        return response.headers.get("x-message-id") or make_msgid(domain="sendgrid.net")


class SmtpProvider:
    """Fallback SMTP relay"""

    method = DeliveryMethod.SMTP

    def __init__(self, host: Optional[str] = None, port: Optional[int] = None,
                 username: Optional[str] = None, password: Optional[str] = None,
                 use_tls: Optional[bool] = None):
        self.smtp_host = host or settings.SMTP_HOST
        self.smtp_port = port or settings.SMTP_PORT
        self.smtp_username = username if username is not None else settings.SMTP_USERNAME
        self.smtp_password = password if password is not None else settings.SMTP_PASSWORD
        self.smtp_use_tls = settings.SMTP_USE_TLS if use_tls is None else use_tls

    def _build_message(self, email: OutgoingEmail) -> MIMEMultipart:
        msg = MIMEMultipart('alternative')
        msg['Subject'] = email.subject
        msg['From'] = f"{email.from_name} <{email.from_email}>"
        msg['To'] = email.to_email
        msg['Message-ID'] = make_msgid()
        msg.attach(MIMEText(email.html, 'html'))
        return msg

    async def send(self, email: OutgoingEmail) -> str:
        if not self.smtp_username or not self.smtp_password:
            raise EmailProviderNotConfigured("SMTP credentials are not set")

        msg = self._build_message(email)

        def send_sync():
            with smtplib.SMTP(self.smtp_host, self.smtp_port, timeout=30) as server:
                if self.smtp_use_tls:
                    server.starttls()
                server.login(self.smtp_username, self.smtp_password)
                server.send_message(msg)

        # Run in thread pool to avoid blocking
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(None, send_sync)
        return msg['Message-ID']


class EmailArchive:
    """Append-only JSON record of every outgoing payload"""

    def __init__(self, directory: Optional[str] = None):
        self.directory = directory or settings.EMAIL_ARCHIVE_DIR

    def _write(self, record: dict) -> str:
        os.makedirs(self.directory, exist_ok=True)
        stamp = datetime.utcnow().strftime("%Y-%m-%dT%H-%M-%S-%f")
        filename = f"email_{stamp}_{uuid.uuid4().hex[:8]}.json"
        path = os.path.join(self.directory, filename)
        # "x" mode: records are never overwritten
        with open(path, "x", encoding="utf-8") as fh:
            json.dump(record, fh, indent=2, default=str)
        return path

    def _read_all(self) -> List[dict]:
        if not os.path.isdir(self.directory):
            return []
        records = []
        for name in os.listdir(self.directory):
            if not name.endswith(".json"):
                continue
            path = os.path.join(self.directory, name)
            try:
                with open(path, encoding="utf-8") as fh:
                    data = json.load(fh)
            except (OSError, ValueError) as e:
                logger.warning("Skipping unreadable email record %s: %s", name, e)
                continue
            data["id"] = name
            records.append(data)
        return sorted(records, key=lambda r: r.get("timestamp") or "", reverse=True)

    async def append(self, record: dict) -> str:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self._write, record)

    async def list(self) -> List[dict]:
        """Newest first"""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self._read_all)


class EmailService:

    def __init__(self, providers: Optional[Sequence] = None, archive: Optional[EmailArchive] = None):
        self.providers = list(providers) if providers is not None else [SendGridProvider(), SmtpProvider()]
        self.archive = archive or EmailArchive()
        self.from_email = settings.FROM_EMAIL
        self.from_name = settings.FROM_NAME

    async def send(self, kind: EmailKind, recipient: str, template_args: Optional[dict] = None) -> EmailResult:
        """Render and deliver one message; never raises"""
        template_args = template_args or {}
        try:
            rendered = render(kind, self.from_name, template_args)
        except KeyError as e:
            logger.error("Missing template argument %s for %s email", e, kind.value)
            return EmailResult(success=False, error=f"Missing template argument: {e}", sent_to=recipient)

        email = OutgoingEmail(
            kind=kind,
            to_email=recipient,
            from_email=self.from_email,
            from_name=self.from_name,
            subject=rendered.subject,
            html=rendered.html,
            submission_id=template_args.get("submission_id"),
        )

        result = await self._deliver(email)
        await self._archive(email, result)
        return result

    async def _deliver(self, email: OutgoingEmail) -> EmailResult:
        if not email.to_email:
            return EmailResult(success=False, error="No recipient address")

        errors = []
        for provider in self.providers:
            method = provider.method.value
            try:
                message_id = await provider.send(email)
            except Exception as e:
                logger.warning("%s delivery of %s email failed: %s", method, email.kind.value, e)
                errors.append(f"{method}: {e}")
                continue
            logger.info("%s email sent to %s via %s", email.kind.value, email.to_email, method)
            return EmailResult(success=True, message_id=message_id, method=method, sent_to=email.to_email)

        logger.error("All email providers failed for %s email to %s", email.kind.value, email.to_email)
        return EmailResult(
            success=False,
            error="; ".join(errors) or "No email provider configured",
            sent_to=email.to_email
        )

    async def _archive(self, email: OutgoingEmail, result: EmailResult) -> None:
        record = {
            "type": email.kind.value,
            "from": email.from_email,
            "to": email.to_email,
            "subject": email.subject,
            "html": email.html,
            "submissionId": email.submission_id,
            "timestamp": datetime.utcnow().isoformat(),
            "result": asdict(result),
        }
        try:
            await self.archive.append(record)
        except OSError as e:
            logger.error("Could not archive %s email: %s", email.kind.value, e)

    async def stored_emails(self) -> List[dict]:
        return await self.archive.list()

    async def send_test_email(self, recipient: Optional[str] = None) -> EmailResult:
        return await self.send(EmailKind.TEST, recipient or settings.TEST_EMAIL)
