import json
import os

import httpx
import pytest
from conftest import FakeEmailProvider

from app.domain.enums import DeliveryMethod, EmailKind
from app.infrastructure.external_services.email_service import (
    EmailArchive, EmailProviderNotConfigured, EmailService, OutgoingEmail, SendGridProvider
)

ARGS = {"artist_name": "DJ Alpha", "submission_id": "sub-1", "feedback": "Great <b>energy</b>"}


@pytest.fixture
def archive(tmp_path):
    return EmailArchive(str(tmp_path))


async def test_primary_provider_used_first(archive):
    primary, fallback = FakeEmailProvider(), FakeEmailProvider(DeliveryMethod.SMTP)
    service = EmailService([primary, fallback], archive)

    result = await service.send(EmailKind.APPROVAL, "a@example.com", ARGS)
    assert result.success
    assert result.method == "sendgrid"
    assert fallback.sent == []
    # user supplied text is escaped
    assert "Great &lt;b&gt;energy&lt;/b&gt;" in primary.sent[0].html


async def test_fallback_on_primary_failure(archive):
    primary, fallback = FakeEmailProvider(fail=True), FakeEmailProvider(DeliveryMethod.SMTP)
    result = await EmailService([primary, fallback], archive).send(EmailKind.REJECTION, "a@example.com", ARGS)
    assert result.success
    assert result.method == "smtp"
    assert result.message_id == "<smtp-1@test>"


async def test_both_providers_down(archive):
    service = EmailService([FakeEmailProvider(fail=True), FakeEmailProvider(DeliveryMethod.SMTP, fail=True)], archive)
    result = await service.send(EmailKind.APPROVAL, "a@example.com", ARGS)
    assert not result.success
    assert "sendgrid is down" in result.error
    assert "smtp is down" in result.error


async def test_missing_template_argument_is_reported(archive):
    result = await EmailService([FakeEmailProvider()], archive).send(EmailKind.APPROVAL, "a@example.com", {})
    assert not result.success
    assert "artist_name" in result.error


async def test_every_payload_is_archived(archive, tmp_path):
    service = EmailService([FakeEmailProvider(fail=True)], archive)
    await service.send(EmailKind.APPROVAL, "a@example.com", ARGS)
    await service.send_test_email("ops@example.com")

    files = sorted(os.listdir(tmp_path))
    assert len(files) == 2
    with open(tmp_path / files[0]) as fh:
        record = json.load(fh)
    assert record["result"]["success"] is False

    stored = await service.stored_emails()
    assert [e["type"] for e in stored] == ["test", "approval"]
    assert stored[0]["to"] == "ops@example.com"


async def test_sendgrid_request():
    seen = {}

    def handler(request):
        seen["auth"] = request.headers["Authorization"]
        seen["body"] = json.loads(request.content)
        return httpx.Response(202, headers={"x-message-id": "sg-123"})

    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    provider = SendGridProvider(api_key="SG.key", api_url="https://sendgrid.test/v3/mail/send", http_client=client)
    email = OutgoingEmail(EmailKind.TEST, "a@example.com", "from@example.com", "TuneDrop", "Hi", "<p>hi</p>")

    assert await provider.send(email) == "sg-123"
    assert seen["auth"] == "Bearer SG.key"
    assert seen["body"]["personalizations"][0]["to"][0]["email"] == "a@example.com"
    await client.aclose()


async def test_sendgrid_error_status_raises():
    client = httpx.AsyncClient(transport=httpx.MockTransport(lambda request: httpx.Response(401)))
    provider = SendGridProvider(api_key="SG.key", api_url="https://sendgrid.test/v3/mail/send", http_client=client)
    email = OutgoingEmail(EmailKind.TEST, "a@example.com", "from@example.com", "TuneDrop", "Hi", "<p>hi</p>")
    with pytest.raises(httpx.HTTPStatusError):
        await provider.send(email)
    await client.aclose()


async def test_unconfigured_sendgrid():
    email = OutgoingEmail(EmailKind.TEST, "a@example.com", "from@example.com", "TuneDrop", "Hi", "<p>hi</p>")
    with pytest.raises(EmailProviderNotConfigured):
        await SendGridProvider(api_key="").send(email)
