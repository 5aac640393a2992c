import pytest
import resend

from src.services import email_service


@pytest.fixture
def sent(monkeypatch):
    """Captures the params passed to Resend instead of sending."""
    captured = []

    def fake_send(params):
        captured.append(params)
        return {"id": "email_123"}

    monkeypatch.setenv("RESEND_API_KEY", "re_test")
    monkeypatch.setattr(resend.Emails, "send", fake_send)
    return captured


@pytest.mark.asyncio
async def test_nothing_is_sent_without_api_key(monkeypatch):
    monkeypatch.setattr(resend.Emails, "send", lambda params: pytest.fail("should not send"))

    assert await email_service.send_registration_confirmation_email("Ada", "ada@example.com", "WNY AI Conference") is False


@pytest.mark.asyncio
async def test_registration_confirmation(sent):
    ok = await email_service.send_registration_confirmation_email("<Ada>", "ada@example.com", "WNY AI Conference")

    assert ok is True
    assert sent[0]["to"] == ["ada@example.com"]
    assert "&lt;Ada&gt;" in sent[0]["html"]
    assert sent[0]["from"] == email_service.DEFAULT_FROM_EMAIL


@pytest.mark.asyncio
async def test_sponsor_inquiry_goes_to_organizers(sent, monkeypatch):
    monkeypatch.setenv("DEFAULT_NOTIFICATION_EMAIL", "board@wnyai.org, events@wnyai.org")

    ok = await email_service.send_sponsor_inquiry_email(
        "partners@acme.example", "Gold", email_service.get_organizer_emails()
    )

    assert ok is True
    assert sent[0]["to"] == ["board@wnyai.org", "events@wnyai.org"]
    assert sent[0]["reply_to"] == ["partners@acme.example"]


@pytest.mark.asyncio
async def test_send_errors_are_swallowed(monkeypatch):
    def broken_send(params):
        raise RuntimeError("resend down")

    monkeypatch.setenv("RESEND_API_KEY", "re_test")
    monkeypatch.setattr(resend.Emails, "send", broken_send)

    assert await email_service.send_registration_confirmation_email("Ada", "ada@example.com", "WNY AI Conference") is False


def test_config_info():
    info = email_service.get_email_config_info()
    assert info == {
        "api_key_configured": False,
        "from_email": "WNY AI <info@wnyai.org>",
        "organizer_emails": 0,
        "configured": False,
    }
