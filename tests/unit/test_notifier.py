import requests

from conftest import FakeResponse
from rsvp_backend.notifier import (
    NotificationResult,
    WhatsAppNotifier,
    build_confirmation_message,
    mask_phone,
)
from rsvp_backend.schemas import RSVPRecord


def _record(attendance: str = "yes") -> RSVPRecord:
    return RSVPRecord(
        id="lk2x1-abc123",
        created_at="2026-03-19T13:00:00.000Z",
        name="Jane Doe",
        phone="+27731234567",
        attendance=attendance,
        guests=2,
        message="",
    )


class RecordingSession:
    """Sesión falsa: guarda la última llamada y devuelve (o lanza) lo configurado."""

    def __init__(self, response=None, exc=None):
        self.response = response
        self.exc = exc
        self.calls = []

    def post(self, url, **kwargs):
        self.calls.append((url, kwargs))
        if self.exc is not None:
            raise self.exc
        return self.response


def test_attending_message():
    body = build_confirmation_message(_record("yes"), "Ana and Luis")
    assert body == (
        "Hi Jane Doe, Great news, we received your RSVP as attending. "
        "Thank you for responding to our wedding invitation. With love, Ana and Luis"
    )


def test_not_attending_message_uses_generic_variant():
    body = build_confirmation_message(_record("no"), "Ana and Luis")
    assert "We received your RSVP." in body
    assert "attending" not in body
    assert body.endswith("With love, Ana and Luis")


def test_disabled_notifier_does_no_network_io(settings, monkeypatch):
    def _boom(*args, **kwargs):
        raise AssertionError("no debería llamar a la red")

    monkeypatch.setattr(requests, "post", _boom)
    notifier = WhatsAppNotifier(settings)

    assert notifier.enabled is False
    assert notifier.send_confirmation(_record()) == NotificationResult(sent=False, error=None)


def test_partial_credentials_keep_notifier_disabled(settings_whatsapp):
    partial = settings_whatsapp.model_copy(update={"twilio_auth_token": "  "})
    assert WhatsAppNotifier(partial).enabled is False


def test_successful_send_posts_to_twilio(settings_whatsapp):
    session = RecordingSession(response=FakeResponse(201, {"sid": "SM1"}))
    result = WhatsAppNotifier(settings_whatsapp, session=session).send_confirmation(_record())

    assert result == NotificationResult(sent=True, error=None)
    url, kwargs = session.calls[0]
    assert url == "https://api.twilio.com/2010-04-01/Accounts/AC123/Messages.json"
    assert kwargs["auth"] == ("AC123", "secret-token")
    assert kwargs["timeout"] == 5
    assert kwargs["data"]["From"] == "whatsapp:+14155238886"
    assert kwargs["data"]["To"] == "whatsapp:+27731234567"
    assert kwargs["data"]["Body"].startswith("Hi Jane Doe,")


def test_sender_gets_whatsapp_prefix(settings_whatsapp):
    cfg = settings_whatsapp.model_copy(update={"twilio_whatsapp_from": "+14155238886"})
    session = RecordingSession(response=FakeResponse(201, {}))
    WhatsAppNotifier(cfg, session=session).send_confirmation(_record())
    assert session.calls[0][1]["data"]["From"] == "whatsapp:+14155238886"


def test_twilio_error_message_is_returned(settings_whatsapp):
    session = RecordingSession(response=FakeResponse(400, {"code": 21211, "message": "Invalid 'To' Phone Number"}))
    result = WhatsAppNotifier(settings_whatsapp, session=session).send_confirmation(_record())
    assert result == NotificationResult(sent=False, error="Invalid 'To' Phone Number")


def test_http_error_without_json_body(settings_whatsapp):
    session = RecordingSession(response=FakeResponse(503, None))
    result = WhatsAppNotifier(settings_whatsapp, session=session).send_confirmation(_record())
    assert result.sent is False
    assert result.error == "WhatsApp send failed (HTTP 503)."


def test_http_error_with_non_object_json_body(settings_whatsapp):
    session = RecordingSession(response=FakeResponse(502, ["Bad Gateway"]))
    result = WhatsAppNotifier(settings_whatsapp, session=session).send_confirmation(_record())
    assert result == NotificationResult(sent=False, error="WhatsApp send failed (HTTP 502).")


def test_unexpected_response_object_is_captured(settings_whatsapp):
    class BrokenResponse:
        status_code = 500

        @property
        def ok(self):
            raise RuntimeError("broken response")

    session = RecordingSession(response=BrokenResponse())
    result = WhatsAppNotifier(settings_whatsapp, session=session).send_confirmation(_record())
    assert result == NotificationResult(sent=False, error="broken response")


def test_transport_error_is_captured(settings_whatsapp):
    session = RecordingSession(exc=requests.ConnectionError("connection refused"))
    result = WhatsAppNotifier(settings_whatsapp, session=session).send_confirmation(_record())
    assert result == NotificationResult(sent=False, error="connection refused")


def test_timeout_without_text_uses_generic_error(settings_whatsapp):
    session = RecordingSession(exc=requests.Timeout())
    result = WhatsAppNotifier(settings_whatsapp, session=session).send_confirmation(_record())
    assert result == NotificationResult(sent=False, error="WhatsApp send failed.")


def test_unexpected_error_never_escapes(settings_whatsapp):
    session = RecordingSession(exc=RuntimeError("kaboom"))
    result = WhatsAppNotifier(settings_whatsapp, session=session).send_confirmation(_record())
    assert result == NotificationResult(sent=False, error="kaboom")


def test_mask_phone():
    assert mask_phone("+27731234567") == "+27*******67"
    assert mask_phone(None) == "<no-phone>"
    assert "1234567" not in mask_phone("+27731234567")
