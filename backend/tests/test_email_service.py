import pytest

from app import config
from app.services import email_service
from app.services.email_service import EmailNotConfigured, render_invite_email, send_invite_email

from conftest import make_invite


class FakeSMTP:
    instances = []

    def __init__(self, host, port, timeout=None):
        self.host, self.port = host, port
        self.calls = []
        self.sent = []
        FakeSMTP.instances.append(self)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def starttls(self):
        self.calls.append("starttls")

    def login(self, user, password):
        self.calls.append(("login", user, password))

    def send_message(self, msg):
        self.sent.append(msg)


class BrokenSMTP(FakeSMTP):
    def __init__(self, host, port, timeout=None):
        raise ConnectionRefusedError("connection refused")


@pytest.fixture
def smtp_configured(monkeypatch):
    FakeSMTP.instances = []
    monkeypatch.setattr(config, "SMTP_HOST", "smtp.test")
    monkeypatch.setattr(config, "SMTP_PORT", 2525)
    monkeypatch.setattr(config, "SMTP_FROM_EMAIL", "buying@corp.com")
    monkeypatch.setattr(config, "SMTP_USERNAME", "mailer")
    monkeypatch.setattr(config, "SMTP_PASSWORD", "pw")
    monkeypatch.setattr(config, "SMTP_USE_TLS", True)
    monkeypatch.setattr(email_service.smtplib, "SMTP", FakeSMTP)


def test_render_invite_email(db, live_auction):
    invite = make_invite(db, live_auction, "v@vendor.com", token="ABCDEF123456")
    subject, body = render_invite_email(live_auction, invite)
    assert subject == f"Invitation: {live_auction.title} - Speed Sourcing Event"
    assert "ABCDEF123456" in body
    assert "invite=ABCDEF123456&amp;email=v%40vendor.com" in body
    assert live_auction.delivery_location in body


def test_render_escapes_html(db, buyer):
    from conftest import make_auction

    auction = make_auction(db, creator=buyer.email, title="<b>Bolts</b>")
    invite = make_invite(db, auction, "v@vendor.com")
    _, body = render_invite_email(auction, invite)
    assert "<b>Bolts</b>" not in body
    assert "&lt;b&gt;Bolts&lt;/b&gt;" in body


def test_send_without_host(db, live_auction):
    invite = make_invite(db, live_auction, "v@vendor.com")
    with pytest.raises(EmailNotConfigured, match="SMTP_HOST"):
        send_invite_email(live_auction, invite)


def test_send_invite_email(smtp_configured, db, live_auction):
    invite = make_invite(db, live_auction, "v@vendor.com")
    send_invite_email(live_auction, invite)
    smtp = FakeSMTP.instances[-1]
    assert (smtp.host, smtp.port) == ("smtp.test", 2525)
    assert smtp.calls == ["starttls", ("login", "mailer", "pw")]
    msg = smtp.sent[0]
    assert msg["To"] == "v@vendor.com"
    assert "buying@corp.com" in msg["From"]


def test_invites_endpoint_reports_sent(smtp_configured, client, live_auction):
    r = client.post("/api/invites", json={"auction_id": live_auction.id, "vendors": [{"email": "v@vendor.com"}]})
    result = r.json()[0]
    assert result["email_sent"] is True
    assert result["email_error"] is None


def test_invites_endpoint_reports_smtp_failure(smtp_configured, monkeypatch, client, live_auction):
    monkeypatch.setattr(email_service.smtplib, "SMTP", BrokenSMTP)
    r = client.post("/api/invites", json={"auction_id": live_auction.id, "vendors": [{"email": "v@vendor.com"}]})
    assert r.status_code == 200
    result = r.json()[0]
    assert result["email_sent"] is False
    assert "connection refused" in result["email_error"]
