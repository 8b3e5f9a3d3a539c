"""
Invitation emails over SMTP.

Settings come from app.config (SMTP_HOST, SMTP_PORT, SMTP_USERNAME,
SMTP_PASSWORD, SMTP_FROM_EMAIL, SMTP_FROM_NAME, SMTP_USE_TLS). Without a host
or sender address nothing is sent and EmailNotConfigured is raised, so the
caller can report email_sent=False next to the invite code.
"""
import html
import logging
import smtplib
from email.message import EmailMessage
from email.utils import formataddr
from urllib.parse import quote

from app import config
from app.utils import as_utc

logger = logging.getLogger(__name__)


class EmailNotConfigured(RuntimeError):
    pass


def invite_url(token: str, vendor_email: str) -> str:
    return f"{config.PUBLIC_BASE_URL}/?invite={quote(token)}&email={quote(vendor_email)}"


def _fmt(dt) -> str:
    dt = as_utc(dt)
    return dt.strftime("%A, %d %B %Y %H:%M UTC") if dt else "-"


def render_invite_email(auction, invite) -> tuple[str, str]:
    """Return (subject, html body) for an auction invitation."""
    subject = f"Invitation: {auction.title} - Speed Sourcing Event"
    e = html.escape
    body = f"""\
<p>Hello,</p>

<p>You are invited to participate in a sourcing event hosted through the <strong>Speed Sourcing Portal</strong>.</p>

<ul>
  <li><strong>Event:</strong> {e(auction.title)}</li>
  <li><strong>Delivery Location:</strong> {e(auction.delivery_location)}</li>
  <li><strong>Starts:</strong> {e(_fmt(auction.starts_at))}</li>
  <li><strong>Ends:</strong> {e(_fmt(auction.ends_at))}</li>
</ul>

<p><a href="{e(invite_url(invite.invite_token, invite.vendor_email))}">Access Auction</a></p>

<p>
  <strong>Email:</strong> {e(invite.vendor_email)}<br/>
  <strong>Invite Code:</strong> {e(invite.invite_token)}
</p>

<p>{e(config.SMTP_FROM_NAME)}</p>
"""
    return subject, body


def send_email(to_email: str, subject: str, html_body: str) -> None:
    if not config.SMTP_HOST:
        raise EmailNotConfigured("SMTP host missing: SMTP_HOST")
    if not config.SMTP_FROM_EMAIL:
        raise EmailNotConfigured("SMTP from email missing: SMTP_FROM_EMAIL")

    msg = EmailMessage()
    msg["From"] = formataddr((config.SMTP_FROM_NAME, config.SMTP_FROM_EMAIL))
    msg["To"] = to_email
    msg["Subject"] = subject
    msg.set_content("This message requires an HTML-capable mail client.")
    msg.add_alternative(html_body, subtype="html")

    with smtplib.SMTP(config.SMTP_HOST, config.SMTP_PORT, timeout=30) as client:
        if config.SMTP_USE_TLS:
            client.starttls()
        if config.SMTP_USERNAME:
            client.login(config.SMTP_USERNAME, config.SMTP_PASSWORD)
        client.send_message(msg)
    logger.info("Sent email to %s: %s", to_email, subject)


def send_invite_email(auction, invite) -> None:
    subject, body = render_invite_email(auction, invite)
    send_email(invite.vendor_email, subject, body)
