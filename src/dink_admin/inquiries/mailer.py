from __future__ import annotations

import html
import logging
import smtplib
from dataclasses import dataclass
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import formataddr
from typing import Any, Dict, Optional

from ..core.exceptions import UpstreamError

logger = logging.getLogger(__name__)


@dataclass
class SmtpConfig:
    host: str = ""
    port: int = 587
    user: str = ""
    password: str = ""
    from_email: str = "noreply@dinkhousepb.com"
    from_name: str = "The Dink House"

    @classmethod
    def from_mapping(cls, values: Optional[Dict[str, Any]]) -> "SmtpConfig":
        values = values or {}
        return cls(**{k: v for k, v in values.items() if k in cls.__dataclass_fields__})

    @property
    def configured(self) -> bool:
        return bool(self.host and self.user and self.password)


class SmtpMailer:
    """Sends multipart (text + HTML) mail over STARTTLS.

    When SMTP is not configured the message is only logged and `send`
    returns False so callers can record it as pending.
    """

    def __init__(self, config: SmtpConfig):
        self.config = config

    @property
    def configured(self) -> bool:
        return self.config.configured

    @property
    def sender(self) -> str:
        return self.config.from_email

    def send(self, to_email: str, subject: str, text: str, body_html: Optional[str] = None) -> bool:
        if not self.configured:
            logger.warning("SMTP not configured; not sending %r to %s", subject, to_email)
            return False

        msg = MIMEMultipart("alternative")
        msg["Subject"] = subject
        msg["From"] = formataddr((self.config.from_name, self.config.from_email))
        msg["To"] = to_email
        msg.attach(MIMEText(text, "plain"))
        if body_html:
            msg.attach(MIMEText(body_html, "html"))

        try:
            with smtplib.SMTP(self.config.host, self.config.port) as server:
                server.starttls()
                server.login(self.config.user, self.config.password)
                server.send_message(msg)
        except (smtplib.SMTPException, OSError) as e:
            logger.error("Email send to %s failed: %s", to_email, e)
            raise UpstreamError("Failed to send response")
        return True


RESPONSE_HTML = """<!DOCTYPE html>
<html>
<head>
<style>
  body {{ font-family: -apple-system, "Segoe UI", Roboto, sans-serif; line-height: 1.6; color: #333; margin: 0; }}
  .container {{ max-width: 600px; margin: 0 auto; padding: 20px; }}
  .header {{ background: linear-gradient(135deg, #CDFE00 0%, #9BCF00 100%); padding: 30px; text-align: center; border-radius: 8px 8px 0 0; }}
  .logo {{ max-width: 200px; height: auto; margin-bottom: 20px; }}
  .content {{ background: #fff; padding: 30px; border: 1px solid #e0e0e0; border-top: none; border-radius: 0 0 8px 8px; }}
  .footer {{ text-align: center; padding: 20px; color: #666; font-size: 14px; }}
  .button {{ display: inline-block; background: #CDFE00; color: #000; padding: 12px 24px; text-decoration: none; border-radius: 4px; font-weight: 600; margin-top: 20px; }}
</style>
</head>
<body>
<div class="container">
  <div class="header">
    {logo}
    <h2 style="color: white; margin: 0;">Response from The Dink House</h2>
  </div>
  <div class="content">
    <h3>{subject}</h3>
    <div style="margin: 20px 0;">{message}</div>
    <p style="margin-top: 30px;">If you have any further questions, please don't hesitate to reach out.</p>
    <p style="text-align: center;"><a href="{site_url}" class="button">Visit Our Website</a></p>
  </div>
  <div class="footer"><p>The Dink House - Where Pickleball Lives</p></div>
</div>
</body>
</html>
"""


def response_html(subject: str, message: str, *, site_url: str, logo_url: str = "") -> str:
    logo = f'<img src="{html.escape(logo_url)}" alt="The Dink House" class="logo" />' if logo_url else ""
    return RESPONSE_HTML.format(
        logo=logo,
        subject=html.escape(subject),
        message=html.escape(message).replace("\n", "<br>"),
        site_url=html.escape(site_url),
    )


def response_text(subject: str, message: str, *, site_url: str) -> str:
    return (
        f"{subject}\n\n{message}\n\n"
        "If you have any further questions, please don't hesitate to reach out.\n\n"
        f"--\nThe Dink House - Where Pickleball Lives\nVisit us at: {site_url}"
    )
