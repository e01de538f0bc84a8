"""Check-in email delivery over SMTP.

Renders the welcome email with the guest's verification deep link and hands it
to the SMTP relay configured in settings.
"""

import asyncio
import html
import logging
import smtplib
from email.message import EmailMessage
from email.utils import formataddr
from typing import Callable, Optional, Union
from urllib.parse import quote, urlencode

from hotel_chat.core.config import Settings

logger = logging.getLogger(__name__)


class EmailDeliveryError(Exception):
    """Raised when the SMTP relay does not accept a message."""


class EmailService:
    """Service for sending check-in emails via SMTP"""

    def __init__(
        self,
        host: str,
        port: int,
        username: str,
        password: str,
        from_name: str,
        verify_url: str,
        smtp_factory: Optional[Callable[..., smtplib.SMTP]] = None,
    ):
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.from_name = from_name
        self.verify_url = verify_url
        self._smtp_factory = smtp_factory or smtplib.SMTP_SSL

    @classmethod
    def from_settings(cls, settings: Settings) -> "EmailService":
        if not settings.EMAIL_USER or not settings.EMAIL_PASS:
            logger.warning("EMAIL_USER or EMAIL_PASS is not set; check-in emails will fail.")
        return cls(
            host=settings.SMTP_HOST,
            port=settings.SMTP_PORT,
            username=settings.EMAIL_USER,
            password=settings.EMAIL_PASS,
            from_name=settings.EMAIL_FROM_NAME,
            verify_url=settings.VERIFY_URL,
        )

    def build_deep_link(
        self, name: str, email: str, room: Union[str, int], hotel: str
    ) -> str:
        """Verification page URL with the guest's details as percent-encoded query parameters."""
        query = urlencode(
            {"name": name, "email": email, "room": str(room), "hotel": hotel},
            quote_via=_quote,
        )
        return f"{self.verify_url}?{query}"

    def render_check_in_email(
        self, name: str, room: Union[str, int], hotel: str, deep_link: str
    ) -> str:
        name = html.escape(name)
        hotel = html.escape(hotel)
        room = html.escape(str(room))
        link = html.escape(deep_link)
        return f"""
      <div style="font-family: Arial, sans-serif; color: #333; padding: 20px;">
        <h2 style="color: #e22828;">Welcome to {hotel}!</h2>
        <p>Dear {name},</p>
        <p>You have successfully checked in to <strong>{room}</strong>.</p>
        <p>To start chatting with our assistant, click the button below:</p>
        <p style="text-align: center;">
          <a href="{link}" style="background-color: #e22828; color: white; padding: 12px 20px; text-decoration: none; border-radius: 5px;">Click to Verify</a>
        </p>
        <p>If the button doesn't work, copy and paste the following URL in your browser:</p>
        <code>{link}</code>
        <p>Enjoy your stay!<br>The {hotel} Team</p>
      </div>
    """

    def build_message(
        self, name: str, email: str, room: Union[str, int], hotel: str
    ) -> EmailMessage:
        deep_link = self.build_deep_link(name, email, room, hotel)
        message = EmailMessage()
        message["From"] = formataddr((self.from_name, self.username))
        message["To"] = email
        message["Subject"] = f"Welcome to {hotel}, {name}!"
        message.set_content(
            f"Welcome to {hotel}, {name}! Verify your stay here: {deep_link}"
        )
        message.add_alternative(
            self.render_check_in_email(name, room, hotel, deep_link), subtype="html"
        )
        return message

    async def send_check_in_email(
        self, name: str, email: str, room: Union[str, int], hotel: str
    ) -> None:
        try:
            message = self.build_message(name, email, room, hotel)
            # smtplib is blocking, so run it in a separate thread
            await asyncio.to_thread(self._deliver, message)
        except Exception as e:
            raise EmailDeliveryError(f"Could not send check-in email to {email}") from e
        logger.info(f"Check-in email sent to {email}")

    def _deliver(self, message: EmailMessage) -> None:
        with self._smtp_factory(self.host, self.port) as server:
            server.login(self.username, self.password)
            server.send_message(message)


def _quote(value, safe="", encoding=None, errors=None) -> str:
    # Same character set as encodeURIComponent; spaces become %20, not "+"
    return quote(value, safe="-_.!~*'()", encoding=encoding, errors=errors)
