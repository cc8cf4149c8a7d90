# src/supportdesk/mailer.py
"""
Ticket delivery.

Two strategies, picked per submission from credential presence:

* ``SmtpDelivery``: one SMTP send to the configured recipient.
* ``UnconfiguredDelivery``: no network at all; the rendered email is written
  to the preview logger (stderr) and the ticket counts as recorded.

A failed SMTP send surfaces as ``DeliveryError``; it is never retried and
never downgraded to the preview path.
"""
import logging
import smtplib
import ssl
from email.message import EmailMessage
from typing import Callable, Optional, Protocol

from .errors import DeliveryError
from .logger import get_logger, get_preview_logger
from .models import AppConfig, DeliveryOutcome, EmailDraft, SmtpConfig

logger = get_logger(__name__)

SENT_MESSAGE = "Support ticket sent successfully."
RECORDED_MESSAGE = (
    "Ticket recorded (email preview logged — configure SMTP credentials "
    "to enable delivery)."
)


class MailTransport(Protocol):
    def send(self, message: EmailMessage) -> None: ...


TransportFactory = Callable[[SmtpConfig], MailTransport]


class SmtpTransport:
    """smtplib transport. No timeout is imposed; a hung server hangs the call."""

    def __init__(self, settings: SmtpConfig):
        self.settings = settings

    def send(self, message: EmailMessage) -> None:
        s = self.settings
        if s.secure:
            with smtplib.SMTP_SSL(s.host, s.port, context=ssl.create_default_context()) as conn:
                conn.login(s.auth.user, s.auth.password)
                conn.send_message(message)
        else:
            with smtplib.SMTP(s.host, s.port) as conn:
                conn.ehlo()
                if conn.has_extn("starttls"):
                    conn.starttls(context=ssl.create_default_context())
                    conn.ehlo()
                conn.login(s.auth.user, s.auth.password)
                conn.send_message(message)


def build_message(draft: EmailDraft, sender: str) -> EmailMessage:
    msg = EmailMessage()
    msg["From"] = sender
    msg["To"] = draft.to
    msg["Subject"] = draft.subject
    if draft.reply_to:
        msg["Reply-To"] = draft.reply_to
    msg.set_content(draft.body)
    return msg


class UnconfiguredDelivery:
    def __init__(self, preview: logging.Logger):
        self.preview = preview

    def deliver(self, draft: EmailDraft) -> DeliveryOutcome:
        self.preview.info("=== EMAIL PREVIEW (SMTP not configured) ===")
        self.preview.info("To: %s", draft.to)
        self.preview.info("Subject: %s", draft.subject)
        self.preview.info("%s", draft.body)
        self.preview.info("============================================")
        return DeliveryOutcome(success=True, message=RECORDED_MESSAGE)


class SmtpDelivery:
    def __init__(self, settings: SmtpConfig, transport_factory: TransportFactory):
        self.settings = settings
        self.transport_factory = transport_factory

    def deliver(self, draft: EmailDraft) -> DeliveryOutcome:
        message = build_message(draft, sender=self.settings.auth.user)
        try:
            self.transport_factory(self.settings).send(message)
        except Exception as e:
            logger.error("❌ SMTP delivery to %s via %s:%s failed: %s",
                         draft.to, self.settings.host, self.settings.port, e)
            raise DeliveryError(str(e)) from e
        logger.info("📧 Ticket emailed to %s", draft.to)
        return DeliveryOutcome(success=True, message=SENT_MESSAGE)


class Dispatcher:
    """
    Delivers composed tickets for one config.

    Args:
        config: effective configuration.
        transport_factory: builds the transport for a configured send;
            swapped out in tests.
        preview_logger: side channel for unsent previews; must not be the
            protocol response stream.
    """

    def __init__(self, config: AppConfig,
                 transport_factory: TransportFactory = SmtpTransport,
                 preview_logger: Optional[logging.Logger] = None):
        self.config = config
        self.transport_factory = transport_factory
        self.preview_logger = preview_logger or get_preview_logger()

    def select_strategy(self):
        if not self.config.smtp.has_credentials:
            return UnconfiguredDelivery(self.preview_logger)
        return SmtpDelivery(self.config.smtp, self.transport_factory)

    def dispatch(self, draft: EmailDraft) -> DeliveryOutcome:
        return self.select_strategy().deliver(draft)
