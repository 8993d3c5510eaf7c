import logging
import smtplib
from email.message import EmailMessage

from .. import config

logger = logging.getLogger(__name__)


def smtp_configured() -> bool:
    return bool(config.SMTP_HOST and config.SMTP_FROM)


def send_email(*, to_email: str, subject: str, text: str) -> None:
    """
    Send a plain-text email over SMTP (Gmail App Password recommended).

    Without SMTP_HOST the message is only logged ("mock" delivery) so local
    development and tests never need a mail server.

    Env vars:
      SMTP_HOST, SMTP_PORT, SMTP_USER, SMTP_PASS, SMTP_FROM, SMTP_TLS
    """
    if not smtp_configured():
        logger.info("[EMAIL MOCK] to=%s subject=%s", to_email, subject)
        return

    msg = EmailMessage()
    msg["Subject"] = subject
    msg["From"] = config.SMTP_FROM
    msg["To"] = to_email
    msg.set_content(text)

    logger.debug(
        "Connecting to %s:%s (TLS=%s) to send '%s' to %s",
        config.SMTP_HOST, config.SMTP_PORT, config.SMTP_TLS, subject, to_email,
    )
    with smtplib.SMTP(config.SMTP_HOST, config.SMTP_PORT, timeout=config.SMTP_TIMEOUT_S) as smtp:
        smtp.ehlo()
        if config.SMTP_TLS:
            smtp.starttls()
            smtp.ehlo()
        if config.SMTP_USER and config.SMTP_PASS:
            smtp.login(config.SMTP_USER, config.SMTP_PASS)
        smtp.send_message(msg)
    logger.info("Email sent to %s: %s", to_email, subject)
