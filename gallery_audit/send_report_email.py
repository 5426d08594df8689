"""Logic for emailing the audit report."""

import logging
import smtplib
from email.message import EmailMessage
from typing import Any

logger = logging.getLogger(__name__)


def check_email_config(email_config: dict[str, Any]) -> None:
    """Raise ValueError unless sender and recipient are configured."""
    missing = [key for key in ("from", "to") if not email_config.get(key)]
    if missing:
        msg = f"Email configuration is missing: {', '.join(missing)}"
        raise ValueError(msg)


def send_report_email(body_html: str, email_config: dict[str, Any]) -> None:
    """Send the rendered report as an HTML email."""
    check_email_config(email_config)

    msg = EmailMessage()
    msg["From"] = email_config["from"]
    msg["To"] = email_config["to"]
    msg["Subject"] = email_config.get("subject") or "CMS resources to move"
    msg.set_content("This report is only available as HTML.")
    msg.add_alternative(body_html, subtype="html")

    host = email_config.get("smtp_host") or "localhost"
    port = int(email_config.get("smtp_port") or 25)
    logger.info("Sending report to %s via %s:%s", email_config["to"], host, port)
    with smtplib.SMTP(host, port) as smtp:
        smtp.send_message(msg)
