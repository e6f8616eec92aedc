"""
Delivery Service.

Sends transactional email (password reset) over SMTP. Callers get a
boolean back; failures are logged here and never raised, so a broken mail
server cannot break the page that triggered the message.
"""

from __future__ import annotations

import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import formataddr

from flask import current_app


class DeliveryService:
    """Infrastructure service for sending notifications."""

    @staticmethod
    def build_message(to_email: str, subject: str, body_html: str, body_text: str) -> MIMEMultipart:
        config = current_app.config
        msg = MIMEMultipart('alternative')
        msg['Subject'] = subject
        msg['From'] = formataddr((config.get('MAIL_FROM_NAME') or config.get('APP_NAME', ''),
                                  config['MAIL_DEFAULT_SENDER']))
        msg['To'] = to_email
        # Plain text first: clients render the last alternative they support
        msg.attach(MIMEText(body_text, 'plain', 'utf-8'))
        msg.attach(MIMEText(body_html, 'html', 'utf-8'))
        return msg

    @staticmethod
    def send_email(to_email: str, subject: str, body_html: str, body_text: str) -> bool:
        """
        Send a multipart (HTML + plain text) email via SMTP with STARTTLS.

        Returns:
            True when the server accepted the message, or when sending is
            suppressed by MAIL_SUPPRESS_SEND; False on any SMTP/network error.
        """
        config = current_app.config
        msg = DeliveryService.build_message(to_email, subject, body_html, body_text)

        if config.get('MAIL_SUPPRESS_SEND'):
            current_app.logger.info(f"[DeliveryService] Mail suppressed, not sending '{subject}' to {to_email}")
            return True

        try:
            with smtplib.SMTP(config['MAIL_SERVER'], config['MAIL_PORT'],
                              timeout=config.get('MAIL_TIMEOUT', 10)) as server:
                if config.get('MAIL_USE_TLS', True):
                    server.starttls()
                if config.get('MAIL_USERNAME'):
                    server.login(config['MAIL_USERNAME'], config.get('MAIL_PASSWORD') or '')
                server.sendmail(config['MAIL_DEFAULT_SENDER'], [to_email], msg.as_string())
        except (smtplib.SMTPException, OSError) as e:
            current_app.logger.error(f"[DeliveryService] Email to {to_email} failed: {e}", exc_info=True)
            return False

        current_app.logger.info(f"[DeliveryService] Sent '{subject}' to {to_email}")
        return True
