"""Outbound email: OTP delivery and certificate notices."""
import logging
import smtplib
from dataclasses import dataclass
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from typing import Optional

from . import config
from .errors import NotificationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CertificateNotice:
    recipient_email: str
    display_name: str
    step_label: str
    level_label: str
    examiner_name: Optional[str] = None


class EmailNotifier:
    """Sends mail over SMTP, or only logs it when SMTP is not configured."""

    def __init__(
        self,
        host: str = config.SMTP_HOST,
        port: int = config.SMTP_PORT,
        user: str = config.SMTP_USER,
        password: str = config.SMTP_PASSWORD,
        from_email: str = config.SMTP_FROM_EMAIL,
        from_name: str = config.SMTP_FROM_NAME,
    ):
        self.host = host
        self.port = port
        self.user = user
        self.password = password
        self.from_email = from_email
        self.from_name = from_name

    @property
    def enabled(self) -> bool:
        return bool(self.host and self.from_email)

    def send_otp(self, email: str, otp: str) -> None:
        subject = "Your login code"
        body = f"""
Your one-time login code is {otp}.

It expires in {config.OTP_EXPIRE_MINUTES} minutes. If you did not request it, ignore this email.
"""
        self._send(email, subject, body)

    def send_certificate(self, notice: CertificateNotice) -> None:
        subject = f"Certificate of competency - {notice.step_label}"
        examiner_line = f"Examined by: {notice.examiner_name}\n" if notice.examiner_name else ""
        body = f"""
Dear {notice.display_name},

This certifies that you completed {notice.step_label} with the result: {notice.level_label}.
{examiner_line}
Best regards,
{self.from_name}
"""
        self._send(notice.recipient_email, subject, body)

    def _send(self, recipient: str, subject: str, body: str) -> None:
        if not self.enabled:
            logger.warning(
                "SMTP not configured. Email sending is disabled. "
                "Configure SMTP settings to enable email sending."
            )
            logger.info(f"Email prepared for {recipient}: {subject}")
            return

        msg = MIMEMultipart()
        msg["From"] = f"{self.from_name} <{self.from_email}>"
        msg["To"] = recipient
        msg["Subject"] = subject
        msg.attach(MIMEText(body, "plain"))

        try:
            if self.port == 465:
                # SSL connection
                server = smtplib.SMTP_SSL(self.host, self.port)
            else:
                # TLS connection
                server = smtplib.SMTP(self.host, self.port)
                server.starttls()
            try:
                if self.user and self.password:
                    server.login(self.user, self.password)
                server.send_message(msg)
            finally:
                server.quit()
        except (smtplib.SMTPException, OSError) as e:
            logger.error(f"Failed to send email to {recipient}: {e}", exc_info=True)
            raise NotificationError("Email could not be delivered, please try again later") from e

        logger.info(f"Email sent to {recipient}: {subject}")


def get_notifier() -> EmailNotifier:
    """Dependency to get the outbound notifier."""
    return EmailNotifier()
