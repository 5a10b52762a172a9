"""
Mail Service - outbound account emails over SMTP
"""
import logging
import smtplib
from email.message import EmailMessage

from stockflow.core import Settings

logger = logging.getLogger(__name__)


class MailService:
    """Password reset mail"""

    @staticmethod
    def build_reset_otp_message(settings: Settings, to_email: str, otp: str) -> EmailMessage:
        message = EmailMessage()
        message["Subject"] = f"{settings.APP_NAME} - Password Reset OTP"
        message["From"] = settings.SMTP_FROM
        message["To"] = to_email
        message.set_content(
            f"Your OTP for password reset is: {otp}\n\n"
            f"This OTP will expire in {settings.OTP_EXPIRY_MINUTES} minutes.\n\n"
            "If you didn't request this, please ignore this email."
        )
        message.add_alternative(
            f"""\
<html>
  <body style="font-family: Arial, sans-serif; color: #333;">
    <h2>Password Reset Request</h2>
    <p>Use the OTP below to reset your {settings.APP_NAME} password:</p>
    <p style="font-size: 32px; font-weight: bold; letter-spacing: 8px;">{otp}</p>
    <p><strong>This OTP will expire in {settings.OTP_EXPIRY_MINUTES} minutes.</strong></p>
    <p>If you didn't request this, please ignore this email.</p>
  </body>
</html>
""",
            subtype="html"
        )
        return message

    @staticmethod
    def send_reset_otp(settings: Settings, to_email: str, otp: str) -> None:
        """
        Send the reset OTP to ``to_email``.

        Raises smtplib.SMTPException when SMTP is not configured or the server
        refuses the message, OSError when it cannot be reached.
        """
        if not settings.SMTP_HOST:
            raise smtplib.SMTPException("SMTP_HOST is not configured")

        message = MailService.build_reset_otp_message(settings, to_email, otp)
        with smtplib.SMTP(settings.SMTP_HOST, settings.SMTP_PORT, timeout=settings.SMTP_TIMEOUT_SECONDS) as server:
            if settings.SMTP_USE_TLS:
                server.starttls()
            if settings.SMTP_USER:
                server.login(settings.SMTP_USER, settings.SMTP_PASSWORD or "")
            server.send_message(message)

        logger.debug(f"Reset mail delivered to {to_email} via {settings.SMTP_HOST}")
