"""
Outbound email notifications.

Messages are sent from FastAPI background tasks after the response; a
delivery failure is logged and never reaches the caller.
"""
import asyncio
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText

import structlog

from webacademy.core.config import get_settings

logger = structlog.get_logger(__name__)

SIGNATURE = "Cordialement,\nL'équipe Web Academy UCAO-UUT"
HTML_SIGNATURE = "<p>Cordialement,<br>L'équipe Web Academy UCAO-UUT</p>"
BUTTON_STYLE = (
    "display:inline-block;padding:10px 20px;background:#03045e;"
    "color:#fff;text-decoration:none;border-radius:6px;"
)


class NotificationService:
    """Account and identity emails."""

    def __init__(self):
        self.settings = get_settings()

    async def send_student_account_created(self, email: str, name: str) -> bool:
        subject = "Web Academy UCAO-UUT - Compte créé (en attente de vérification)"
        body = (
            "Votre compte étudiant Web Academy a bien été créé.\n\n"
            "Votre identité doit être confirmée par l'administration de votre institut "
            "avant que vous puissiez accéder à la plateforme. Vous recevrez un email dès "
            "que votre compte sera validé."
        )
        text_body = f"Bonjour {name},\n\n{body}\n\n{SIGNATURE}"
        html_body = (
            f"<p>Bonjour {name},</p>"
            "<p>Votre compte étudiant <strong>Web Academy</strong> a bien été créé.</p>"
            "<p>Votre identité doit être confirmée par l'administration de votre institut "
            "avant que vous puissiez accéder à la plateforme. Vous recevrez un email dès "
            "que votre compte sera validé.</p>"
            f"{HTML_SIGNATURE}"
        )
        return await self._send_email(email, subject, html_body, text_body, "account_created")

    async def send_identity_confirmed(self, email: str, name: str) -> bool:
        login_url = f"{self.settings.FRONTEND_URL}/login"
        subject = "Web Academy UCAO-UUT - Identité confirmée, connectez-vous"
        text_body = (
            f"Bonjour {name},\n\n"
            "Votre identité a été confirmée par l'administration. Vous pouvez dès à présent "
            "vous connecter à votre compte Web Academy.\n\n"
            f"Lien de connexion : {login_url}\n\n{SIGNATURE}"
        )
        html_body = (
            f"<p>Bonjour {name},</p>"
            "<p>Votre identité a été confirmée par l'administration. Vous pouvez dès à présent "
            "vous connecter à votre compte Web Academy.</p>"
            f'<p><a href="{login_url}" style="{BUTTON_STYLE}">Se connecter</a></p>'
            f"{HTML_SIGNATURE}"
        )
        return await self._send_email(email, subject, html_body, text_body, "identity_confirmed")

    async def send_password_reset(self, email: str, name: str, token: str) -> bool:
        reset_url = f"{self.settings.FRONTEND_URL}/reset-password?token={token}"
        subject = "Web Academy UCAO-UUT - Réinitialisation du mot de passe"
        text_body = (
            f"Bonjour {name},\n\n"
            "Vous avez demandé la réinitialisation de votre mot de passe. Cliquez sur le lien "
            "ci-dessous pour en choisir un nouveau (lien valide 1 heure) :\n\n"
            f"{reset_url}\n\n"
            "Si vous n'êtes pas à l'origine de cette demande, ignorez cet email.\n\n"
            f"{SIGNATURE}"
        )
        html_body = (
            f"<p>Bonjour {name},</p>"
            "<p>Vous avez demandé la réinitialisation de votre mot de passe. Cliquez sur le "
            "bouton ci-dessous pour en choisir un nouveau (lien valide 1 heure) :</p>"
            f'<p><a href="{reset_url}" style="{BUTTON_STYLE}">Réinitialiser mon mot de passe</a></p>'
            "<p>Si vous n'êtes pas à l'origine de cette demande, ignorez cet email.</p>"
            f"{HTML_SIGNATURE}"
        )
        return await self._send_email(email, subject, html_body, text_body, "password_reset")

    async def _send_email(
        self,
        to_email: str,
        subject: str,
        html_body: str,
        text_body: str,
        kind: str,
    ) -> bool:
        """
        Send email using SMTP.

        Returns:
            Success status
        """
        if not self.settings.smtp_configured:
            logger.warning("smtp_not_configured", to_email=to_email, kind=kind)
            return False

        msg = MIMEMultipart("alternative")
        msg["Subject"] = subject
        msg["From"] = f"{self.settings.SMTP_FROM_NAME} <{self.settings.SMTP_FROM_EMAIL}>"
        msg["To"] = to_email
        msg.attach(MIMEText(text_body, "plain", "utf-8"))
        msg.attach(MIMEText(html_body, "html", "utf-8"))

        try:
            await asyncio.to_thread(self._deliver, msg)
        except (smtplib.SMTPException, OSError) as e:
            logger.error("notification_failed", error=str(e), to_email=to_email, kind=kind)
            return False

        logger.info("notification_sent", to_email=to_email, kind=kind)
        return True

    def _deliver(self, msg: MIMEMultipart) -> None:
        with smtplib.SMTP(self.settings.SMTP_HOST, self.settings.SMTP_PORT, timeout=30) as server:
            if self.settings.SMTP_TLS:
                server.starttls()
            server.login(self.settings.SMTP_USER, self.settings.SMTP_PASSWORD)
            server.send_message(msg)


def get_notification_service() -> NotificationService:
    return NotificationService()
