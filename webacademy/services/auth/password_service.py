"""
Password reset flow.
"""
import structlog
from fastapi import BackgroundTasks
from sqlalchemy.ext.asyncio import AsyncSession

from webacademy.core.exceptions import ValidationError
from webacademy.core.security import generate_reset_token, get_password_hash, reset_token_expiry
from webacademy.repositories.user import UserRepository
from webacademy.services.auth.auth_service import normalize_email
from webacademy.services.notifications import NotificationService

logger = structlog.get_logger(__name__)

RESET_REQUESTED = (
    "Si un compte existe avec cet email, un lien de réinitialisation vous a été envoyé. "
    "Vérifiez votre boîte de réception."
)
RESET_DONE = "Mot de passe mis à jour. Vous pouvez vous connecter."
RESET_INVALID = "Lien invalide ou expiré. Veuillez refaire une demande de réinitialisation."


class PasswordResetService:
    """Service for handling password reset functionality."""

    def __init__(self, db: AsyncSession, notifier: NotificationService):
        self.db = db
        self.user_repo = UserRepository(db)
        self.notifier = notifier

    async def request_password_reset(self, email: str, background: BackgroundTasks) -> str:
        """
        Issue a one-hour reset token and email it.

        The response never reveals whether the email exists.
        """
        normalized_email = normalize_email(email)
        user = await self.user_repo.get_by_email(normalized_email)
        if not user:
            logger.info("password_reset_requested_unknown_email", email=normalized_email)
            return RESET_REQUESTED

        token = generate_reset_token()
        await self.user_repo.set_reset_token(user, token, reset_token_expiry())
        background.add_task(self.notifier.send_password_reset, user.email, user.name, token)
        logger.info("password_reset_requested", user_id=str(user.id))
        return RESET_REQUESTED

    async def reset_password(self, token: str, new_password: str) -> str:
        """
        Consume a reset token.

        Raises:
            ValidationError: If the token is unknown, expired or already used
        """
        consumed = await self.user_repo.consume_reset_token(token, get_password_hash(new_password))
        if not consumed:
            logger.warning("password_reset_invalid_token")
            raise ValidationError(RESET_INVALID, field="token")
        logger.info("password_reset_completed")
        return RESET_DONE
