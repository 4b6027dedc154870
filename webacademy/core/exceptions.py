"""
Custom exceptions for the application.

Every service raises one of these; the API layer renders them as
``{"detail": message}`` with the carried status code.
"""
from typing import Any, Dict, Optional


class WebAcademyException(Exception):
    """Base exception for all Web Academy exceptions."""

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(WebAcademyException):
    """Missing or malformed input."""

    def __init__(self, message: str, field: Optional[str] = None):
        details = {"field": field} if field else {}
        super().__init__(message, status_code=400, details=details)


class AuthenticationError(WebAcademyException):
    """Missing, invalid or expired credentials."""

    def __init__(self, message: str = "Authentification requise"):
        super().__init__(message, status_code=401)


class InvalidCredentialsError(AuthenticationError):
    """Bad email/password pair."""

    def __init__(self, message: str = "Email ou mot de passe incorrect"):
        super().__init__(message)


class InvalidTokenError(AuthenticationError):
    """Bearer token could not be decoded or has expired."""

    def __init__(self, message: str = "Token invalide"):
        super().__init__(message)


class AuthorizationError(WebAcademyException):
    """Role, tenant or ownership denial."""

    def __init__(self, message: str = "Accès refusé."):
        super().__init__(message, status_code=403)


class IdentityNotVerifiedError(AuthorizationError):
    """Student account still waiting for identity confirmation."""

    def __init__(
        self,
        message: str = (
            "Votre compte est en attente de vérification par l'administration de votre institut. "
            "Vous recevrez un email dès que votre identité sera confirmée."
        ),
    ):
        super().__init__(message)


class NotFoundError(WebAcademyException):
    """Resource not found, including resources hidden by tenant isolation."""

    def __init__(self, message: str = "Ressource non trouvée"):
        super().__init__(message, status_code=404)


class ConflictError(WebAcademyException):
    """Uniqueness violation."""

    def __init__(self, message: str = "Cette ressource existe déjà."):
        super().__init__(message, status_code=400)


class RateLimitError(WebAcademyException):
    """Rate limit exceeded exception."""

    def __init__(
        self,
        message: str = "Trop de tentatives, veuillez réessayer dans quelques minutes.",
        retry_after: Optional[int] = None,
    ):
        details = {"retry_after": retry_after} if retry_after else {}
        super().__init__(message, status_code=429, details=details)


class StorageError(WebAcademyException):
    """File storage operation failed."""

    def __init__(self, message: str, operation: Optional[str] = None):
        details = {"operation": operation} if operation else {}
        super().__init__(message, status_code=500, details=details)
