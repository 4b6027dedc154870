"""
Tenant resolution and query scoping.

The tenant is the institute of the caller. It is null for anonymous callers
and for the super-admin, in which case queries span every institute.
"""
from dataclasses import dataclass
from typing import Optional

import structlog
from sqlalchemy import or_

from webacademy.core.exceptions import AuthorizationError, NotFoundError
from webacademy.services.auth.authorization.principal import Principal

logger = structlog.get_logger(__name__)

FORBIDDEN_INSTITUTE = "Institut non autorisé"


def resolve_tenant(principal: Optional[Principal]) -> Optional[str]:
    if principal is None:
        return None
    return principal.institute


@dataclass(frozen=True)
class RequestContext:
    """Caller identity and tenant, passed explicitly into every service."""
    principal: Optional[Principal] = None
    tenant: Optional[str] = None

    @classmethod
    def for_principal(cls, principal: Optional[Principal]) -> "RequestContext":
        return cls(principal=principal, tenant=resolve_tenant(principal))

    @property
    def is_authenticated(self) -> bool:
        return self.principal is not None

    @property
    def is_admin(self) -> bool:
        return self.principal is not None and self.principal.is_admin

    @property
    def is_super_admin(self) -> bool:
        return self.principal is not None and self.principal.is_super_admin

    def require_principal(self) -> Principal:
        if self.principal is None:
            raise AuthorizationError()
        return self.principal

    def strict_scope(self, column):
        """``column == tenant`` when a tenant is set."""
        if self.tenant is None:
            return None
        return column == self.tenant

    def shared_scope(self, column):
        """``column IN (tenant, NULL)`` for content readable across institutes."""
        if self.tenant is None:
            return None
        return or_(column == self.tenant, column.is_(None))

    def institute_filter(self, column, requested: Optional[str]):
        """
        Combine an explicit ``institute`` query filter with the tenant.

        Raises:
            AuthorizationError: If the filter names another institute
        """
        if requested is None:
            return None
        if self.tenant is not None and requested != self.tenant:
            logger.warning(
                "cross_tenant_filter_denied",
                tenant=self.tenant,
                requested=requested,
                user_id=str(self.principal.user_id) if self.principal else None,
            )
            raise AuthorizationError(FORBIDDEN_INSTITUTE)
        return column == requested

    def owns_row(self, institute: Optional[str], shared: bool = False) -> bool:
        """Whether a row with ``institute`` lies inside the tenant."""
        if self.tenant is None:
            return True
        if shared and institute is None:
            return True
        return institute == self.tenant

    def ensure_in_tenant(self, institute: Optional[str], message: str, shared: bool = False) -> None:
        """
        Hide rows of other institutes behind a NotFound.

        Raises:
            NotFoundError: If the row lies outside the tenant
        """
        if not self.owns_row(institute, shared=shared):
            raise NotFoundError(message)

    def ensure_institute_allowed(self, institute: Optional[str]) -> None:
        """Reject writes that name an institute other than the tenant."""
        if self.tenant is not None and institute is not None and institute != self.tenant:
            raise AuthorizationError(FORBIDDEN_INSTITUTE)

    def institute_for_write(self, requested: Optional[str]) -> Optional[str]:
        """Institute stored on a created row: the tenant wins when set."""
        if self.tenant is not None:
            self.ensure_institute_allowed(requested)
            return self.tenant
        return requested
