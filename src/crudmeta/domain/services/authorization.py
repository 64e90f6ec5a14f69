"""Authorization decision service.

Decides whether a principal may view, create, edit or delete a type, or a
field of a type, from the roles and permissions loaded with the principal.

Decision order:
1. The unrestricted system principal is allowed everything.
2. A principal without roles is denied everything.
3. Create and delete are type-scoped: field-level queries are denied.
4. Any field-level action requires view on the owning type; field edit
   additionally requires edit on the owning type.
5. Each role decides on its own (explicit permission for the exact
   (type, field) pair wins, otherwise the role's default policy), and the
   per-role decisions are combined with OR.
"""

from typing import TYPE_CHECKING

from crudmeta.core.logging import get_logger
from crudmeta.domain.entities.permission import PermissionAction

if TYPE_CHECKING:
    from crudmeta.domain.entities.user import User

logger = get_logger(__name__)


class AuthorizationEngine:
    """Stateless decision procedure over a principal's roles.

    Holds no mutable state, so a single instance is shared by all sessions.
    """

    def is_allowed(
        self,
        principal: "User",
        action: PermissionAction,
        target_type: str,
        field: str | None = None,
    ) -> bool:
        """Decide an action for a principal.

        Args:
            principal: User whose roles are evaluated.
            action: Action to perform.
            target_type: Name of the target type.
            field: Optional field of the target type.

        Returns:
            True if the action is allowed, False otherwise.
        """
        if principal.is_unrestricted:
            return True

        if not principal.roles:
            logger.debug(
                "Access denied - principal has no roles",
                login_name=principal.login_name,
                action=action.value,
                target_type=target_type,
            )
            return False

        if field is None:
            return self._any_role_allows(principal, action, target_type, None)

        if action.is_type_only:
            logger.debug(
                "Access denied - action cannot be scoped to a field",
                action=action.value,
                target_type=target_type,
                field=field,
            )
            return False

        # A field is only reachable through its owning type
        if not self._any_role_allows(principal, PermissionAction.VIEW, target_type, None):
            return False
        if action != PermissionAction.VIEW and not self._any_role_allows(
            principal, action, target_type, None
        ):
            return False

        return self._any_role_allows(principal, action, target_type, field)

    def _any_role_allows(
        self,
        principal: "User",
        action: PermissionAction,
        target_type: str,
        field: str | None,
    ) -> bool:
        for role in principal.roles:
            if role.is_allowed(action, target_type, field):
                logger.debug(
                    "Access granted",
                    login_name=principal.login_name,
                    role=role.name,
                    action=action.value,
                    target_type=target_type,
                    field=field,
                )
                return True

        logger.debug(
            "Access denied - no role grants access",
            login_name=principal.login_name,
            action=action.value,
            target_type=target_type,
            field=field,
        )
        return False


authorization_engine = AuthorizationEngine()
