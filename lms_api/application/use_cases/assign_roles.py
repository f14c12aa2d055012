import structlog

from ...domain.errors import NotFoundError
from ...infrastructure.repositories import RoleRepository, UserRepository, UserRoleRepository
from ..cache_keys import user_keys
from ..dto import UserOut
from ..invalidation import InvalidationPolicy
from .register_user import unique_ids

logger = structlog.get_logger(__name__)


class AssignRoles:
    """Replace a user's role set.

    Validation happens up front: an unknown user or any unknown role id
    raises NotFoundError and leaves the existing memberships untouched. The
    delete-then-insert runs in one transaction.
    """

    def __init__(self, users: UserRepository, roles: RoleRepository,
                 memberships: UserRoleRepository, invalidation: InvalidationPolicy):
        self.users = users
        self.roles = roles
        self.memberships = memberships
        self.invalidation = invalidation

    def execute(self, user_id: int, role_ids: list[int]) -> UserOut:
        if self.users.get(user_id) is None:
            raise NotFoundError("User", user_id)

        wanted = unique_ids(role_ids)
        found = self.roles.get_many(wanted)
        for role_id in wanted:
            if role_id not in found:
                logger.warning("assign_role_missing", user_id=user_id, role_id=role_id)
                raise NotFoundError("Role", role_id)

        self.memberships.replace_roles(user_id, wanted)
        logger.info("roles_assigned", user_id=user_id, role_ids=wanted)

        self.invalidation.invalidate([*user_keys(user_id), f"UserRole_{user_id}_*"])
        return UserOut.model_validate(self.users.reload(user_id))
