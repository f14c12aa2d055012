import structlog

from ...domain.entities import DEFAULT_ROLE
from ...domain.errors import InputValidationError, NotFoundError
from ...infrastructure.models import UserORM
from ...infrastructure.repositories import RoleRepository, UserRepository
from ...infrastructure.security import PasswordHasher
from ..cache_keys import collection_key
from ..dto import RegisterUserInput, UserOut
from ..invalidation import InvalidationPolicy

logger = structlog.get_logger(__name__)


def unique_ids(ids: list[int]) -> list[int]:
    return list(dict.fromkeys(ids))


class RegisterUser:
    """Create a user together with its role memberships.

    Every requested role is resolved before anything is written; one unknown
    role id fails the whole call with NotFoundError. Without an explicit list
    the user gets the default Student role. User and memberships are stored
    in a single transaction.
    """

    def __init__(self, users: UserRepository, roles: RoleRepository,
                 hasher: PasswordHasher, invalidation: InvalidationPolicy):
        self.users = users
        self.roles = roles
        self.hasher = hasher
        self.invalidation = invalidation

    def _resolve_roles(self, role_ids: list[int] | None) -> list[int]:
        if role_ids:
            wanted = unique_ids(role_ids)
            found = self.roles.get_many(wanted)
            missing = [rid for rid in wanted if rid not in found]
            if missing:
                logger.warning("register_role_missing", role_ids=missing)
                raise NotFoundError("Role", missing[0])
            return wanted

        default = self.roles.get_by_name(DEFAULT_ROLE.value)
        if default is None:
            logger.warning("default_role_missing", role=DEFAULT_ROLE.value)
            return []
        return [default.id]

    def execute(self, data: RegisterUserInput) -> UserOut:
        if self.users.get_by_username(data.username):
            raise InputValidationError("Username already taken")
        if self.users.get_by_email(data.email):
            raise InputValidationError("Email already registered")

        role_ids = self._resolve_roles(data.role_ids)
        row = UserORM(
            username=data.username,
            email=data.email,
            password_hash=self.hasher.hash(data.password),
            full_name=data.full_name,
            date_of_birth=data.date_of_birth,
        )
        created = self.users.create_with_roles(row, role_ids)
        logger.info("user_registered", user_id=created.id, role_ids=role_ids)

        self.invalidation.invalidate([collection_key("User"), collection_key("UserRole")])
        return UserOut.model_validate(created)
