from dataclasses import dataclass, field
from typing import Any, Callable

import structlog
from pydantic import BaseModel, TypeAdapter

from ..domain.errors import InputValidationError, NotFoundError
from ..infrastructure.repositories import (
    RoleRepository,
    SqlAlchemyRepository,
    UserRepository,
    UserRoleRepository,
)
from ..infrastructure.security import PasswordHasher
from .cache_aside import CacheAside
from .cache_keys import (
    collection_key,
    entity_key,
    membership_key,
    user_keys,
    user_roles_key,
    view_key,
)
from .dto import OutModel, RoleOut, UserOut, UserRoleOut
from .invalidation import InvalidationPolicy

logger = structlog.get_logger(__name__)


def _no_views(row: Any) -> list[str]:
    return []


@dataclass(frozen=True)
class Resource:
    """Describes one entity type served through the cache.

    views: derived cache keys that embed a given row (e.g. the sender's and
    receiver's message lists). on_change: extra keys cleared on update/delete.
    cascades: entities whose rows the store deletes along with this one.
    """
    name: str
    model: type
    out: type[OutModel]
    views: Callable[[Any], list[str]] = _no_views
    on_change: tuple[str, ...] = field(default=())
    cascades: tuple[str, ...] = field(default=())


class EntityService:
    def __init__(self, resource: Resource, repo: SqlAlchemyRepository,
                 cache: CacheAside, invalidation: InvalidationPolicy):
        self.resource = resource
        self.repo = repo
        self.cache = cache
        self.invalidation = invalidation
        self.one = TypeAdapter(resource.out)
        self.many = TypeAdapter(list[resource.out])

    @property
    def name(self) -> str:
        return self.resource.name

    def _out(self, row) -> OutModel:
        return self.resource.out.model_validate(row)

    def _load(self, entity_id: int) -> OutModel | None:
        row = self.repo.get(entity_id)
        return self._out(row) if row is not None else None

    def _require(self, entity_id: int):
        row = self.repo.get(entity_id)
        if row is None:
            logger.warning("entity_not_found", entity=self.name, entity_id=entity_id)
            raise NotFoundError(self.name, entity_id)
        return row

    def list_all(self) -> list[OutModel]:
        return self.cache.read(
            collection_key(self.name),
            lambda: [self._out(r) for r in self.repo.get_all()],
            self.many,
        )

    def get(self, entity_id: int) -> OutModel:
        found = self.cache.read(entity_key(self.name, entity_id), lambda: self._load(entity_id), self.one)
        if found is None:
            logger.warning("entity_not_found", entity=self.name, entity_id=entity_id)
            raise NotFoundError(self.name, entity_id)
        return found

    def list_view(self, view: str, value: int, *criteria: Any) -> list[OutModel]:
        return self.cache.read(
            view_key(self.name, view, value),
            lambda: [self._out(r) for r in self.repo.find(*criteria)],
            self.many,
        )

    def create(self, payload: BaseModel, **extra: Any) -> OutModel:
        row = self.resource.model(**payload.model_dump(), **extra)
        row = self.repo.add(row)
        logger.info("entity_created", entity=self.name, entity_id=row.id)
        self.invalidation.on_created(self.name, self.resource.views(row))
        return self._out(row)

    def update(self, entity_id: int, payload: BaseModel) -> OutModel:
        return self.patch(entity_id, **payload.model_dump(exclude_unset=True))

    def patch(self, entity_id: int, **changes: Any) -> OutModel:
        row = self._require(entity_id)
        before = self.resource.views(row)
        for attr, value in changes.items():
            setattr(row, attr, value)
        row = self.repo.update(row)
        logger.info("entity_updated", entity=self.name, entity_id=entity_id)
        self.invalidation.on_changed(
            self.name, entity_id, [*before, *self.resource.views(row), *self.resource.on_change]
        )
        return self._out(row)

    def delete(self, entity_id: int) -> None:
        row = self._require(entity_id)
        views = self.resource.views(row)
        self.repo.delete(row)
        logger.info("entity_deleted", entity=self.name, entity_id=entity_id)
        dependents = [f"{child}_*" for child in self.resource.cascades]
        self.invalidation.on_changed(self.name, entity_id, [*views, *self.resource.on_change, *dependents])


class UserService:
    """User records with their role graph; the password hash never leaves."""

    one = TypeAdapter(UserOut)
    many = TypeAdapter(list[UserOut])
    roles_adapter = TypeAdapter(list[RoleOut])

    def __init__(self, users: UserRepository, memberships: UserRoleRepository,
                 cache: CacheAside, invalidation: InvalidationPolicy,
                 hasher: PasswordHasher | None = None):
        self.users = users
        self.memberships = memberships
        self.cache = cache
        self.invalidation = invalidation
        self.hasher = hasher or PasswordHasher()

    def _load(self, user_id: int) -> UserOut | None:
        row = self.users.get(user_id)
        return UserOut.model_validate(row) if row is not None else None

    def list_users(self) -> list[UserOut]:
        return self.cache.read(
            collection_key("User"),
            lambda: [UserOut.model_validate(u) for u in self.users.get_all()],
            self.many,
        )

    def get_user(self, user_id: int) -> UserOut:
        found = self.cache.read(entity_key("User", user_id), lambda: self._load(user_id), self.one)
        if found is None:
            logger.warning("user_not_found", user_id=user_id)
            raise NotFoundError("User", user_id)
        return found

    def get_user_roles(self, user_id: int) -> list[RoleOut]:
        def load() -> list[RoleOut]:
            if self.users.get(user_id) is None:
                raise NotFoundError("User", user_id)
            return [RoleOut.model_validate(r) for r in self.memberships.roles_for_user(user_id)]

        return self.cache.read(user_roles_key(user_id), load, self.roles_adapter)

    def update_user(self, user_id: int, changes: dict[str, Any]) -> UserOut:
        row = self.users.get(user_id)
        if row is None:
            raise NotFoundError("User", user_id)

        username = changes.get("username")
        if username and username != row.username and self.users.get_by_username(username):
            raise InputValidationError("Username already taken")
        email = changes.get("email")
        if email and email != row.email and self.users.get_by_email(email):
            raise InputValidationError("Email already registered")

        password = changes.pop("password", None)
        if password:
            row.password_hash = self.hasher.hash(password)
        for attr, value in changes.items():
            if value is not None:
                setattr(row, attr, value)
        row = self.users.update(row)
        logger.info("user_updated", user_id=user_id)
        self.invalidation.invalidate(user_keys(user_id))
        return UserOut.model_validate(row)

    def delete_user(self, user_id: int) -> None:
        row = self.users.get(user_id)
        if row is None:
            raise NotFoundError("User", user_id)
        self.users.delete(row)
        logger.info("user_deleted", user_id=user_id)
        # memberships, messages and notifications go with the user
        self.invalidation.invalidate([
            *user_keys(user_id),
            f"UserRole_{user_id}_*",
            "Notification_*",
            "Message_*",
        ])


class UserRoleService:
    """Single-membership assign/remove; AssignRoles replaces the whole set."""

    one = TypeAdapter(UserRoleOut)
    many = TypeAdapter(list[UserRoleOut])

    def __init__(self, memberships: UserRoleRepository, users: UserRepository,
                 roles: RoleRepository, cache: CacheAside, invalidation: InvalidationPolicy):
        self.memberships = memberships
        self.users = users
        self.roles = roles
        self.cache = cache
        self.invalidation = invalidation

    def list_all(self) -> list[UserRoleOut]:
        return self.cache.read(
            collection_key("UserRole"),
            lambda: [UserRoleOut.model_validate(m) for m in self.memberships.get_all()],
            self.many,
        )

    def get(self, user_id: int, role_id: int) -> UserRoleOut:
        def load() -> UserRoleOut | None:
            row = self.memberships.get(user_id, role_id)
            return UserRoleOut.model_validate(row) if row is not None else None

        found = self.cache.read(membership_key(user_id, role_id), load, self.one)
        if found is None:
            raise NotFoundError("UserRole", f"{user_id}/{role_id}")
        return found

    def assign(self, user_id: int, role_id: int) -> UserRoleOut:
        if self.users.get(user_id) is None:
            raise NotFoundError("User", user_id)
        if self.roles.get(role_id) is None:
            raise NotFoundError("Role", role_id)
        if self.memberships.get(user_id, role_id) is not None:
            raise InputValidationError(f"User {user_id} already has role {role_id}")
        row = self.memberships.add(user_id, role_id)
        logger.info("role_assigned", user_id=user_id, role_id=role_id)
        self.invalidation.invalidate([*user_keys(user_id), membership_key(user_id, role_id)])
        return UserRoleOut.model_validate(row)

    def remove(self, user_id: int, role_id: int) -> None:
        row = self.memberships.get(user_id, role_id)
        if row is None:
            raise NotFoundError("UserRole", f"{user_id}/{role_id}")
        self.memberships.delete(row)
        logger.info("role_removed", user_id=user_id, role_id=role_id)
        self.invalidation.invalidate([*user_keys(user_id), membership_key(user_id, role_id)])
