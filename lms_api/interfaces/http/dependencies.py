from fastapi import Depends
from sqlalchemy.orm import Session

from ...application.cache_aside import CacheAside
from ...application.invalidation import InvalidationPolicy
from ...application.services import EntityService, Resource, UserRoleService, UserService
from ...application.use_cases.assign_roles import AssignRoles
from ...application.use_cases.authenticate_user import AuthenticateUser
from ...application.use_cases.register_user import RegisterUser
from ...config import settings
from ...infrastructure.cache import RedisCache, get_cache
from ...infrastructure.db import get_db
from ...infrastructure.repositories import (
    RoleRepository,
    SqlAlchemyRepository,
    UserRepository,
    UserRoleRepository,
)
from ...infrastructure.security import PasswordHasher


def get_cache_aside(cache: RedisCache = Depends(get_cache)) -> CacheAside:
    return CacheAside(cache, settings.CACHE_TTL)


def get_invalidation(cache: RedisCache = Depends(get_cache)) -> InvalidationPolicy:
    return InvalidationPolicy(cache)


def entity_service(resource: Resource):
    def provide(
        db: Session = Depends(get_db),
        cache: CacheAside = Depends(get_cache_aside),
        invalidation: InvalidationPolicy = Depends(get_invalidation),
    ) -> EntityService:
        return EntityService(resource, SqlAlchemyRepository(db, resource.model), cache, invalidation)

    return provide


def get_user_service(
    db: Session = Depends(get_db),
    cache: CacheAside = Depends(get_cache_aside),
    invalidation: InvalidationPolicy = Depends(get_invalidation),
) -> UserService:
    return UserService(UserRepository(db), UserRoleRepository(db), cache, invalidation)


def get_user_role_service(
    db: Session = Depends(get_db),
    cache: CacheAside = Depends(get_cache_aside),
    invalidation: InvalidationPolicy = Depends(get_invalidation),
) -> UserRoleService:
    return UserRoleService(
        UserRoleRepository(db), UserRepository(db), RoleRepository(db), cache, invalidation
    )


def get_authenticate_user(db: Session = Depends(get_db)) -> AuthenticateUser:
    return AuthenticateUser(UserRepository(db), PasswordHasher())


def get_register_user(
    db: Session = Depends(get_db),
    invalidation: InvalidationPolicy = Depends(get_invalidation),
) -> RegisterUser:
    return RegisterUser(UserRepository(db), RoleRepository(db), PasswordHasher(), invalidation)


def get_assign_roles(
    db: Session = Depends(get_db),
    invalidation: InvalidationPolicy = Depends(get_invalidation),
) -> AssignRoles:
    return AssignRoles(UserRepository(db), RoleRepository(db), UserRoleRepository(db), invalidation)
