from typing import Any, Generic, Iterable, TypeVar

from sqlalchemy import select
from sqlalchemy.orm import Session

from .db import Base
from .models import RoleORM, UserORM, UserRoleORM

ModelT = TypeVar("ModelT", bound=Base)


class SqlAlchemyRepository(Generic[ModelT]):
    """Entity store for one mapped class, keyed by integer id."""

    def __init__(self, db: Session, model: type[ModelT]):
        self.db = db
        self.model = model

    def get(self, entity_id: int) -> ModelT | None:
        return self.db.get(self.model, entity_id)

    def get_all(self) -> list[ModelT]:
        return list(self.db.scalars(select(self.model).order_by(self.model.id)))

    def find(self, *criteria: Any) -> list[ModelT]:
        stmt = select(self.model).where(*criteria).order_by(self.model.id)
        return list(self.db.scalars(stmt))

    def add(self, row: ModelT) -> ModelT:
        self.db.add(row); self.db.commit(); self.db.refresh(row)
        return row

    def update(self, row: ModelT) -> ModelT:
        self.db.commit(); self.db.refresh(row)
        return row

    def delete(self, row: ModelT) -> None:
        self.db.delete(row); self.db.commit()


class RoleRepository(SqlAlchemyRepository[RoleORM]):
    def __init__(self, db: Session):
        super().__init__(db, RoleORM)

    def get_by_name(self, name: str) -> RoleORM | None:
        return self.db.scalars(select(RoleORM).where(RoleORM.name == name)).first()

    def get_many(self, role_ids: Iterable[int]) -> dict[int, RoleORM]:
        ids = list(role_ids)
        if not ids:
            return {}
        rows = self.db.scalars(select(RoleORM).where(RoleORM.id.in_(ids)))
        return {r.id: r for r in rows}


class UserRepository(SqlAlchemyRepository[UserORM]):
    def __init__(self, db: Session):
        super().__init__(db, UserORM)

    def get_by_username(self, username: str) -> UserORM | None:
        return self.db.scalars(select(UserORM).where(UserORM.username == username)).first()

    def get_by_email(self, email: str) -> UserORM | None:
        return self.db.scalars(select(UserORM).where(UserORM.email == email)).first()

    def create_with_roles(self, row: UserORM, role_ids: Iterable[int]) -> UserORM:
        """Insert the user and its memberships in one transaction."""
        try:
            self.db.add(row)
            self.db.flush()
            for role_id in role_ids:
                self.db.add(UserRoleORM(user_id=row.id, role_id=role_id))
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        return self.reload(row.id)

    def reload(self, user_id: int) -> UserORM | None:
        # drop identity-map state so the role graph is read fresh
        self.db.expire_all()
        return self.get(user_id)


class UserRoleRepository:
    def __init__(self, db: Session):
        self.db = db

    def get(self, user_id: int, role_id: int) -> UserRoleORM | None:
        return self.db.get(UserRoleORM, (user_id, role_id))

    def get_all(self) -> list[UserRoleORM]:
        stmt = select(UserRoleORM).order_by(UserRoleORM.user_id, UserRoleORM.role_id)
        return list(self.db.scalars(stmt))

    def roles_for_user(self, user_id: int) -> list[RoleORM]:
        stmt = (select(RoleORM)
                .join(UserRoleORM, UserRoleORM.role_id == RoleORM.id)
                .where(UserRoleORM.user_id == user_id)
                .order_by(RoleORM.id))
        return list(self.db.scalars(stmt))

    def add(self, user_id: int, role_id: int) -> UserRoleORM:
        row = UserRoleORM(user_id=user_id, role_id=role_id)
        self.db.add(row); self.db.commit(); self.db.refresh(row)
        return row

    def delete(self, row: UserRoleORM) -> None:
        self.db.delete(row); self.db.commit()

    def replace_roles(self, user_id: int, role_ids: Iterable[int]) -> None:
        """Make role_ids the user's exact membership set, in one transaction."""
        wanted = set(role_ids)
        try:
            current = self.db.scalars(select(UserRoleORM).where(UserRoleORM.user_id == user_id)).all()
            for row in current:
                if row.role_id in wanted:
                    wanted.discard(row.role_id)
                else:
                    self.db.delete(row)
            self.db.flush()
            for role_id in sorted(wanted):
                self.db.add(UserRoleORM(user_id=user_id, role_id=role_id))
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.expire_all()
