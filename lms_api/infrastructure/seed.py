"""Default roles, users and sample courses for a fresh database."""
import structlog
from sqlalchemy.orm import Session

from ..config import settings
from ..domain.entities import Role
from .models import CourseORM, RoleORM, UserORM, UserRoleORM
from .security import PasswordHasher

logger = structlog.get_logger(__name__)

DEFAULT_ROLES = [
    (Role.ADMIN, "Administrator with full access"),
    (Role.INSTRUCTOR, "Instructor with access to create and manage courses"),
    (Role.STUDENT, "Student with access to view and take courses"),
]

DEFAULT_USERS = [
    ("admin", "admin@example.com", "Admin User", Role.ADMIN),
    ("instructor", "instructor@example.com", "Instructor User", Role.INSTRUCTOR),
    ("student", "student@example.com", "Student User", Role.STUDENT),
]

SAMPLE_COURSES = [
    ("Introduction to Programming", "Basic programming concepts"),
    ("Advanced .NET Development", ".NET Core and advanced topics"),
]


def seed_defaults(db: Session, password: str | None = None, hasher: PasswordHasher | None = None) -> bool:
    """Insert the defaults when the role table is empty. Returns True if anything was written."""
    if db.query(RoleORM.id).first() is not None:
        logger.info("seed_skipped", reason="roles already present")
        return False

    hasher = hasher or PasswordHasher()
    password_hash = hasher.hash(password or settings.SEED_PASSWORD)
    try:
        roles = {}
        for role, description in DEFAULT_ROLES:
            roles[role] = RoleORM(name=role.value, description=description)
            db.add(roles[role])
        db.flush()

        for username, email, full_name, role in DEFAULT_USERS:
            user = UserORM(username=username, email=email, full_name=full_name, password_hash=password_hash)
            db.add(user)
            db.flush()
            db.add(UserRoleORM(user_id=user.id, role_id=roles[role].id))

        for title, description in SAMPLE_COURSES:
            db.add(CourseORM(title=title, description=description))
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info("seed_completed", roles=len(DEFAULT_ROLES), users=len(DEFAULT_USERS), courses=len(SAMPLE_COURSES))
    return True
