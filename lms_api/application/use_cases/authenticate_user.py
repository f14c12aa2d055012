import structlog

from ...domain.entities import Identity, Role
from ...domain.errors import InvalidCredentialsError
from ...infrastructure.metrics import auth_failures_total
from ...infrastructure.repositories import UserRepository
from ...infrastructure.security import PasswordHasher

logger = structlog.get_logger(__name__)


class AuthenticateUser:
    def __init__(self, users: UserRepository, hasher: PasswordHasher):
        self.users = users
        self.hasher = hasher

    def execute(self, username: str, password: str) -> Identity:
        row = self.users.get_by_username(username)
        if row is None:
            # same work as a real check so timing does not leak existence
            self.hasher.dummy_verify()
            ok = False
        else:
            ok = self.hasher.verify(password, row.password_hash)

        if not ok:
            auth_failures_total.inc()
            logger.warning("authentication_failed", username=username)
            raise InvalidCredentialsError()

        names = tuple(r.name for r in row.roles)
        logger.info("authentication_succeeded", user_id=row.id)
        return Identity(
            user_id=row.id,
            username=row.username,
            roles=Role.parse_all(names),
            role_names=names,
        )
