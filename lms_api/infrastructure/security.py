import uuid
from datetime import datetime, timedelta, timezone

import structlog
from jose import jwt, JWTError
from jose.exceptions import JOSEError
from passlib.context import CryptContext

from ..config import Settings, settings
from ..domain.entities import Identity, Role
from ..domain.errors import ConfigurationError

logger = structlog.get_logger(__name__)

pwd = CryptContext(
    schemes=["bcrypt_sha256"],
    deprecated="auto",
    bcrypt_sha256__truncate_error=False,
)


class PasswordHasher:
    def hash(self, plain: str) -> str: return pwd.hash(plain)

    def verify(self, plain: str, hashed: str) -> bool:
        try:
            return pwd.verify(plain, hashed)
        except ValueError:
            # unidentifiable or corrupted hash in the store
            logger.warning("password_hash_unrecognized")
            return False

    def dummy_verify(self) -> None:
        pwd.dummy_verify()


class TokenService:
    """Issues and validates the stateless bearer tokens."""

    def __init__(self, cfg: Settings = settings):
        self.secret = cfg.SECRET_KEY
        self.algorithm = cfg.JWT_ALGORITHM
        self.issuer = cfg.JWT_ISSUER
        self.audience = cfg.JWT_AUDIENCE
        self.ttl = timedelta(minutes=cfg.JWT_EXPIRATION_MINUTES)

    def issue(self, identity: Identity, now: datetime | None = None) -> str:
        now = now or datetime.now(timezone.utc)
        payload = {
            "sub": str(identity.user_id),
            "jti": uuid.uuid4().hex,
            "name": identity.username,
            "roles": list(identity.role_names or sorted(r.value for r in identity.roles)),
            "iss": self.issuer,
            "aud": self.audience,
            "iat": now,
            "exp": now + self.ttl,
        }
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def decode(self, token: str) -> dict:
        """Return the verified claims or raise JWTError.

        Signature, issuer, audience and expiry are all checked; a missing or
        non-numeric subject is rejected as well.
        """
        claims = jwt.decode(
            token,
            self.secret,
            algorithms=[self.algorithm],
            audience=self.audience,
            issuer=self.issuer,
            options={"require_exp": True, "require_sub": True},
        )
        if not str(claims.get("sub", "")).isdigit():
            raise JWTError("Invalid subject")
        return claims

    def identity_from_claims(self, claims: dict) -> Identity:
        names = claims.get("roles") or []
        if isinstance(names, str):
            names = [names]
        return Identity(
            user_id=int(claims["sub"]),
            username=claims.get("name", ""),
            roles=Role.parse_all(names),
            role_names=tuple(names),
        )

    def self_check(self) -> None:
        """Sign and verify a probe token; a failure here is fatal at startup."""
        probe = Identity(user_id=0, username="startup-probe")
        try:
            self.decode(self.issue(probe))
        except (JOSEError, TypeError, ValueError) as e:
            raise ConfigurationError(f"token signing is misconfigured: {e}") from e


def get_token_service() -> TokenService:
    return TokenService(settings)
