from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError

from ...application.authorization import allowed_roles
from ...domain.entities import Identity
from ...domain.errors import ForbiddenError
from ...infrastructure.metrics import auth_failures_total
from ...infrastructure.security import TokenService, get_token_service

# auto_error=False so a missing header is a 401, not FastAPI's default 403
bearer = HTTPBearer(auto_error=False)


def _unauthenticated(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_claims(
    creds: HTTPAuthorizationCredentials | None = Depends(bearer),
    tokens: TokenService = Depends(get_token_service),
) -> dict:
    if creds is None:
        raise _unauthenticated("Not authenticated")
    try:
        return tokens.decode(creds.credentials)
    except JWTError:
        auth_failures_total.inc()
        raise _unauthenticated("Invalid token")


def get_identity(
    claims: dict = Depends(get_claims),
    tokens: TokenService = Depends(get_token_service),
) -> Identity:
    return tokens.identity_from_claims(claims)


def require(operation: str):
    """Dependency that admits identities whose roles are allowed for `operation`."""
    allowed = allowed_roles(operation)

    def checker(identity: Identity = Depends(get_identity)) -> Identity:
        if not identity.has_any(allowed):
            raise ForbiddenError(f"Not allowed to {operation}")
        return identity

    return checker
