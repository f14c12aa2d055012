import structlog
from fastapi import APIRouter, Depends, Request, Response, status

from ....application.authorization import can_view_user
from ....application.dto import RegisterUserInput, RoleOut, UserOut
from ....application.services import UserService
from ....application.use_cases.assign_roles import AssignRoles
from ....application.use_cases.authenticate_user import AuthenticateUser
from ....application.use_cases.register_user import RegisterUser
from ....domain.entities import Identity
from ....domain.errors import ForbiddenError
from ....infrastructure.security import TokenService, get_token_service
from ..authz import require
from ..dependencies import (
    get_assign_roles,
    get_authenticate_user,
    get_register_user,
    get_user_service,
)
from ..rate_limit import LOGIN_LIMIT, limiter
from ..schemas import AssignRolesReq, LoginReq, RegisterReq, TokenResp, UserUpdate

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api/users", tags=["users"])


def _check_owner(identity: Identity, user_id: int) -> None:
    # checked before any lookup, so a foreign id is 403 whether or not it exists
    if not can_view_user(identity, user_id):
        logger.warning("ownership_denied", user_id=identity.user_id, target_id=user_id)
        raise ForbiddenError("You may only view your own user record")


@router.post("/login", response_model=TokenResp, response_model_by_alias=True)
@limiter.limit(LOGIN_LIMIT)
def login(
    request: Request,
    payload: LoginReq,
    uc: AuthenticateUser = Depends(get_authenticate_user),
    tokens: TokenService = Depends(get_token_service),
):
    identity = uc.execute(payload.username, payload.password)
    return TokenResp(token=tokens.issue(identity))


@router.post("/register", response_model=UserOut, status_code=status.HTTP_201_CREATED,
             dependencies=[Depends(require("users.register"))])
def register(payload: RegisterReq, uc: RegisterUser = Depends(get_register_user)):
    return uc.execute(RegisterUserInput(**payload.model_dump()))


@router.get("", response_model=list[UserOut], dependencies=[Depends(require("users.list"))])
def list_users(svc: UserService = Depends(get_user_service)):
    return svc.list_users()


@router.get("/me", response_model=UserOut)
def me(identity: Identity = Depends(require("users.me")), svc: UserService = Depends(get_user_service)):
    return svc.get_user(identity.user_id)


@router.get("/{user_id}", response_model=UserOut)
def get_user(user_id: int, identity: Identity = Depends(require("users.get")),
             svc: UserService = Depends(get_user_service)):
    _check_owner(identity, user_id)
    return svc.get_user(user_id)


@router.get("/{user_id}/roles", response_model=list[RoleOut])
def get_user_roles(user_id: int, identity: Identity = Depends(require("users.roles")),
                   svc: UserService = Depends(get_user_service)):
    _check_owner(identity, user_id)
    return svc.get_user_roles(user_id)


@router.put("/{user_id}", response_model=UserOut, dependencies=[Depends(require("users.update"))])
def update_user(user_id: int, payload: UserUpdate, svc: UserService = Depends(get_user_service)):
    return svc.update_user(user_id, payload.model_dump(exclude_unset=True))


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT,
               dependencies=[Depends(require("users.delete"))])
def delete_user(user_id: int, svc: UserService = Depends(get_user_service)):
    svc.delete_user(user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{user_id}/assign-roles", response_model=UserOut,
             dependencies=[Depends(require("users.assign_roles"))])
def assign_roles(user_id: int, payload: AssignRolesReq, uc: AssignRoles = Depends(get_assign_roles)):
    return uc.execute(user_id, payload.role_ids)
