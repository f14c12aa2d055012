from fastapi import APIRouter, Depends, Response, status

from ....application import resources
from ....application.dto import UserRoleOut
from ....application.services import UserRoleService
from ..authz import require
from ..dependencies import get_user_role_service
from ..schemas import RoleCreate, RoleUpdate, UserRoleCreate
from .crud import crud_router

roles = crud_router("/api/roles", "roles", resources.ROLES, "roles", RoleCreate, RoleUpdate)

user_roles = APIRouter(prefix="/api/user-roles", tags=["user-roles"])


@user_roles.get("", response_model=list[UserRoleOut], dependencies=[Depends(require("user_roles.list"))])
def list_user_roles(svc: UserRoleService = Depends(get_user_role_service)):
    return svc.list_all()


@user_roles.get("/{user_id}/{role_id}", response_model=UserRoleOut,
                dependencies=[Depends(require("user_roles.get"))])
def get_user_role(user_id: int, role_id: int, svc: UserRoleService = Depends(get_user_role_service)):
    return svc.get(user_id, role_id)


@user_roles.post("/assign", response_model=UserRoleOut, status_code=status.HTTP_201_CREATED,
                 dependencies=[Depends(require("user_roles.create"))])
def assign_user_role(payload: UserRoleCreate, svc: UserRoleService = Depends(get_user_role_service)):
    return svc.assign(payload.user_id, payload.role_id)


@user_roles.delete("/remove/{user_id}/{role_id}", status_code=status.HTTP_204_NO_CONTENT,
                   dependencies=[Depends(require("user_roles.delete"))])
def remove_user_role(user_id: int, role_id: int, svc: UserRoleService = Depends(get_user_role_service)):
    svc.remove(user_id, role_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


routers = [roles, user_roles]
