from typing import Any

from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel

from ....application.services import EntityService, Resource
from ....domain.entities import Identity
from ..authz import require
from ..dependencies import entity_service


def crud_router(
    prefix: str,
    tag: str,
    resource: Resource,
    policy: str,
    create_schema: type[BaseModel],
    update_schema: type[BaseModel],
    owner_field: str | None = None,
) -> APIRouter:
    """The five standard endpoints for one resource.

    Each route is guarded by require("<policy>.<action>"). When owner_field
    is given, create stamps it with the caller's user id.
    """
    router = APIRouter(prefix=prefix, tags=[tag])
    provide = entity_service(resource)
    out = resource.out

    def stamp(identity: Identity) -> dict[str, Any]:
        return {owner_field: identity.user_id} if owner_field else {}

    @router.get("", response_model=list[out], dependencies=[Depends(require(f"{policy}.list"))])
    def list_items(svc: EntityService = Depends(provide)):
        return svc.list_all()

    @router.get("/{item_id}", response_model=out, dependencies=[Depends(require(f"{policy}.get"))])
    def get_item(item_id: int, svc: EntityService = Depends(provide)):
        return svc.get(item_id)

    @router.post("", response_model=out, status_code=status.HTTP_201_CREATED)
    def create_item(
        payload: create_schema,
        svc: EntityService = Depends(provide),
        identity: Identity = Depends(require(f"{policy}.create")),
    ):
        return svc.create(payload, **stamp(identity))

    @router.put("/{item_id}", response_model=out, dependencies=[Depends(require(f"{policy}.update"))])
    def update_item(item_id: int, payload: update_schema, svc: EntityService = Depends(provide)):
        return svc.update(item_id, payload)

    @router.delete("/{item_id}", status_code=status.HTTP_204_NO_CONTENT,
                   dependencies=[Depends(require(f"{policy}.delete"))])
    def delete_item(item_id: int, svc: EntityService = Depends(provide)):
        svc.delete(item_id)
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    return router
