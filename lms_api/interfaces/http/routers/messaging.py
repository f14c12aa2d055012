from fastapi import APIRouter, Depends, Response, status

from ....application import resources
from ....application.dto import MessageOut, NotificationOut
from ....application.services import EntityService
from ....domain.entities import Identity
from ....infrastructure.models import MessageORM, NotificationORM
from ..authz import require
from ..dependencies import entity_service
from ..schemas import MessageCreate, NotificationCreate

messages = APIRouter(prefix="/api/messages", tags=["messages"])
notifications = APIRouter(prefix="/api/notifications", tags=["notifications"])

message_service = entity_service(resources.MESSAGES)
notification_service = entity_service(resources.NOTIFICATIONS)


@messages.get("/{message_id}", response_model=MessageOut, dependencies=[Depends(require("messages.get"))])
def get_message(message_id: int, svc: EntityService = Depends(message_service)):
    return svc.get(message_id)


@messages.get("/user/{user_id}", response_model=list[MessageOut],
              dependencies=[Depends(require("messages.by_user"))])
def messages_for_user(user_id: int, svc: EntityService = Depends(message_service)):
    # sent or received
    return svc.list_view(
        "User", user_id, (MessageORM.sender_id == user_id) | (MessageORM.receiver_id == user_id)
    )


@messages.post("", response_model=MessageOut, status_code=status.HTTP_201_CREATED)
def send_message(
    payload: MessageCreate,
    svc: EntityService = Depends(message_service),
    identity: Identity = Depends(require("messages.send")),
):
    return svc.create(payload, sender_id=identity.user_id)


@notifications.get("/{notification_id}", response_model=NotificationOut,
                   dependencies=[Depends(require("notifications.get"))])
def get_notification(notification_id: int, svc: EntityService = Depends(notification_service)):
    return svc.get(notification_id)


@notifications.get("/user/{user_id}", response_model=list[NotificationOut],
                   dependencies=[Depends(require("notifications.by_user"))])
def notifications_for_user(user_id: int, svc: EntityService = Depends(notification_service)):
    return svc.list_view("User", user_id, NotificationORM.user_id == user_id)


@notifications.post("/mark-read/{notification_id}", status_code=status.HTTP_204_NO_CONTENT,
                    dependencies=[Depends(require("notifications.mark_read"))])
def mark_read(notification_id: int, svc: EntityService = Depends(notification_service)):
    svc.patch(notification_id, is_read=True)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@notifications.post("", response_model=NotificationOut, status_code=status.HTTP_201_CREATED,
                    dependencies=[Depends(require("notifications.send"))])
def send_notification(payload: NotificationCreate, svc: EntityService = Depends(notification_service)):
    return svc.create(payload)


routers = [messages, notifications]
