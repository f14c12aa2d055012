"""Which roles may call which operation.

Operations are named "<resource>.<action>". A request is allowed when the
identity holds at least one role from the operation's allow-list.
"""
from ..domain.entities import Identity, Role

ADMIN = frozenset({Role.ADMIN})
STAFF = frozenset({Role.ADMIN, Role.INSTRUCTOR})
EVERYONE = frozenset({Role.ADMIN, Role.INSTRUCTOR, Role.STUDENT})

CRUD = ("list", "get", "create", "update", "delete")


def _crud(resource: str, roles: frozenset[Role], **overrides: frozenset[Role]) -> dict[str, frozenset[Role]]:
    table = {f"{resource}.{action}": roles for action in CRUD}
    table.update({f"{resource}.{action}": r for action, r in overrides.items()})
    return table


POLICY: dict[str, frozenset[Role]] = {
    "users.list": ADMIN,
    "users.register": ADMIN,
    "users.update": ADMIN,
    "users.delete": ADMIN,
    "users.assign_roles": ADMIN,
    # plus the ownership rule, see can_view_user
    "users.get": EVERYONE,
    "users.roles": EVERYONE,
    "users.me": EVERYONE,
    **_crud("roles", ADMIN),
    **_crud("user_roles", ADMIN),
    **_crud("courses", ADMIN, list=STAFF, get=STAFF),
    **_crud("modules", STAFF),
    **_crud("lessons", STAFF),
    **_crud("assessments", STAFF),
    **_crud("announcements", STAFF),
    **_crud("forums", STAFF),
    **_crud("questions", STAFF, list=EVERYONE, get=EVERYONE, delete=ADMIN),
    **_crud("answers", STAFF, list=EVERYONE, get=EVERYONE),
    **_crud("forum_posts", EVERYONE, delete=STAFF),
    "messages.get": EVERYONE,
    "messages.send": EVERYONE,
    "messages.by_user": STAFF,
    "notifications.get": EVERYONE,
    "notifications.by_user": EVERYONE,
    "notifications.mark_read": EVERYONE,
    "notifications.send": ADMIN,
}


def allowed_roles(operation: str) -> frozenset[Role]:
    """Raises KeyError for an operation missing from the table."""
    return POLICY[operation]


def is_allowed(identity: Identity, operation: str) -> bool:
    return identity.has_any(allowed_roles(operation))


def can_view_user(identity: Identity, user_id: int) -> bool:
    """Non-admins may only read their own user record."""
    return identity.is_admin or identity.user_id == user_id
