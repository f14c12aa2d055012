ALL = "All"


def entity_key(entity: str, entity_id: object) -> str:
    return f"{entity}_{entity_id}"


def collection_key(entity: str) -> str:
    return f"{entity}_{ALL}"


def view_key(entity: str, view: str, value: object) -> str:
    """Key for a filtered collection, e.g. Message_User_7."""
    return f"{entity}_{view}_{value}"


def user_roles_key(user_id: int) -> str:
    return f"User_{user_id}_Roles"


def membership_key(user_id: int, role_id: int) -> str:
    return f"UserRole_{user_id}_{role_id}"


def user_keys(user_id: int) -> list[str]:
    """Every cached view that embeds a user's role memberships."""
    return [
        entity_key("User", user_id),
        collection_key("User"),
        user_roles_key(user_id),
        collection_key("UserRole"),
    ]
