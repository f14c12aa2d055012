from lms_api.application.cache_keys import (
    collection_key,
    entity_key,
    membership_key,
    user_keys,
    user_roles_key,
    view_key,
)
from lms_api.application.invalidation import InvalidationPolicy


def test_key_shapes():
    assert entity_key("Course", 5) == "Course_5"
    assert collection_key("Course") == "Course_All"
    assert view_key("Message", "User", 7) == "Message_User_7"
    assert user_roles_key(7) == "User_7_Roles"
    assert membership_key(7, 2) == "UserRole_7_2"
    assert user_keys(7) == ["User_7", "User_All", "User_7_Roles", "UserRole_All"]


def test_on_created_clears_collection_and_views(cache):
    cache.store.update({"Message_All": "[]", "Message_User_1": "[]", "Message_3": "{}"})

    failed = InvalidationPolicy(cache).on_created("Message", ["Message_User_1"])

    assert failed == []
    assert cache.store == {"Message_3": "{}"}


def test_on_changed_clears_entity_and_collection(cache):
    cache.store.update({"Course_1": "{}", "Course_2": "{}", "Course_All": "[]"})

    InvalidationPolicy(cache).on_changed("Course", 1)

    assert cache.store == {"Course_2": "{}"}


def test_pattern_keys(cache):
    cache.store.update({"User_1": "{}", "User_All": "[]", "User_1_Roles": "[]", "Role_1": "{}"})

    InvalidationPolicy(cache).invalidate(["User_*"])

    assert cache.store == {"Role_1": "{}"}


def test_failures_are_reported_not_raised(cache):
    cache.store["Course_1"] = "{}"
    cache.fail_deletes = True

    failed = InvalidationPolicy(cache).invalidate(["Course_1", "Course_All", "Course_1"])

    assert failed == ["Course_1", "Course_All"]
    assert "Course_1" in cache.store
