import pytest

from lms_api.application.authorization import POLICY, allowed_roles, can_view_user, is_allowed
from lms_api.domain.entities import Identity, Role
from lms_api.interfaces.http.authz import require


def ident(user_id: int, *roles: Role) -> Identity:
    return Identity(user_id=user_id, username=f"u{user_id}", roles=frozenset(roles))


def test_policy_table():
    assert allowed_roles("users.list") == {Role.ADMIN}
    assert allowed_roles("courses.list") == {Role.ADMIN, Role.INSTRUCTOR}
    assert allowed_roles("questions.get") == {Role.ADMIN, Role.INSTRUCTOR, Role.STUDENT}
    assert allowed_roles("questions.delete") == {Role.ADMIN}
    assert allowed_roles("forum_posts.delete") == {Role.ADMIN, Role.INSTRUCTOR}
    assert allowed_roles("notifications.send") == {Role.ADMIN}


def test_every_operation_has_a_non_empty_allow_list():
    assert all(POLICY.values())


def test_is_allowed():
    assert is_allowed(ident(1, Role.ADMIN), "users.list")
    assert not is_allowed(ident(3, Role.STUDENT), "users.list")
    assert is_allowed(ident(2, Role.STUDENT, Role.INSTRUCTOR), "modules.create")
    assert not is_allowed(ident(4), "users.me")


def test_unknown_operation_fails_at_definition():
    with pytest.raises(KeyError):
        require("courses.explode")


def test_ownership_rule():
    assert can_view_user(ident(3, Role.STUDENT), 3)
    assert not can_view_user(ident(3, Role.STUDENT), 4)
    assert not can_view_user(ident(2, Role.INSTRUCTOR), 3)
    assert can_view_user(ident(1, Role.ADMIN), 3)


def test_student_reads_own_record(client, student):
    response = client.get("/api/users/3", headers=student)
    assert response.status_code == 200
    assert response.json()["username"] == "student"


def test_student_cannot_read_other_record(client, student):
    assert client.get("/api/users/1", headers=student).status_code == 403
    # forbidden, not missing, even when the target does not exist
    assert client.get("/api/users/9999", headers=student).status_code == 403
    assert client.get("/api/users/9999/roles", headers=student).status_code == 403


def test_admin_reads_any_record(client, admin):
    assert client.get("/api/users/3", headers=admin).status_code == 200
    assert client.get("/api/users/9999", headers=admin).status_code == 404
    assert client.get("/api/users/9999/roles", headers=admin).status_code == 404


def test_user_roles_endpoint(client, student):
    response = client.get("/api/users/3/roles", headers=student)
    assert response.status_code == 200
    assert [r["name"] for r in response.json()] == ["Student"]


def test_student_cannot_manage_courses(client, student):
    assert client.get("/api/courses", headers=student).status_code == 403
    response = client.post("/api/courses", json={"title": "Nope"}, headers=student)
    assert response.status_code == 403


def test_student_reads_questions_but_cannot_write(client, student, instructor):
    assessment = client.post(
        "/api/assessments", json={"course_id": 1, "title": "Quiz"}, headers=instructor
    ).json()
    assert client.get("/api/questions", headers=student).status_code == 200
    response = client.post(
        "/api/questions", json={"assessment_id": assessment["id"], "content": "2+2?"}, headers=student
    )
    assert response.status_code == 403
