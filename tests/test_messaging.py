def send(client, headers, receiver_id, content="hello"):
    return client.post("/api/messages", json={"receiver_id": receiver_id, "content": content}, headers=headers)


def test_send_message_stamps_sender(client, student):
    response = send(client, student, receiver_id=2)
    assert response.status_code == 201
    body = response.json()
    assert body["sender_id"] == 3
    assert body["receiver_id"] == 2


def test_get_message(client, student):
    message_id = send(client, student, receiver_id=2).json()["id"]
    response = client.get(f"/api/messages/{message_id}", headers=student)
    assert response.status_code == 200
    assert response.json()["content"] == "hello"
    assert client.get("/api/messages/999", headers=student).status_code == 404


def test_messages_by_user_is_staff_only(client, student):
    assert client.get("/api/messages/user/3", headers=student).status_code == 403


def test_send_refreshes_both_participants_views(client, instructor, student, cache):
    send(client, instructor, receiver_id=3, content="first")
    assert len(client.get("/api/messages/user/3", headers=instructor).json()) == 1
    assert len(client.get("/api/messages/user/2", headers=instructor).json()) == 1
    assert {"Message_User_3", "Message_User_2"} <= set(cache.store)

    send(client, student, receiver_id=2, content="reply")

    assert [m["content"] for m in client.get("/api/messages/user/3", headers=instructor).json()] == [
        "first",
        "reply",
    ]
    assert len(client.get("/api/messages/user/2", headers=instructor).json()) == 2


def test_message_to_unknown_user_is_400(client, student):
    assert send(client, student, receiver_id=999).status_code == 400


def test_only_admin_sends_notifications(client, instructor):
    response = client.post("/api/notifications", json={"user_id": 3, "content": "hi"}, headers=instructor)
    assert response.status_code == 403


def test_notification_flow(client, admin, student, cache):
    created = client.post("/api/notifications", json={"user_id": 3, "content": "Grades are out"}, headers=admin)
    assert created.status_code == 201
    notification_id = created.json()["id"]
    assert created.json()["is_read"] is False

    listed = client.get("/api/notifications/user/3", headers=student).json()
    assert [n["is_read"] for n in listed] == [False]
    assert client.get(f"/api/notifications/{notification_id}", headers=student).status_code == 200

    response = client.post(f"/api/notifications/mark-read/{notification_id}", headers=student)
    assert response.status_code == 204

    assert client.get(f"/api/notifications/{notification_id}", headers=student).json()["is_read"] is True
    assert [n["is_read"] for n in client.get("/api/notifications/user/3", headers=student).json()] == [True]


def test_deleting_user_drops_cached_notifications(client, admin):
    created = client.post("/api/notifications", json={"user_id": 3, "content": "bye"}, headers=admin).json()
    assert client.get(f"/api/notifications/{created['id']}", headers=admin).status_code == 200
    assert len(client.get("/api/notifications/user/3", headers=admin).json()) == 1

    assert client.delete("/api/users/3", headers=admin).status_code == 204

    assert client.get(f"/api/notifications/{created['id']}", headers=admin).status_code == 404
    assert client.get("/api/notifications/user/3", headers=admin).json() == []


def test_mark_read_unknown_notification(client, student):
    assert client.post("/api/notifications/mark-read/999", headers=student).status_code == 404


def test_new_notification_shows_up_in_user_view(client, admin, student):
    client.post("/api/notifications", json={"user_id": 3, "content": "one"}, headers=admin)
    assert len(client.get("/api/notifications/user/3", headers=student).json()) == 1

    client.post("/api/notifications", json={"user_id": 3, "content": "two"}, headers=admin)
    assert len(client.get("/api/notifications/user/3", headers=student).json()) == 2
