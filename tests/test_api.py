# tests/test_api.py

from fastapi.testclient import TestClient

from taskboard.database import InMemoryDocumentStore
from taskboard.errors import StoreError
from taskboard.main import create_application


def create_task(client, title="Buy milk", description="2%", email="a@b.com"):
    response = client.post("/tasks", json={"title": title, "description": description, "email": email})
    assert response.status_code == 200
    return response.json()


def test_health(client):
    assert client.get("/health").json() == {"status": "healthy"}
    assert client.get("/").status_code == 200


def test_register_returns_profile(client, store):
    response = client.post("/register", json={"uid": "u1", "name": "Ada", "email": "a@b.com"})

    assert response.status_code == 201
    assert response.json() == {"uid": "u1", "name": "Ada", "email": "a@b.com"}
    assert store.collections["users"]["u1"] == {"name": "Ada", "email": "a@b.com"}


def test_register_missing_field(client):
    response = client.post("/register", json={"uid": "u1", "name": "Ada"})

    assert response.status_code == 400
    assert "email" in response.json()["error"]


def test_edit_profile(client, store):
    client.post("/register", json={"uid": "u1", "name": "Ada", "email": "a@b.com"})

    response = client.put("/edit-profile/u1", json={"name": "Ada L", "email": "ada@b.com"})

    assert response.status_code == 200
    assert "message" in response.json()
    assert store.collections["users"]["u1"] == {"name": "Ada L", "email": "ada@b.com"}


def test_edit_profile_requires_name_and_email(client):
    client.post("/register", json={"uid": "u1", "name": "Ada", "email": "a@b.com"})

    assert client.put("/edit-profile/u1", json={"name": "Ada L"}).status_code == 400


def test_edit_profile_unknown_user(client):
    response = client.put("/edit-profile/nobody", json={"name": "n", "email": "e@x.com"})

    assert response.status_code == 404


def test_create_task_response_and_storage(client, store):
    body = create_task(client)

    assert set(body) == {"id", "title", "description", "createdAt"}
    assert body["title"] == "Buy milk"
    assert body["description"] == "2%"
    assert store.collections["tasks"]["a_at_b_dot_com"] == {
        body["id"]: {"title": "Buy milk", "description": "2%", "createdAt": body["createdAt"]}
    }


def test_create_task_missing_field(client):
    response = client.post("/tasks", json={"title": "Buy milk", "email": "a@b.com"})

    assert response.status_code == 400
    assert "error" in response.json()


def test_malformed_body_is_bad_request(client):
    response = client.post("/tasks", content="not json", headers={"Content-Type": "application/json"})

    assert response.status_code == 400


def test_list_tasks(client):
    first = create_task(client, title="one")
    second = create_task(client, title="two")

    response = client.get("/tasks", params={"email": "a@b.com"})

    assert response.status_code == 200
    assert set(response.json()) == {first["id"], second["id"]}


def test_list_tasks_empty_for_new_user(client):
    response = client.get("/tasks", params={"email": "new@b.com"})

    assert response.status_code == 200
    assert response.json() == {}


def test_list_tasks_requires_email(client):
    assert client.get("/tasks").status_code == 400


def test_update_task(client):
    created = create_task(client)

    response = client.put(f"/tasks/{created['id']}", json={"email": "a@b.com", "title": "Buy oat milk"})

    assert response.status_code == 200
    assert response.json() == {
        "message": "Task updated",
        "task": {"title": "Buy oat milk", "description": "2%", "createdAt": created["createdAt"]},
    }


def test_update_task_with_partial_stored_entry(client, store):
    store.collections["tasks"] = {"a_at_b_dot_com": {"1": {"title": "t"}}}

    response = client.put("/tasks/1", json={"email": "a@b.com", "title": "x"})

    assert response.status_code == 200
    assert response.json() == {"message": "Task updated", "task": {"title": "x"}}


def test_update_task_requires_data(client):
    created = create_task(client)

    response = client.put(f"/tasks/{created['id']}", json={"email": "a@b.com"})

    assert response.status_code == 400


def test_update_unknown_task(client):
    create_task(client)

    response = client.put("/tasks/does-not-exist", json={"email": "a@b.com", "title": "x"})

    assert response.status_code == 404
    assert response.json() == {"error": "Task not found."}


def test_delete_task_with_body(client, store):
    created = create_task(client)

    response = client.request("DELETE", f"/tasks/{created['id']}", json={"email": "a@b.com"})

    assert response.status_code == 200
    assert response.json() == {"message": f"Task {created['id']} deleted."}
    assert store.collections["tasks"]["a_at_b_dot_com"] == {}


def test_delete_task_with_query(client):
    created = create_task(client)

    response = client.delete(f"/tasks/{created['id']}", params={"email": "a@b.com"})

    assert response.status_code == 200


def test_delete_task_requires_email(client):
    created = create_task(client)

    assert client.delete(f"/tasks/{created['id']}").status_code == 400


def test_delete_task_not_found(client):
    response = client.request("DELETE", "/tasks/1", json={"email": "a@b.com"})
    assert response.status_code == 404
    assert response.json() == {"error": "User tasks document not found"}

    create_task(client)
    response = client.request("DELETE", "/tasks/1", json={"email": "a@b.com"})
    assert response.status_code == 404
    assert response.json() == {"error": "Task ID not found"}


def test_signup_and_login(client):
    signup = client.post(
        "/auth/signup",
        json={
            "user_entered_email": "a@b.com",
            "user_entered_username": "ada",
            "user_entered_password": "secret",
        },
    )
    assert signup.status_code == 201

    login = client.post(
        "/auth/login",
        json={"user_entered_email": "a@b.com", "user_entered_password": "secret"},
    )
    assert login.status_code == 200
    assert login.json() == {"message": "Login successful", "user": {"email": "a@b.com", "username": "ada"}}


def test_signup_duplicate_email(client):
    body = {
        "user_entered_email": "a@b.com",
        "user_entered_username": "ada",
        "user_entered_password": "secret",
    }
    assert client.post("/auth/signup", json=body).status_code == 201

    response = client.post("/auth/signup", json=body)

    assert response.status_code == 400
    assert response.json() == {"error": "Email already registered"}


def test_login_errors(client):
    unknown = client.post(
        "/auth/login",
        json={"user_entered_email": "a@b.com", "user_entered_password": "secret"},
    )
    assert unknown.status_code == 404

    client.post(
        "/auth/signup",
        json={
            "user_entered_email": "a@b.com",
            "user_entered_username": "ada",
            "user_entered_password": "secret",
        },
    )
    wrong = client.post(
        "/auth/login",
        json={"user_entered_email": "a@b.com", "user_entered_password": "wrong"},
    )
    assert wrong.status_code == 401
    assert wrong.json() == {"error": "Invalid credentials"}


class FailingStore(InMemoryDocumentStore):
    async def get(self, collection, doc_id):
        raise StoreError("MongoDB get on 'tasks' failed: connection refused to 10.0.0.5")


def test_store_errors_are_not_leaked():
    with TestClient(create_application(store=FailingStore())) as client:
        response = client.get("/tasks", params={"email": "a@b.com"})

    assert response.status_code == 500
    assert response.json() == {"error": "Internal server error"}


def test_wrongly_typed_body_is_bad_request(client, store):
    response = client.post("/tasks", json={"title": 5, "description": "d", "email": "a@b.com"})

    assert response.status_code == 400
    assert response.json() == {"error": "Invalid request body."}
    assert store.collections.get("tasks", {}) == {}


def test_register_overwrites_existing_profile(client, store):
    client.post("/register", json={"uid": "u1", "name": "Ada", "email": "a@b.com"})

    response = client.post("/register", json={"uid": "u1", "name": "Grace", "email": "g@b.com"})

    assert response.status_code == 201
    assert store.collections["users"] == {"u1": {"name": "Grace", "email": "g@b.com"}}
