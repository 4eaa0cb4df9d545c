import logging

from fastapi.testclient import TestClient

from db import get_db
from main import app
from tests.data import INCEPTION_ID, GODFATHER_ID


def register(client, **fields):
    return client.post("/users", json=fields)


def test_register_returns_created_user(client):
    response = register(client, username="ana", password="x")
    assert response.status_code == 201
    body = response.json()
    assert body["username"] == "ana"
    assert body["favoriteMovies"] == []
    assert "_id" in body


def test_register_duplicate_is_400(client, mongo_db):
    register(client, username="ana", password="x")
    response = register(client, username="ana", password="x")
    assert response.status_code == 400
    assert mongo_db.users.count_documents({"username": "ana"}) == 1


def test_register_keeps_extra_fields(client):
    response = register(client, username="ana", email="ana@example.com", birthday="1990-04-01", nickname="A")
    assert response.json()["nickname"] == "A"
    assert response.json()["birthday"] == "1990-04-01"


def test_register_without_username_is_rejected(client):
    assert register(client, password="x").status_code == 422


def test_read_user(client):
    register(client, username="ana")
    assert client.get("/users/ana").json()["username"] == "ana"
    assert client.get("/users/ghost").status_code == 404


def test_update_merges_fields(client):
    register(client, username="ana", password="x", email="old@example.com")
    response = client.put("/users/ana", json={"email": "new@example.com"})
    assert response.status_code == 200
    assert response.json()["email"] == "new@example.com"
    assert response.json()["password"] == "x"


def test_update_unknown_user_is_404(client):
    assert client.put("/users/ghost", json={"email": "x@example.com"}).status_code == 404


def test_add_favorite_twice_keeps_one(client):
    register(client, username="ana")
    client.post(f"/users/ana/movies/{INCEPTION_ID}")
    response = client.post(f"/users/ana/movies/{INCEPTION_ID}")
    assert response.status_code == 200
    assert response.json()["favoriteMovies"] == [str(INCEPTION_ID)]
    assert client.get("/users/ana").json()["favoriteMovies"] == [str(INCEPTION_ID)]


def test_add_favorite_for_unknown_user_is_404(client):
    assert client.post(f"/users/ghost/movies/{INCEPTION_ID}").status_code == 404


def test_remove_favorite_leaves_others(client):
    register(client, username="ana")
    client.post(f"/users/ana/movies/{INCEPTION_ID}")
    client.post(f"/users/ana/movies/{GODFATHER_ID}")

    response = client.delete(f"/users/ana/movies/{INCEPTION_ID}")
    assert response.status_code == 200
    assert response.json()["favoriteMovies"] == [str(GODFATHER_ID)]


def test_remove_favorite_for_unknown_user_is_404(client):
    assert client.delete(f"/users/ghost/movies/{INCEPTION_ID}").status_code == 404


def test_remove_favorite_with_malformed_id_is_500(client):
    register(client, username="ana")
    response = client.delete("/users/ana/movies/not-an-object-id")
    assert response.status_code == 500
    assert "not-an-object-id" in response.json()["detail"]


def test_deregister(client):
    register(client, username="ana")
    response = client.delete("/users/ana")
    assert response.status_code == 200
    assert response.json() == {"message": "User ana deleted"}
    assert client.get("/users/ana").status_code == 404


def test_deregister_unknown_user_is_404(client):
    assert client.delete("/users/ghost").status_code == 404


def test_failure_outside_handler_gets_generic_500():
    def unavailable():
        raise RuntimeError("no database")

    app.dependency_overrides[get_db] = unavailable
    try:
        response = TestClient(app, raise_server_exceptions=False).delete("/users/ana")
    finally:
        app.dependency_overrides.clear()
    assert response.status_code == 500
    assert response.text == "Something went wrong! Please try again later."


def test_opaque_fields_are_stored_as_sent(client, mongo_db):
    response = register(client, username="ana", password=12345, email=7)
    assert response.status_code == 201
    assert response.json()["password"] == 12345
    assert response.json()["email"] == 7

    response = client.put("/users/ana", json={"email": ["a@example.com", "b@example.com"]})
    assert response.status_code == 200
    assert response.json()["email"] == ["a@example.com", "b@example.com"]
    assert mongo_db.users.find_one({"username": "ana"})["password"] == 12345


def test_add_favorite_with_malformed_id_is_500(client):
    register(client, username="ana")
    response = client.post("/users/ana/movies/zzz")
    assert response.status_code == 500
    assert "'zzz' is not a valid ObjectId" in response.json()["detail"]


def test_failure_outside_handler_is_still_logged(caplog):
    def unavailable():
        raise RuntimeError("no database")

    caplog.set_level(logging.INFO)
    app.dependency_overrides[get_db] = unavailable
    try:
        TestClient(app, raise_server_exceptions=False).get("/users/ana")
    finally:
        app.dependency_overrides.clear()
    assert any("GET /users/ana 500" in record.getMessage() for record in caplog.records)
