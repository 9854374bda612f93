from fastapi.testclient import TestClient


def _create(client: TestClient, **fields):
    payload = {"name": "Board Room", "capacity": 10, **fields}
    response = client.post("/rooms/", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


def test_create_room(client: TestClient):
    response = client.post(
        "/rooms/", json={"name": "Board Room", "capacity": 12, "location": "2F"}
    )
    assert response.status_code == 201
    data = response.json()
    assert len(data["room_id"]) == 24
    assert data["name"] == "Board Room"
    assert data["capacity"] == 12
    assert data["location"] == "2F"
    assert data["is_available"] is True


def test_create_assigns_distinct_ids(client: TestClient):
    first = _create(client, name="One")
    second = _create(client, name="Two")

    assert first["room_id"] != second["room_id"]


def test_create_invalid_room_is_rejected_and_not_stored(client: TestClient):
    response = client.post("/rooms/", json={"name": "Closet", "capacity": 0})

    assert response.status_code == 400
    assert response.json()["error"].startswith("Room validation failed: capacity")
    assert client.get("/rooms/").json() == []


def test_create_missing_field_is_rejected(client: TestClient):
    response = client.post("/rooms/", json={"capacity": 4})

    assert response.status_code == 400
    assert response.json() == {"error": "Room validation failed: name: Field required"}


def test_list_rooms_empty(client: TestClient):
    response = client.get("/rooms/")

    assert response.status_code == 200
    assert response.json() == []


def test_list_rooms_returns_all_in_creation_order(client: TestClient):
    created = [_create(client, name=f"Room {i}") for i in range(3)]

    response = client.get("/rooms/")

    assert response.status_code == 200
    assert [room["room_id"] for room in response.json()] == [
        room["room_id"] for room in created
    ]


def test_get_room(client: TestClient):
    created = _create(client, description="Projector and whiteboard")

    response = client.get(f"/rooms/{created['room_id']}")

    assert response.status_code == 200
    assert response.json() == created


def test_get_missing_room(client: TestClient):
    response = client.get(f"/rooms/{'0' * 24}")

    assert response.status_code == 404
    assert response.json() == {"error": "Room not found"}


def test_get_malformed_id(client: TestClient):
    response = client.get("/rooms/not-a-room-id")

    assert response.status_code == 400
    assert response.json() == {"error": "Invalid room ID"}


def test_partial_update_changes_only_sent_fields(client: TestClient):
    created = _create(client, location="Ground floor")

    response = client.patch(f"/rooms/{created['room_id']}", json={"capacity": 20})

    assert response.status_code == 200
    updated = response.json()
    assert updated["capacity"] == 20
    for field in ("room_id", "name", "location", "description", "is_available", "created_at"):
        assert updated[field] == created[field]
    assert client.get(f"/rooms/{created['room_id']}").json() == updated


def test_put_is_accepted_as_update(client: TestClient):
    created = _create(client)

    response = client.put(f"/rooms/{created['room_id']}", json={"is_available": False})

    assert response.status_code == 200
    assert response.json()["is_available"] is False


def test_update_revalidates_merged_document(client: TestClient):
    created = _create(client)

    response = client.patch(f"/rooms/{created['room_id']}", json={"name": None})

    assert response.status_code == 400
    assert response.json()["error"].startswith("Room validation failed: name")
    assert client.get(f"/rooms/{created['room_id']}").json() == created


def test_update_missing_room(client: TestClient):
    response = client.patch(f"/rooms/{'f' * 24}", json={"capacity": 3})

    assert response.status_code == 404
    assert response.json() == {"error": "Room not found"}


def test_update_malformed_id(client: TestClient):
    response = client.patch("/rooms/xyz", json={"capacity": 3})

    assert response.status_code == 400
    assert response.json() == {"error": "Invalid room ID"}


def test_delete_room_twice(client: TestClient):
    created = _create(client)
    url = f"/rooms/{created['room_id']}"

    first = client.delete(url)
    assert first.status_code == 200
    assert first.json() == {"message": "Room deleted successfully"}

    assert client.get(url).status_code == 404

    second = client.delete(url)
    assert second.status_code == 404
    assert second.json() == {"error": "Room not found"}
    assert client.get("/rooms/").json() == []


def test_delete_malformed_id(client: TestClient):
    response = client.delete("/rooms/123")

    assert response.status_code == 400
    assert response.json() == {"error": "Invalid room ID"}


def test_update_ignores_room_id_in_body(client: TestClient):
    created = _create(client)
    other_id = "e" * 24

    response = client.patch(
        f"/rooms/{created['room_id']}", json={"room_id": other_id, "capacity": 3}
    )

    assert response.status_code == 200
    assert response.json()["room_id"] == created["room_id"]
    assert response.json()["capacity"] == 3
    assert client.get(f"/rooms/{created['room_id']}").status_code == 200
    assert client.get(f"/rooms/{other_id}").status_code == 404
