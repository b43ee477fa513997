import uuid
from unittest.mock import AsyncMock, patch

from fastapi.testclient import TestClient

from tests.conftest import VALID_CSV, upload


def test_read_events_empty(client: TestClient):
    """A fresh database lists no events."""
    response = client.get("/api/v1/events")

    assert response.status_code == 200
    assert response.json() == {"message": "success", "data": []}


def test_create_event(client: TestClient):
    """Uploading a valid CSV creates a draft event."""
    response = upload(client, VALID_CSV)

    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "success"
    data = body["data"]
    assert data["name"] == "Test Event"
    assert data["status"] == "draft"
    assert data["create_date"] == data["update_date"]
    assert "delete_date" not in data
    assert uuid.UUID(data["id"]).version == 7


def test_created_event_is_listed_once(client: TestClient):
    created = upload(client, VALID_CSV).json()["data"]

    response = client.get("/api/v1/events")

    assert response.status_code == 200
    events = response.json()["data"]
    matching = [event for event in events if event["id"] == created["id"]]
    assert len(matching) == 1
    assert matching[0]["name"] == "Test Event"
    assert matching[0]["status"] == "draft"


def test_each_upload_gets_a_new_id(client: TestClient):
    first = upload(client, VALID_CSV, name="First").json()["data"]["id"]
    second = upload(client, VALID_CSV, name="Second").json()["data"]["id"]

    assert first != second

    listed = {event["id"] for event in client.get("/api/v1/events").json()["data"]}
    assert listed == {first, second}


def test_create_event_with_empty_name(client: TestClient):
    """The name is not validated."""
    response = upload(client, VALID_CSV, name="")

    assert response.status_code == 200
    assert response.json()["data"]["name"] == ""


def test_create_event_without_name_field(client: TestClient):
    response = client.post(
        "/api/v1/event",
        files={"csvfile": ("todos.csv", VALID_CSV, "text/csv")},
    )

    assert response.status_code == 200
    assert response.json()["data"]["name"] == ""


def test_create_event_header_only(client: TestClient):
    """A file with a header and no rows still creates an event."""
    response = upload(client, b"todo_name,note")

    assert response.status_code == 200
    assert response.json()["message"] == "success"


def test_create_event_unexpected_header(client: TestClient):
    """Unknown columns decode to empty todos rather than failing."""
    response = upload(client, b"wrong_column,another_wrong\nTask 1,Note 1")

    assert response.status_code == 200
    assert response.json()["data"]["status"] == "draft"


def test_create_event_missing_file(client: TestClient):
    response = client.post("/api/v1/event", data={"name": "Test Event"})

    assert response.status_code == 400
    assert response.json() == {"message": "http: no such file"}
    assert client.get("/api/v1/events").json()["data"] == []


def test_create_event_malformed_csv(client: TestClient):
    """An unterminated quote aborts creation with a server error."""
    content = b'todo_name,note\n"Unclosed quote,This is bad\nAnother row,Good row'

    response = upload(client, content, filename="malformed.csv")

    assert response.status_code == 500
    body = response.json()
    assert body["message"] != "success"
    assert "data" not in body
    assert client.get("/api/v1/events").json()["data"] == []


def test_create_event_wrong_field_count(client: TestClient):
    response = upload(client, b"todo_name,note\na,b\nc,d,e\n")

    assert response.status_code == 500
    assert "Expected 2 fields" in response.json()["message"]


def test_create_event_short_row(client: TestClient):
    response = upload(client, b"todo_name,note\nTask 1,Note 1\nTask 3\n")

    assert response.status_code == 500
    assert response.json() == {"message": "record 2: wrong number of fields"}
    assert client.get("/api/v1/events").json()["data"] == []


def test_create_event_empty_file(client: TestClient):
    response = upload(client, b"")

    assert response.status_code == 500
    assert client.get("/api/v1/events").json()["data"] == []


def test_create_event_duplicate_id(client: TestClient):
    """A failed insert is reported and leaves the first event alone."""
    fixed_id = "0192a0b4-5c6d-7e8f-9a0b-1c2d3e4f5a6b"

    with patch("csv_importer.api.v1.events.new_event_id", return_value=fixed_id):
        first = upload(client, VALID_CSV, name="Original")
        second = upload(client, VALID_CSV, name="Duplicate")

    assert first.status_code == 200
    assert second.status_code == 500
    assert second.json()["message"]

    events = client.get("/api/v1/events").json()["data"]
    assert [event["id"] for event in events] == [fixed_id]
    assert events[0]["name"] == "Original"


def test_create_event_repository_error(client: TestClient):
    with patch(
        "csv_importer.api.v1.events.create_event",
        AsyncMock(side_effect=Exception("database connection failed")),
    ):
        response = upload(client, VALID_CSV)

    assert response.status_code == 500
    assert response.json() == {"message": "database connection failed"}


def test_create_event_id_generation_error(client: TestClient):
    with patch(
        "csv_importer.api.v1.events.new_event_id",
        side_effect=RuntimeError("entropy unavailable"),
    ):
        response = upload(client, VALID_CSV)

    assert response.status_code == 500
    assert response.json() == {"message": "entropy unavailable"}
    assert client.get("/api/v1/events").json()["data"] == []


def test_create_event_decodes_upload(client: TestClient):
    """The raw upload bytes are handed to the CSV decoder."""
    with patch("csv_importer.api.v1.events.decode_todos", return_value=[]) as decode:
        response = upload(client, VALID_CSV)

    assert response.status_code == 200
    decode.assert_called_once_with(VALID_CSV)


def test_read_events_repository_error(client: TestClient):
    with patch(
        "csv_importer.api.v1.events.list_events",
        AsyncMock(side_effect=Exception("database connection failed")),
    ):
        response = client.get("/api/v1/events")

    assert response.status_code == 500
    assert response.json() == {"message": "database connection failed"}


def test_unknown_route_uses_envelope(client: TestClient):
    response = client.get("/api/v1/nothing-here")

    assert response.status_code == 404
    assert response.json() == {"message": "Not Found"}


def test_request_id_header(client: TestClient):
    response = client.get("/api/v1/events")

    assert response.headers["X-Request-ID"]
    assert "X-Process-Time" in response.headers
