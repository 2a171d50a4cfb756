"""Tests for the local HTTP binding of the book API."""

import pytest
from fastapi.testclient import TestClient

from src.library_api.api.http import deps
from src.library_api.api.http.app import app
from src.library_api.core.services import BookService
from src.library_api.core.storage import StaticBookStorage
from tests.fixtures.books import FAHRENHEIT_ID, MISSING_ID


@pytest.fixture
def client():
    service = BookService(StaticBookStorage())
    app.dependency_overrides[deps.get_book_service] = lambda: service
    yield TestClient(app)
    app.dependency_overrides.clear()


class TestBooksRouter:
    def test_list_books(self, client):
        response = client.get("/books")

        assert response.status_code == 200
        assert len(response.json()) == 12
        assert response.headers["access-control-allow-origin"] == "*"

    def test_get_book(self, client):
        response = client.get(f"/books/{FAHRENHEIT_ID}")

        assert response.status_code == 200
        assert response.json()["author"] == "Ray Bradbury"

    def test_get_missing_book(self, client):
        response = client.get(f"/books/{MISSING_ID}")

        assert response.status_code == 404
        assert MISSING_ID in response.json()["error"]

    def test_create_and_update(self, client):
        created = client.post("/books", content='{"isbn":"12345","title":"T","author":"A"}')
        assert created.status_code == 200
        book_id = created.json()["id"]

        updated = client.put(f"/books/{book_id}", json={"title": "T2", "author": "A"})

        assert updated.status_code == 200
        assert updated.json() == {
            "id": book_id,
            "title": "T2",
            "author": "A",
            "isbn": "",
            "description": "",
            "book_status": "",
        }

    def test_create_malformed(self, client):
        response = client.post("/books", content="}")

        assert response.status_code == 400

    def test_create_rejects_non_utf8_body(self, client):
        response = client.post("/books", content=b'{"title": "Bad \xff byte"}')

        assert response.status_code == 400
        assert "not valid UTF-8" in response.json()["error"]
        assert len(client.get("/books").json()) == 12

    def test_create_keeps_non_ascii_text(self, client):
        response = client.post("/books", content='{"title": "Cien años de soledad"}'.encode())

        assert response.status_code == 200
        assert response.json()["title"] == "Cien años de soledad"

    def test_check_out_and_in(self, client):
        out = client.put(f"/books/{FAHRENHEIT_ID}/checkout")
        assert out.json()["book_status"] == "out"

        back = client.put(f"/books/{FAHRENHEIT_ID}/checkin")
        assert back.json()["book_status"] == "in"

    def test_delete(self, client):
        assert client.delete(f"/books/{FAHRENHEIT_ID}").status_code == 200
        assert client.delete(f"/books/{FAHRENHEIT_ID}").status_code == 200
        assert client.get(f"/books/{FAHRENHEIT_ID}").status_code == 404

    def test_request_id_echoed(self, client):
        response = client.get("/books", headers={"X-Request-ID": "abc-123"})

        assert response.headers["X-Request-ID"] == "abc-123"


class TestHealthRouter:
    def test_liveness(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_readiness_static(self, client):
        response = client.get("/health/ready")

        assert response.status_code == 200
        assert response.json()["status"] == "ready"
