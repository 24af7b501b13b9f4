"""
Tests for Books API Endpoints

This module tests the catalog endpoints under /api/v1/books.

TEST NAMING CONVENTION:
- test_<action>_<scenario>
- Examples: test_create_book_json, test_get_book_not_found
"""

import base64
import uuid
from decimal import Decimal

import pytest
from fastapi import status
from fastapi.testclient import TestClient
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from bookstore.models import Book

BOOKS_URL = "/api/v1/books"

# Smallest JPEG header; content is never decoded, only its type is checked
TINY_JPEG = b"\xff\xd8\xff\xe0\x00\x10JFIF\x00\x01\x01\x00\x00\x01\x00\x01\x00\x00\xff\xd9"

BOOK_JSON = {
    "title": "The Hobbit",
    "authors": ["J. R. R. Tolkien"],
    "publisher": "George Allen & Unwin",
    "published": "1937-09-21",
    "genre": ["Fantasy"],
    "summary": "Bilbo Baggins goes on an unexpected journey.",
    "price": "15.50",
}


class TestCreateBook:
    """Tests for POST /api/v1/books"""

    def test_create_book_json(self, client: TestClient, auth_headers: dict):
        response = client.post(BOOKS_URL, json=BOOK_JSON, headers=auth_headers)

        assert response.status_code == status.HTTP_201_CREATED
        body = response.json()
        assert body["status"] == "success"
        assert body["statuscode"] == 201
        assert body["message"] == "Book Created Successfully"

        data = body["data"]
        uuid.UUID(data["book_id"])
        assert data["title"] == "The Hobbit"
        assert data["authors"] == ["J. R. R. Tolkien"]
        assert data["genre"] == ["Fantasy"]
        assert data["published"] == "1937-09-21"
        assert Decimal(data["price"]) == Decimal("15.50")
        assert data["cover_image"] is None

    def test_create_book_accepts_timestamp_for_published(
        self, client: TestClient, auth_headers: dict
    ):
        payload = {**BOOK_JSON, "published": "1937-09-21T00:00:00.000Z"}

        response = client.post(BOOKS_URL, json=payload, headers=auth_headers)

        assert response.status_code == status.HTTP_201_CREATED
        assert response.json()["data"]["published"] == "1937-09-21"

    def test_create_book_multipart_with_cover(
        self, client: TestClient, auth_headers: dict, db_session: Session
    ):
        response = client.post(
            BOOKS_URL,
            data={
                "title": "The Hobbit",
                "authors[]": ["J. R. R. Tolkien", "Christopher Tolkien"],
                "publisher": "George Allen & Unwin",
                "published": "1937-09-21",
                "genre[]": ["Fantasy", "Adventure"],
                "price": "15.50",
            },
            files={"cover_image": ("cover.jpg", TINY_JPEG, "image/jpeg")},
            headers=auth_headers,
        )

        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()["data"]
        assert data["authors"] == ["J. R. R. Tolkien", "Christopher Tolkien"]
        assert data["genre"] == ["Fantasy", "Adventure"]
        assert base64.b64decode(data["cover_image"]) == TINY_JPEG

        stored = db_session.get(Book, uuid.UUID(data["book_id"]))
        assert stored.cover_image == TINY_JPEG

    def test_create_book_multipart_plain_list_fields(
        self, client: TestClient, auth_headers: dict
    ):
        response = client.post(
            BOOKS_URL,
            data={
                "title": "Dune",
                "authors": "Frank Herbert",
                "publisher": "Chilton Books",
                "published": "1965-08-01",
                "genre": "Science Fiction",
                "price": "9.99",
            },
            headers=auth_headers,
        )

        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()["data"]
        assert data["authors"] == ["Frank Herbert"]
        assert data["genre"] == ["Science Fiction"]

    def test_create_book_rejects_non_image(self, client: TestClient, auth_headers: dict):
        response = client.post(
            BOOKS_URL,
            data={**BOOK_JSON, "authors": "J. R. R. Tolkien", "genre": "Fantasy"},
            files={"cover_image": ("notes.txt", b"plain text", "text/plain")},
            headers=auth_headers,
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["message"] == "only image files are allowed"

    @pytest.mark.parametrize(
        "files",
        [None, {"attachment": ("notes.txt", b"plain text", "text/plain")}],
        ids=["urlencoded", "multipart"],
    )
    def test_create_book_rejects_text_cover_field(
        self, client: TestClient, auth_headers: dict, db_session: Session, files
    ):
        response = client.post(
            BOOKS_URL,
            data={**BOOK_JSON, "authors": "J. R. R. Tolkien", "genre": "Fantasy", "cover_image": "text"},
            files=files,
            headers=auth_headers,
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["message"] == "File upload error: cover_image must be a file"
        assert db_session.execute(select(func.count()).select_from(Book)).scalar_one() == 0

    def test_create_book_rejects_cover_in_json(self, client: TestClient, auth_headers: dict):
        payload = {**BOOK_JSON, "cover_image": "aGVsbG8="}

        response = client.post(BOOKS_URL, json=payload, headers=auth_headers)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["message"] == "Content-Type must be multipart/form-data"

    def test_create_book_rejects_non_object_body(self, client: TestClient, auth_headers: dict):
        response = client.post(BOOKS_URL, json=["not", "an", "object"], headers=auth_headers)

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_create_book_missing_fields(self, client: TestClient, auth_headers: dict):
        response = client.post(BOOKS_URL, json={"title": "Only a title"}, headers=auth_headers)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        body = response.json()
        assert body["status"] == "error"
        fields = {error["field"] for error in body["errors"]}
        assert {"authors", "publisher", "published", "genre", "price"} <= fields

    def test_create_book_invalid_price(self, client: TestClient, auth_headers: dict):
        payload = {**BOOK_JSON, "price": "-1"}

        response = client.post(BOOKS_URL, json=payload, headers=auth_headers)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["message"].startswith("price")

    def test_create_book_requires_auth(self, client: TestClient):
        response = client.post(BOOKS_URL, json=BOOK_JSON)

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


class TestListBooks:
    """Tests for GET /api/v1/books"""

    def test_list_books_empty(self, client: TestClient, auth_headers: dict):
        response = client.get(BOOKS_URL, headers=auth_headers)

        assert response.status_code == status.HTTP_200_OK
        body = response.json()
        assert body["message"] == "Books Fetched Successfully"
        assert body["data"] == {"items": [], "total": 0, "limit": 10, "offset": 0}

    def test_list_books_default_page(
        self, client: TestClient, auth_headers: dict, multiple_books: list[Book]
    ):
        response = client.get(BOOKS_URL, headers=auth_headers)

        data = response.json()["data"]
        assert data["total"] == 15
        assert len(data["items"]) == 10

    def test_list_books_pagination(
        self, client: TestClient, auth_headers: dict, multiple_books: list[Book]
    ):
        everything = client.get(f"{BOOKS_URL}?limit=100", headers=auth_headers).json()["data"]
        all_ids = [item["book_id"] for item in everything["items"]]

        response = client.get(f"{BOOKS_URL}?limit=5&offset=5", headers=auth_headers)

        data = response.json()["data"]
        assert data["total"] == 15
        assert data["limit"] == 5
        assert data["offset"] == 5
        assert [item["book_id"] for item in data["items"]] == all_ids[5:10]

    def test_list_books_offset_past_end(
        self, client: TestClient, auth_headers: dict, multiple_books: list[Book]
    ):
        response = client.get(f"{BOOKS_URL}?offset=50", headers=auth_headers)

        data = response.json()["data"]
        assert data["items"] == []
        assert data["total"] == 15

    def test_list_books_filter_genre_case_insensitive(
        self, client: TestClient, auth_headers: dict, multiple_books: list[Book]
    ):
        response = client.get(f"{BOOKS_URL}?genre=fantasy&limit=100", headers=auth_headers)

        data = response.json()["data"]
        assert data["total"] == 8
        assert all("Fantasy" in item["genre"] for item in data["items"])

    def test_list_books_filter_genre_is_exact(
        self, client: TestClient, auth_headers: dict, multiple_books: list[Book]
    ):
        response = client.get(f"{BOOKS_URL}?genre=fant", headers=auth_headers)

        assert response.json()["data"]["total"] == 0

    def test_list_books_filter_author_substring(
        self, client: TestClient, auth_headers: dict, multiple_books: list[Book]
    ):
        response = client.get(f"{BOOKS_URL}?author=tolk", headers=auth_headers)

        assert response.json()["data"]["total"] == 5

    def test_list_books_filter_genre_and_author(
        self, client: TestClient, auth_headers: dict, multiple_books: list[Book]
    ):
        response = client.get(
            f"{BOOKS_URL}?genre=FANTASY&author=Tolkien", headers=auth_headers
        )

        data = response.json()["data"]
        assert data["total"] == 3
        for item in data["items"]:
            assert item["authors"] == ["J. R. R. Tolkien"]
            assert item["genre"] == ["Fantasy"]

    def test_list_books_filter_then_paginate(
        self, client: TestClient, auth_headers: dict, multiple_books: list[Book]
    ):
        response = client.get(
            f"{BOOKS_URL}?genre=Fantasy&limit=3&offset=6", headers=auth_headers
        )

        data = response.json()["data"]
        assert data["total"] == 8
        assert len(data["items"]) == 2

    def test_list_books_invalid_pagination(self, client: TestClient, auth_headers: dict):
        response = client.get(f"{BOOKS_URL}?limit=0", headers=auth_headers)
        assert response.status_code == status.HTTP_400_BAD_REQUEST

        response = client.get(f"{BOOKS_URL}?offset=-1", headers=auth_headers)
        assert response.status_code == status.HTTP_400_BAD_REQUEST


class TestGetBook:
    """Tests for GET /api/v1/books/{book_id}"""

    def test_get_book_success(self, client: TestClient, auth_headers: dict, sample_book: Book):
        response = client.get(f"{BOOKS_URL}/{sample_book.id}", headers=auth_headers)

        assert response.status_code == status.HTTP_200_OK
        body = response.json()
        assert body["message"] == "Book Fetched Successfully"
        assert body["data"]["book_id"] == str(sample_book.id)
        assert body["data"]["title"] == "1984"
        assert body["data"]["authors"] == ["George Orwell"]
        assert "id" not in body["data"]

    def test_get_book_not_found(self, client: TestClient, auth_headers: dict):
        response = client.get(f"{BOOKS_URL}/{uuid.uuid4()}", headers=auth_headers)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["message"] == "Book not found"

    def test_get_book_invalid_id(self, client: TestClient, auth_headers: dict):
        response = client.get(f"{BOOKS_URL}/not-a-uuid", headers=auth_headers)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["message"].startswith("book_id")


class TestUpdateBook:
    """Tests for PUT /api/v1/books/{book_id}"""

    def test_update_book_partial(self, client: TestClient, auth_headers: dict, sample_book: Book):
        response = client.put(
            f"{BOOKS_URL}/{sample_book.id}",
            json={"price": "9.99"},
            headers=auth_headers,
        )

        assert response.status_code == status.HTTP_200_OK
        body = response.json()
        assert body["message"] == "Book Updated Successfully"
        data = body["data"]
        assert Decimal(data["price"]) == Decimal("9.99")
        # Untouched fields keep their values
        assert data["title"] == "1984"
        assert data["authors"] == ["George Orwell"]
        assert data["genre"] == ["Dystopian", "Classic"]
        assert data["summary"] == "A dystopian novel set in a totalitarian society."

    def test_update_book_multipart_cover(
        self, client: TestClient, auth_headers: dict, sample_book: Book
    ):
        response = client.put(
            f"{BOOKS_URL}/{sample_book.id}",
            data={"title": "Nineteen Eighty-Four"},
            files={"cover_image": ("cover.png", TINY_JPEG, "image/png")},
            headers=auth_headers,
        )

        assert response.status_code == status.HTTP_200_OK
        data = response.json()["data"]
        assert data["title"] == "Nineteen Eighty-Four"
        assert data["publisher"] == "Secker & Warburg"
        assert base64.b64decode(data["cover_image"]) == TINY_JPEG

    def test_update_book_rejects_null_title(
        self, client: TestClient, auth_headers: dict, sample_book: Book
    ):
        response = client.put(
            f"{BOOKS_URL}/{sample_book.id}",
            json={"title": None},
            headers=auth_headers,
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_update_book_not_found(self, client: TestClient, auth_headers: dict):
        response = client.put(
            f"{BOOKS_URL}/{uuid.uuid4()}",
            json={"title": "Anything"},
            headers=auth_headers,
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["message"] == "Book not found"


class TestDeleteBook:
    """Tests for DELETE /api/v1/books/{book_id}"""

    def test_delete_book_success(
        self, client: TestClient, auth_headers: dict, sample_book: Book
    ):
        book_id = sample_book.id

        response = client.delete(f"{BOOKS_URL}/{book_id}", headers=auth_headers)

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {
            "status": "success",
            "statuscode": 200,
            "message": "Books Deleted Successfully",
            "data": None,
        }

        follow_up = client.get(f"{BOOKS_URL}/{book_id}", headers=auth_headers)
        assert follow_up.status_code == status.HTTP_400_BAD_REQUEST

    def test_delete_book_not_found(self, client: TestClient, auth_headers: dict):
        response = client.delete(f"{BOOKS_URL}/{uuid.uuid4()}", headers=auth_headers)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["message"] == "Book not found"


class TestCoverImageLimits:
    def test_oversized_cover_rejected(self, client: TestClient, auth_headers: dict, monkeypatch):
        from bookstore.utils import uploads

        monkeypatch.setattr(uploads.settings, "max_cover_image_bytes", 8)

        response = client.post(
            BOOKS_URL,
            data={**BOOK_JSON, "authors": "J. R. R. Tolkien", "genre": "Fantasy"},
            files={"cover_image": ("cover.jpg", TINY_JPEG, "image/jpeg")},
            headers=auth_headers,
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["message"].startswith("File upload error")
