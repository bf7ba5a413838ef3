# ruff: noqa: S101

"""Tests for the post endpoints."""

import pytest
from fastapi import status
from fastapi.testclient import TestClient

from blog.config.seed import POST_DELETED_ID, USER_ADA_ID

_ACTIVE_POSTS = 12


def _ids(response_body: dict) -> list[int]:
    return [post["id"] for post in response_body["data"]]


@pytest.mark.post
class TestListPosts:
    """Tests for GET /posts."""

    @classmethod
    def test_first_page(cls, client: TestClient) -> None:
        """The first page holds ten posts ordered by id."""
        response = client.get("/posts")

        assert response.status_code == status.HTTP_200_OK
        body = response.json()
        assert _ids(body) == list(range(1, 11))
        assert body["pagination"] == {
            "page": 1,
            "per_page": 10,
            "max_page": 2,
            "total": _ACTIVE_POSTS,
        }

    @classmethod
    def test_second_page(cls, client: TestClient) -> None:
        """Soft deleted posts never show up on the last page."""
        response = client.get("/posts", params={"page": 2})

        assert _ids(response.json()) == [11, 12]

    @classmethod
    def test_status_filter(cls, client: TestClient) -> None:
        """The status filter scopes page and total."""
        response = client.get("/posts", params={"status": "draft"})

        body = response.json()
        assert _ids(body) == [4, 8, 12]
        assert body["pagination"]["total"] == 3  # noqa: PLR2004

    @classmethod
    def test_author_filter(cls, client: TestClient) -> None:
        """Posts can be filtered by author."""
        response = client.get("/posts", params={"author_id": USER_ADA_ID})

        assert _ids(response.json()) == [1, 4, 7, 10]

    @classmethod
    def test_combined_filters(cls, client: TestClient) -> None:
        """Status and author filters are AND-combined."""
        response = client.get(
            "/posts", params={"status": "published", "author_id": USER_ADA_ID}
        )

        body = response.json()
        assert _ids(body) == [1, 7, 10]
        assert body["pagination"]["total"] == 3  # noqa: PLR2004

    @classmethod
    def test_invalid_status(cls, client: TestClient) -> None:
        """Unknown states are rejected by request validation."""
        response = client.get("/posts", params={"status": "bogus"})

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    @classmethod
    def test_search(cls, client: TestClient) -> None:
        """Search matches title or body, the total stays the listing total."""
        response = client.get("/posts", params={"search": "python"})

        body = response.json()
        assert _ids(body) == [1, 7]
        assert body["pagination"]["total"] == _ACTIVE_POSTS

    @classmethod
    def test_sort_descending(cls, client: TestClient) -> None:
        """Posts can be sorted by creation date, newest first."""
        response = client.get(
            "/posts", params={"sort": "created_at", "order": "desc", "per_page": 3}
        )

        assert _ids(response.json()) == [12, 11, 10]

    @classmethod
    def test_unsafe_sort_is_ignored(cls, client: TestClient) -> None:
        """An unsafe sort falls back to the default order."""
        response = client.get("/posts", params={"sort": "id;DROP TABLE posts"})

        assert response.status_code == status.HTTP_200_OK
        assert _ids(response.json()) == list(range(1, 11))

    @classmethod
    def test_include_author(cls, client: TestClient) -> None:
        """The author is embedded when included."""
        response = client.get("/posts", params={"includes": "author", "per_page": 2})

        data = response.json()["data"]
        assert data[0]["author"] == {"id": 1, "name": "Ada Lovelace", "role": "admin"}
        assert data[1]["author"]["name"] == "Grace Hopper"

    @classmethod
    def test_author_not_included_by_default(cls, client: TestClient) -> None:
        """Without includes no author is embedded."""
        response = client.get("/posts", params={"per_page": 1})

        assert response.json()["data"][0]["author"] is None


@pytest.mark.post
class TestGetPost:
    """Tests for GET /posts/{post_id}."""

    @classmethod
    def test_found(cls, client: TestClient) -> None:
        """An active post is returned."""
        response = client.get("/posts/3")

        assert response.status_code == status.HTTP_200_OK
        body = response.json()
        assert body["title"] == "FastAPI notes #3"
        assert body["status"] == "published"
        assert body["author_id"] == 3  # noqa: PLR2004

    @classmethod
    def test_soft_deleted(cls, client: TestClient) -> None:
        """Soft deleted posts are not found."""
        response = client.get(f"/posts/{POST_DELETED_ID}")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["code"] == "NOT_FOUND"
