"""Author API tests: CRUD, validation, pagination and the cached author-with-musics read."""

import json

import pytest
from httpx import AsyncClient

from music_api.infrastructure.persistence.repositories.author_repo import AuthorRepository
from music_api.main import app


@pytest.fixture
def aggregate_loads(monkeypatch) -> list[int]:
    """Record every database load of the author-with-musics aggregate."""
    calls: list[int] = []
    original = AuthorRepository.get_with_musics

    async def counting(self, author_id: int):
        calls.append(author_id)
        return await original(self, author_id)

    monkeypatch.setattr(AuthorRepository, "get_with_musics", counting)
    return calls


class TestCreateAuthor:
    async def test_create_returns_201_envelope_and_location(self, client: AsyncClient) -> None:
        """POST /authors returns the created author in the success envelope."""
        response = await client.post(
            "/api/v1/authors", json={"name": "Alice", "email": "alice@example.com"}
        )
        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "Author created successfully"
        assert "timestamp" in body
        data = body["data"]
        assert data["id"] > 0
        assert data["name"] == "Alice"
        assert data["email"] == "alice@example.com"
        assert data["musicCount"] == 0
        assert data["createdAt"]
        assert response.headers["location"] == f"/api/v1/authors/{data['id']}"

    async def test_duplicate_email_is_rejected(self, client: AsyncClient, create_author) -> None:
        """A second author with the same email gets 400 and the email in the message."""
        await create_author(email="dup@example.com")
        response = await client.post(
            "/api/v1/authors", json={"name": "Other", "email": "dup@example.com"}
        )
        assert response.status_code == 400
        body = response.json()
        assert body["message"] == "Email already exists: dup@example.com"
        assert body["status"] == 400
        assert body["path"] == "/api/v1/authors"

    async def test_blank_name_and_bad_email_report_field_errors(self, client: AsyncClient) -> None:
        """Validation failures answer 400 with fieldErrors keyed by wire name."""
        response = await client.post("/api/v1/authors", json={"name": "   ", "email": "nope"})
        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "Validation Failed"
        assert body["message"] == "One or more fields have validation errors"
        assert set(body["fieldErrors"]) == {"name", "email"}
        assert len(body["errors"]) == 2

    async def test_name_too_short(self, client: AsyncClient) -> None:
        response = await client.post("/api/v1/authors", json={"name": "A", "email": "a@example.com"})
        assert response.status_code == 400
        assert "name" in response.json()["fieldErrors"]

    async def test_name_is_trimmed(self, client: AsyncClient) -> None:
        response = await client.post(
            "/api/v1/authors", json={"name": "  Bob  ", "email": "bob@example.com"}
        )
        assert response.status_code == 201
        assert response.json()["data"]["name"] == "Bob"


class TestGetAuthor:
    async def test_get_by_id(self, client: AsyncClient, create_author, create_music) -> None:
        """GET /authors/{id} includes the music count."""
        author = await create_author()
        await create_music(author["id"], name="One")
        await create_music(author["id"], name="Two")
        response = await client.get(f"/api/v1/authors/{author['id']}")
        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Success"
        assert body["data"]["musicCount"] == 2

    async def test_missing_author_is_404(self, client: AsyncClient) -> None:
        response = await client.get("/api/v1/authors/999")
        assert response.status_code == 404
        body = response.json()
        assert body["message"] == "Author not found with id: '999'"
        assert body["error"] == "Not Found"

    async def test_non_integer_id_is_400(self, client: AsyncClient) -> None:
        response = await client.get("/api/v1/authors/abc")
        assert response.status_code == 400
        assert "author_id" in response.json()["fieldErrors"]


class TestUpdateAuthor:
    async def test_update_replaces_name_and_email(self, client: AsyncClient, create_author) -> None:
        author = await create_author()
        response = await client.put(
            f"/api/v1/authors/{author['id']}",
            json={"name": "Alicia", "email": "alicia@example.com"},
        )
        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Author updated successfully"
        assert body["data"]["name"] == "Alicia"
        assert body["data"]["email"] == "alicia@example.com"

    async def test_keeping_own_email_is_allowed(self, client: AsyncClient, create_author) -> None:
        author = await create_author()
        response = await client.put(
            f"/api/v1/authors/{author['id']}",
            json={"name": "Renamed", "email": "alice@example.com"},
        )
        assert response.status_code == 200

    async def test_taking_another_authors_email_is_rejected(
        self, client: AsyncClient, create_author
    ) -> None:
        await create_author(email="first@example.com")
        second = await create_author(name="Second", email="second@example.com")
        response = await client.put(
            f"/api/v1/authors/{second['id']}",
            json={"name": "Second", "email": "first@example.com"},
        )
        assert response.status_code == 400
        assert response.json()["message"] == "Email already exists: first@example.com"

    async def test_update_missing_author_is_404(self, client: AsyncClient) -> None:
        response = await client.put(
            "/api/v1/authors/42", json={"name": "Ghost", "email": "ghost@example.com"}
        )
        assert response.status_code == 404


class TestDeleteAuthor:
    async def test_delete_cascades_to_musics(
        self, client: AsyncClient, create_author, create_music
    ) -> None:
        """Deleting an author removes it and its musics."""
        author = await create_author()
        music = await create_music(author["id"])
        response = await client.delete(f"/api/v1/authors/{author['id']}")
        assert response.status_code == 204
        assert response.content == b""

        assert (await client.get(f"/api/v1/authors/{author['id']}")).status_code == 404
        assert (await client.get(f"/api/v1/musics/{music['id']}")).status_code == 404
        assert (await client.get(f"/api/v1/authors/{author['id']}/musics")).status_code == 404

    async def test_delete_missing_author_is_404(self, client: AsyncClient) -> None:
        response = await client.delete("/api/v1/authors/7")
        assert response.status_code == 404


class TestListAuthors:
    async def test_default_page_sorted_by_name(self, client: AsyncClient, create_author) -> None:
        await create_author(name="Charlie", email="c@example.com")
        await create_author(name="Alice", email="a@example.com")
        await create_author(name="Bob", email="b@example.com")
        response = await client.get("/api/v1/authors")
        assert response.status_code == 200
        page = response.json()["data"]
        assert [a["name"] for a in page["content"]] == ["Alice", "Bob", "Charlie"]
        assert page["page"] == 0
        assert page["size"] == 20
        assert page["totalElements"] == 3
        assert page["totalPages"] == 1
        assert page["first"] is True
        assert page["last"] is True

    async def test_paging_and_descending_sort(self, client: AsyncClient, create_author) -> None:
        for i in range(5):
            await create_author(name=f"Author {i}", email=f"author{i}@example.com")
        response = await client.get(
            "/api/v1/authors", params={"page": 1, "size": 2, "sort": "name,desc"}
        )
        page = response.json()["data"]
        assert [a["name"] for a in page["content"]] == ["Author 2", "Author 1"]
        assert page["totalElements"] == 5
        assert page["totalPages"] == 3
        assert page["first"] is False
        assert page["last"] is False

    async def test_page_past_the_end_is_empty(self, client: AsyncClient, create_author) -> None:
        await create_author()
        page = (await client.get("/api/v1/authors", params={"page": 3})).json()["data"]
        assert page["content"] == []
        assert page["totalElements"] == 1

    @pytest.mark.parametrize(
        "params",
        [{"size": 0}, {"size": 2001}, {"page": -1}, {"sort": "password"}, {"sort": "name,up"}],
    )
    async def test_invalid_paging_is_400(self, client: AsyncClient, params: dict) -> None:
        response = await client.get("/api/v1/authors", params=params)
        assert response.status_code == 400


class TestAuthorWithMusics:
    async def test_returns_author_and_all_musics(
        self, client: AsyncClient, create_author, create_music
    ) -> None:
        author = await create_author()
        await create_music(author["id"], name="First", duration_seconds=100, genre="Jazz")
        await create_music(author["id"], name="Second", duration_seconds=200, genre=None)
        response = await client.get(f"/api/v1/authors/{author['id']}/musics")
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["id"] == author["id"]
        assert data["email"] == "alice@example.com"
        assert [m["name"] for m in data["musics"]] == ["First", "Second"]
        assert data["musics"][0]["durationSeconds"] == 100
        assert data["musics"][1]["genre"] is None

    async def test_second_read_is_served_from_cache(
        self, client: AsyncClient, create_author, create_music, aggregate_loads
    ) -> None:
        """Two reads within the TTL hit the database once and return equal bodies."""
        author = await create_author()
        await create_music(author["id"])
        first = await client.get(f"/api/v1/authors/{author['id']}/musics")
        second = await client.get(f"/api/v1/authors/{author['id']}/musics")
        assert first.status_code == second.status_code == 200
        assert first.json()["data"] == second.json()["data"]
        assert aggregate_loads == [author["id"]]

    async def test_author_update_evicts_cached_aggregate(
        self, client: AsyncClient, create_author, aggregate_loads
    ) -> None:
        author = await create_author()
        await client.get(f"/api/v1/authors/{author['id']}/musics")
        await client.put(
            f"/api/v1/authors/{author['id']}",
            json={"name": "Alice Renamed", "email": "alice@example.com"},
        )
        response = await client.get(f"/api/v1/authors/{author['id']}/musics")
        assert response.json()["data"]["name"] == "Alice Renamed"
        assert len(aggregate_loads) == 2

    async def test_music_writes_evict_cached_aggregate(
        self, client: AsyncClient, create_author, create_music
    ) -> None:
        """Creating, renaming and deleting a music is visible on the next aggregate read."""
        author = await create_author()
        url = f"/api/v1/authors/{author['id']}/musics"
        assert (await client.get(url)).json()["data"]["musics"] == []

        music = await create_music(author["id"], name="Fresh")
        assert [m["name"] for m in (await client.get(url)).json()["data"]["musics"]] == ["Fresh"]

        await client.put(
            f"/api/v1/musics/{music['id']}",
            json={"name": "Renamed", "durationSeconds": 10, "authorId": author["id"]},
        )
        assert [m["name"] for m in (await client.get(url)).json()["data"]["musics"]] == [
            "Renamed"
        ]

        await client.delete(f"/api/v1/musics/{music['id']}")
        assert (await client.get(url)).json()["data"]["musics"] == []

    async def test_missing_author_is_404_and_not_cached(
        self, client: AsyncClient, memory_cache, aggregate_loads
    ) -> None:
        response = await client.get("/api/v1/authors/123/musics")
        assert response.status_code == 404
        assert len(memory_cache) == 0
        await client.get("/api/v1/authors/123/musics")
        assert aggregate_loads == [123, 123]


async def test_catalog_walkthrough(client: AsyncClient, aggregate_loads) -> None:
    """Create author and music, read the aggregate twice, rename, read again."""
    author = await client.post(
        "/api/v1/authors", json={"name": "John Lennon", "email": "john@x.com"}
    )
    assert author.status_code == 201
    author_id = author.json()["data"]["id"]

    music = await client.post(
        "/api/v1/musics",
        json={"name": "Imagine", "durationSeconds": 180, "genre": "Rock", "authorId": author_id},
    )
    assert music.status_code == 201
    music_data = music.json()["data"]
    assert music_data["author"] == {"id": author_id, "name": "John Lennon"}

    first = await client.get(f"/api/v1/authors/{author_id}/musics")
    assert first.status_code == 200
    assert first.json()["data"]["musics"] == [
        {"id": music_data["id"], "name": "Imagine", "durationSeconds": 180, "genre": "Rock"}
    ]
    second = await client.get(f"/api/v1/authors/{author_id}/musics")
    assert second.json()["data"] == first.json()["data"]
    assert len(aggregate_loads) == 1

    renamed = await client.put(
        f"/api/v1/authors/{author_id}", json={"name": "John W. Lennon", "email": "john@x.com"}
    )
    assert renamed.status_code == 200
    third = await client.get(f"/api/v1/authors/{author_id}/musics")
    assert third.json()["data"]["name"] == "John W. Lennon"
    assert len(aggregate_loads) == 2


async def test_rejected_duplicate_creates_no_row(client: AsyncClient, create_author) -> None:
    await create_author(email="only@example.com")
    await client.post("/api/v1/authors", json={"name": "Twin", "email": "only@example.com"})
    page = (await client.get("/api/v1/authors")).json()["data"]
    assert page["totalElements"] == 1


async def _put_and_read_on_ack(client: AsyncClient, path: str, payload: dict, read_path: str):
    """Send a PUT straight through ASGI and GET read_path the moment the response body arrives."""
    body = json.dumps(payload).encode()
    reads: list[dict] = []
    request_sent = False

    async def receive() -> dict:
        nonlocal request_sent
        if request_sent:
            return {"type": "http.disconnect"}
        request_sent = True
        return {"type": "http.request", "body": body, "more_body": False}

    async def send(message: dict) -> None:
        if message["type"] == "http.response.body" and not message.get("more_body", False):
            reads.append((await client.get(read_path)).json())

    scope = {
        "type": "http",
        "asgi": {"version": "3.0"},
        "http_version": "1.1",
        "method": "PUT",
        "scheme": "http",
        "path": path,
        "raw_path": path.encode(),
        "root_path": "",
        "query_string": b"",
        "headers": [(b"host", b"test"), (b"content-type", b"application/json")],
        "client": ("127.0.0.1", 50000),
        "server": ("test", 80),
    }
    await app(scope, receive, send)
    return reads


async def test_acknowledged_update_is_visible_to_the_next_read(
    client: AsyncClient, create_author, create_music
) -> None:
    """A read issued as soon as the PUT is acknowledged sees, and caches, the new name."""
    author = await create_author(name="John Lennon", email="john@example.com")
    await create_music(author["id"], name="Imagine")
    musics_path = f"/api/v1/authors/{author['id']}/musics"
    await client.get(musics_path)

    reads = await _put_and_read_on_ack(
        client,
        f"/api/v1/authors/{author['id']}",
        {"name": "Renamed", "email": "john@example.com"},
        musics_path,
    )

    assert [r["data"]["name"] for r in reads] == ["Renamed"]
    assert (await client.get(musics_path)).json()["data"]["name"] == "Renamed"
