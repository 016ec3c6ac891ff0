"""
Integration tests for the albums lookup endpoint.

The remote albums service is replaced by an ``httpx.MockTransport``
behind a real ``AlbumClient``.
"""

import httpx
import pytest

from music_api.src.clients.album_client import AlbumClient
from music_api.src.dependencies import get_album_client


ALBUMS_URL = "/api/v1/albums"


@pytest.fixture
def remote_albums(app):
    """Install an album client answering from a replaceable handler."""
    state = {
        "requests": [],
        "handler": lambda request: httpx.Response(200, json={"albums": []}),
    }

    def dispatch(request: httpx.Request) -> httpx.Response:
        state["requests"].append(request)
        return state["handler"](request)

    album_client = AlbumClient(
        client=httpx.Client(base_url="http://albums.test", transport=httpx.MockTransport(dispatch))
    )
    app.dependency_overrides[get_album_client] = lambda: album_client

    yield state

    album_client.close()


class TestGetAlbums:
    """Test GET /albums?id={id}."""

    def test_proxies_lookup(self, client, remote_albums):
        remote_albums["handler"] = lambda request: httpx.Response(
            200, json={"albums": [{"id": 7, "name": "Kind of Blue"}]}
        )

        response = client.get(ALBUMS_URL, params={"id": 7})

        assert response.status_code == 200
        assert response.json() == {"albums": [{"id": 7, "name": "Kind of Blue"}]}

        upstream = remote_albums["requests"][-1]
        assert upstream.method == "GET"
        assert upstream.url.path == "/albuns"
        assert upstream.url.params["id"] == "7"

    def test_keeps_remote_fields(self, client, remote_albums):
        remote_albums["handler"] = lambda request: httpx.Response(
            200, json={"albums": [], "page": 1}
        )

        assert client.get(ALBUMS_URL, params={"id": 1}).json() == {"albums": [], "page": 1}

    def test_remote_error_is_bad_gateway(self, client, remote_albums):
        remote_albums["handler"] = lambda request: httpx.Response(500)

        response = client.get(ALBUMS_URL, params={"id": 7})

        assert response.status_code == 502
        assert "500" in response.json()["detail"]

    def test_remote_unreachable_is_bad_gateway(self, client, remote_albums):
        def refuse(request):
            raise httpx.ConnectError("connection refused", request=request)

        remote_albums["handler"] = refuse

        assert client.get(ALBUMS_URL, params={"id": 7}).status_code == 502

    def test_id_required(self, client, remote_albums):
        assert client.get(ALBUMS_URL).status_code == 422
        assert remote_albums["requests"] == []

    def test_id_must_be_integer(self, client, remote_albums):
        assert client.get(ALBUMS_URL, params={"id": "abc"}).status_code == 422


def test_client_created_on_startup(app, client):
    """Startup wires a client for the configured albums service."""
    album_client = app.state.album_client

    assert isinstance(album_client, AlbumClient)
    assert album_client.base_url == "http://albums.test"
