"""Tests for the admin HTTP client."""

import json

import httpx
import pytest

from npcdb.admin.client import DEFAULT_ERROR_MESSAGE, AdminApiClient, AdminApiError

pytestmark = pytest.mark.unit

BASE_URL = "http://api.test/api"


def _client(handler):
    return AdminApiClient(BASE_URL, transport=httpx.MockTransport(handler))


class TestRequests:
    """Test how requests are built."""

    def test_list_movies(self):
        """Listing asks for the largest page and unwraps the items."""
        seen = {}

        def handler(request):
            seen["url"] = request.url
            return httpx.Response(
                200,
                json={
                    "success": True,
                    "data": {
                        "items": [{"id": "m1"}],
                        "pagination": {"limit": 100, "offset": 0, "count": 1},
                    },
                },
            )

        with _client(handler) as client:
            items = client.list_movies(search="无间")

        assert items == [{"id": "m1"}]
        assert seen["url"].path == "/api/movies"
        assert seen["url"].params["limit"] == "100"
        assert seen["url"].params["search"] == "无间"

    def test_create_character_posts_body(self):
        """Bodies are sent as JSON to the nested collection."""
        seen = {}

        def handler(request):
            seen["method"] = request.method
            seen["path"] = request.url.path
            seen["body"] = json.loads(request.content)
            return httpx.Response(201, json={"success": True, "data": {"id": "c1"}})

        with _client(handler) as client:
            created = client.create_character("m1", {"name": "陈永仁"})

        assert created == {"id": "c1"}
        assert seen == {
            "method": "POST",
            "path": "/api/movies/m1/characters",
            "body": {"name": "陈永仁"},
        }

    def test_subtitles_page(self):
        """Subtitles are fetched in one large page."""

        def handler(request):
            assert request.url.params["limit"] == "500"
            return httpx.Response(
                200, json={"success": True, "data": {"items": [], "pagination": {}}}
            )

        with _client(handler) as client:
            assert client.list_subtitle_segments("m1") == []

    def test_health(self):
        """Health reflects the response status."""
        with _client(lambda request: httpx.Response(200, json={})) as client:
            assert client.health() is True
        with _client(lambda request: httpx.Response(503)) as client:
            assert client.health() is False


class TestErrors:
    """Test error surfacing."""

    def test_server_message(self):
        """The server's error text is surfaced with the status."""

        def handler(request):
            return httpx.Response(
                404, json={"success": False, "error": "Movie not found"}
            )

        with _client(handler) as client, pytest.raises(AdminApiError) as exc_info:
            client.get_movie("missing")

        assert exc_info.value.message == "Movie not found"
        assert exc_info.value.status_code == 404

    def test_non_json_error(self):
        """Without a JSON body the caller's fallback is used."""

        def handler(request):
            return httpx.Response(502, text="Bad Gateway")

        with _client(handler) as client, pytest.raises(AdminApiError) as exc_info:
            client.delete_scene("s1")

        assert exc_info.value.message == "Failed to delete scene."

    def test_envelope_without_data(self):
        """A 2xx body that is not a success envelope is an error."""

        def handler(request):
            return httpx.Response(200, json={"ok": True})

        with _client(handler) as client, pytest.raises(AdminApiError):
            client.generate_narrative({"movieTitle": "m", "characterName": "c"})

    def test_transport_failure(self):
        """Connection failures become the fallback message."""

        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        client = AdminApiClient(BASE_URL, transport=httpx.MockTransport(handler))
        with pytest.raises(AdminApiError) as exc_info:
            client._request_json("GET", "/movies")

        assert exc_info.value.message == DEFAULT_ERROR_MESSAGE
        assert exc_info.value.status_code is None
        assert client.health() is False
