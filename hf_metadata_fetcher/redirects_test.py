"""Unit tests for the HEAD redirect policy."""

import httpx
import pytest

from .redirects import decide_redirect, send_with_redirect_policy

URL = "https://hub.test/org/repo/resolve/main/config.json"


def _request():
    return httpx.Request(
        "HEAD", URL, headers={"Authorization": "Bearer secret", "Accept-Encoding": "identity"}
    )


def _redirect(request, location, status_code=307):
    headers = {"Location": location} if location is not None else {}
    return httpx.Response(status_code, headers=headers, request=request)


def describe_decide_redirect():
    def it_follows_relative_redirects_on_the_same_host():
        request = _request()

        next_request = decide_redirect(request, _redirect(request, "/foo/bar"))

        assert str(next_request.url) == "https://hub.test/foo/bar"
        assert next_request.method == "HEAD"
        assert next_request.headers["Authorization"] == "Bearer secret"
        assert next_request.headers["Accept-Encoding"] == "identity"

    def it_stamps_the_resolved_location_on_the_new_request():
        request = _request()

        next_request = decide_redirect(request, _redirect(request, "/foo/bar?x=1"))

        assert next_request.headers["Location"] == "https://hub.test/foo/bar?x=1"
        assert next_request.url.query == b"x=1"

    def it_replaces_the_original_query():
        request = httpx.Request("HEAD", "https://hub.test/a?old=1")

        next_request = decide_redirect(request, _redirect(request, "/b"))

        assert str(next_request.url) == "https://hub.test/b"

    def it_keeps_the_original_port():
        request = httpx.Request("HEAD", "http://localhost:8090/a")

        next_request = decide_redirect(request, _redirect(request, "/b"))

        assert str(next_request.url) == "http://localhost:8090/b"

    def it_stops_at_absolute_redirects():
        request = _request()

        assert decide_redirect(request, _redirect(request, "https://cdn.example/blob/xyz", 302)) is None

    def it_stops_at_protocol_relative_redirects():
        request = _request()

        assert decide_redirect(request, _redirect(request, "//cdn.example/blob")) is None

    def it_stops_at_path_relative_redirects():
        request = _request()

        assert decide_redirect(request, _redirect(request, "other.json")) is None

    def it_stops_without_location():
        request = _request()

        assert decide_redirect(request, _redirect(request, None)) is None

    def it_stops_for_non_redirect_statuses():
        request = _request()
        response = httpx.Response(200, headers={"Location": "/foo"}, request=request)

        assert decide_redirect(request, response) is None


def describe_send_with_redirect_policy():
    @pytest.fixture
    def seen():
        return []

    def _client(seen, handler):
        def record(request):
            seen.append(request)
            return handler(request)

        return httpx.Client(transport=httpx.MockTransport(record), follow_redirects=False)

    def it_returns_the_final_response_after_relative_redirects(seen):
        def handler(request):
            if request.url.path == "/start":
                return httpx.Response(307, headers={"Location": "/middle"})
            if request.url.path == "/middle":
                return httpx.Response(302, headers={"Location": "/end"})
            return httpx.Response(200, headers={"X-Repo-Commit": "abc"})

        with _client(seen, handler) as client:
            response = send_with_redirect_policy(client, client.build_request("HEAD", "https://hub.test/start"))

        assert response.status_code == 200
        assert str(response.url) == "https://hub.test/end"
        assert [r.url.path for r in seen] == ["/start", "/middle", "/end"]

    def it_returns_the_redirect_response_for_absolute_locations(seen):
        def handler(request):
            return httpx.Response(302, headers={"Location": "https://cdn.example/blob"})

        with _client(seen, handler) as client:
            response = send_with_redirect_policy(client, client.build_request("HEAD", "https://hub.test/f"))

        assert response.status_code == 302
        assert response.headers["Location"] == "https://cdn.example/blob"
        assert len(seen) == 1

    def it_raises_on_redirect_loops(seen):
        def handler(request):
            return httpx.Response(307, headers={"Location": "/loop"})

        with _client(seen, handler) as client:
            with pytest.raises(httpx.TooManyRedirects):
                send_with_redirect_policy(
                    client, client.build_request("HEAD", "https://hub.test/loop"), max_redirects=3
                )

        assert len(seen) == 4
