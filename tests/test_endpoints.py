"""
API tests using FastAPI's TestClient.

The `client` fixture swaps in an isolated in-memory registry and a fake
resolver; the end-to-end tests at the bottom use the registry built by the
application lifespan instead.
"""

from fastapi.testclient import TestClient

from shorturl.core.rate_limit import limiter
from shorturl.core.registry_manager import get_registry, get_resolver
from shorturl.core.setting import RegistryBackend, settings
from shorturl.main import app
from shorturl.services.hostname_resolver import HostnameResolver

INVALID_URL = {"error": "invalid url"}
WRONG_FORMAT = {"error": "Wrong format"}
NOT_FOUND = {"error": "No short URL found for the given input"}


class TestShortURLScenario:

    def test_submit_reuse_redirect_and_reject(self, client):
        response = client.post("/api/shorturl", data={"url": "https://www.freecodecamp.org"})
        assert response.status_code == 200
        assert response.json() == {"original_url": "https://www.freecodecamp.org", "short_url": 1}

        response = client.post("/api/shorturl", data={"url": "https://www.freecodecamp.org"})
        assert response.json() == {"original_url": "https://www.freecodecamp.org", "short_url": 1}

        response = client.post("/api/shorturl", data={"url": "https://www.example.com"})
        assert response.json() == {"original_url": "https://www.example.com", "short_url": 2}

        response = client.get("/api/shorturl/1", follow_redirects=False)
        assert response.status_code == 302
        assert response.headers["location"] == "https://www.freecodecamp.org"

        response = client.get("/api/shorturl/9999")
        assert response.status_code == 200
        assert response.json() == NOT_FOUND

        response = client.post("/api/shorturl", data={"url": "ftp://example.com"})
        assert response.status_code == 200
        assert response.json() == INVALID_URL

        response = client.post("/api/shorturl", data={"url": "not a url"})
        assert response.json() == INVALID_URL


class TestCreateShortURL:

    def test_json_body(self, client):
        response = client.post("/api/shorturl", json={"url": "https://example.com"})
        assert response.json() == {"original_url": "https://example.com", "short_url": 1}

    def test_multipart_body(self, client):
        response = client.post("/api/shorturl", files={"url": (None, "https://example.com")})
        assert response.json() == {"original_url": "https://example.com", "short_url": 1}

    def test_missing_url(self, client):
        assert client.post("/api/shorturl").json() == INVALID_URL
        assert client.post("/api/shorturl", data={"other": "x"}).json() == INVALID_URL
        assert client.post("/api/shorturl", json={}).json() == INVALID_URL

    def test_non_string_url(self, client):
        assert client.post("/api/shorturl", json={"url": 42}).json() == INVALID_URL
        assert client.post("/api/shorturl", json=["https://example.com"]).json() == INVALID_URL

    def test_malformed_json(self, client):
        response = client.post(
            "/api/shorturl",
            content=b"{not json",
            headers={"content-type": "application/json"}
        )
        assert response.status_code == 200
        assert response.json() == INVALID_URL

    def test_unresolvable_host(self, client, resolver):
        response = client.post("/api/shorturl", data={"url": "https://no-such-host.invalid"})
        assert response.json() == INVALID_URL
        assert resolver.calls == ["no-such-host.invalid"]

    def test_unencodable_hostname_is_an_invalid_url(self, client):
        app.dependency_overrides[get_resolver] = lambda: HostnameResolver(timeout=1)
        for url in ["https://a..b", "https://" + "x" * 64 + ".com"]:
            response = client.post("/api/shorturl", data={"url": url})
            assert response.json() == INVALID_URL

    def test_trailing_slash_is_a_different_url(self, client):
        bare = client.post("/api/shorturl", data={"url": "http://example.com"}).json()
        slash = client.post("/api/shorturl", data={"url": "http://example.com/"}).json()
        assert bare["short_url"] != slash["short_url"]

    def test_rejections_do_not_consume_ids(self, client):
        client.post("/api/shorturl", data={"url": "ftp://example.com"})
        client.post("/api/shorturl", data={"url": "https://no-such-host.invalid"})
        response = client.post("/api/shorturl", data={"url": "https://example.com"})
        assert response.json()["short_url"] == 1


class TestRedirect:

    def test_wrong_format(self, client):
        for segment in ["abc", "1.5", "1abc"]:
            response = client.get(f"/api/shorturl/{segment}")
            assert response.status_code == 200
            assert response.json() == WRONG_FORMAT

    def test_zero_and_negative_ids_are_not_found(self, client):
        assert client.get("/api/shorturl/0").json() == NOT_FOUND
        assert client.get("/api/shorturl/-1").json() == NOT_FOUND

    def test_oversized_ids_are_not_found(self, client):
        for segment in ["99999999999999999999", "9223372036854775808", "1" * 5000]:
            response = client.get(f"/api/shorturl/{segment}")
            assert response.status_code == 200
            assert response.json() == NOT_FOUND

    def test_redirect_keeps_url_verbatim(self, client):
        url = "https://www.example.com/search?q=short+url&page=2"
        short_url = client.post("/api/shorturl", data={"url": url}).json()["short_url"]

        response = client.get(f"/api/shorturl/{short_url}", follow_redirects=False)
        assert response.status_code == 302
        assert response.headers["location"] == url


class TestMiscEndpoints:

    def test_hello(self, client):
        assert client.get("/api/hello").json() == {"greeting": "hello API"}

    def test_health(self, client):
        assert client.get("/health").json() == {"status": "healthy"}

    def test_root(self, client):
        body = client.get("/").json()
        assert body["message"] == "Short URL Service"
        assert body["docs"] == "/docs"

    def test_process_time_header(self, client):
        assert "x-process-time" in client.get("/health").headers

    def test_cors(self, client):
        response = client.get("/api/hello", headers={"Origin": "https://www.freecodecamp.org"})
        assert response.headers["access-control-allow-origin"] == "*"


class TestApplicationLifespan:

    def _submit_and_follow(self, test_client):
        created = test_client.post("/api/shorturl", data={"url": "https://www.example.com"}).json()
        response = test_client.get(f"/api/shorturl/{created['short_url']}", follow_redirects=False)
        return created, response

    def test_in_memory_registry(self, resolver):
        app.dependency_overrides[get_resolver] = lambda: resolver
        limiter.enabled = False
        try:
            with TestClient(app) as test_client:
                created, response = self._submit_and_follow(test_client)
        finally:
            limiter.enabled = settings.RATE_LIMIT_ENABLED
            app.dependency_overrides.clear()

        assert created == {"original_url": "https://www.example.com", "short_url": 1}
        assert response.headers["location"] == "https://www.example.com"

    def test_database_registry(self, resolver, monkeypatch, tmp_path):
        monkeypatch.setattr(settings, "REGISTRY_BACKEND", RegistryBackend.database)
        monkeypatch.setattr(settings, "DATABASE_URL", f"sqlite+aiosqlite:///{tmp_path / 'shorturl.db'}")
        app.dependency_overrides[get_resolver] = lambda: resolver
        limiter.enabled = False
        try:
            with TestClient(app) as test_client:
                created, response = self._submit_and_follow(test_client)
                again = test_client.post("/api/shorturl", data={"url": "https://www.example.com"}).json()
                missing = test_client.get("/api/shorturl/9999").json()
                overflowing = test_client.get("/api/shorturl/99999999999999999999").json()
                just_over = test_client.get("/api/shorturl/9223372036854775808").json()
        finally:
            limiter.enabled = settings.RATE_LIMIT_ENABLED
            app.dependency_overrides.clear()

        assert created == {"original_url": "https://www.example.com", "short_url": 1}
        assert again == created
        assert response.headers["location"] == "https://www.example.com"
        assert missing == NOT_FOUND
        assert overflowing == NOT_FOUND
        assert just_over == NOT_FOUND

    def test_registry_unavailable_before_startup(self, resolver):
        app.dependency_overrides[get_resolver] = lambda: resolver
        try:
            # No context manager: the lifespan never runs
            response = TestClient(app).post("/api/shorturl", data={"url": "https://example.com"})
        finally:
            app.dependency_overrides.clear()

        assert response.status_code == 503


class TestRateLimiting:

    def test_limit_exceeded(self, memory_registry, resolver):
        app.dependency_overrides[get_registry] = lambda: memory_registry
        app.dependency_overrides[get_resolver] = lambda: resolver
        limiter.reset()
        limiter.enabled = True
        try:
            with TestClient(app) as test_client:
                statuses = [
                    test_client.get("/api/shorturl/1").status_code
                    for _ in range(int(settings.RATE_LIMIT_REDIRECT.split("/")[0]) + 1)
                ]
        finally:
            limiter.enabled = settings.RATE_LIMIT_ENABLED
            limiter.reset()
            app.dependency_overrides.clear()

        assert statuses[-1] == 429
        assert set(statuses[:-1]) == {200}
