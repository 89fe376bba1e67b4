import asyncio
import logging
from urllib.parse import parse_qs, urlsplit

from fastapi.testclient import TestClient

from main import create_app
from shortener_app.services.page_renderer import MESSAGE_PLACEHOLDER, PageRenderer
from shortener_app.storage.exceptions import StorageInternalError
from shortener_app.storage.strategies import InMemoryRedirectStorage, RedirectStorageStrategy


class BrokenStorage(RedirectStorageStrategy):
    """Storage whose mechanism is always unusable"""

    async def lookup(self, identifier: str) -> str:
        raise StorageInternalError("lock poisoned")

    async def store(self, identifier: str, target_url: str, owner: str) -> None:
        raise StorageInternalError("lock poisoned")

    def __len__(self) -> int:
        raise StorageInternalError("lock poisoned")


def create(client: TestClient, short_name="abc", url="https://example.com", owner="alice"):
    return client.post(
        "/create",
        data={"short_name": short_name, "url": url, "owner": owner},
    )


class TestRedirectShortener:
    """Test the HTTP surface end to end"""

    def test_index_page(self, client: TestClient):
        """Home page renders the form with an empty message region"""
        response = client.get("/")
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/html")

        assert '<form method="post" action="/create">' in response.text
        assert MESSAGE_PLACEHOLDER not in response.text
        assert "class='message" not in response.text

    def test_create_and_follow(self, client: TestClient):
        """Create a redirect, then follow it permanently"""
        response = create(client)
        assert response.status_code == 200
        assert "Redirect created successfully" in response.text
        assert "class='message success'" in response.text

        response = client.get("/go/abc", follow_redirects=False)
        assert response.status_code == 301
        assert response.headers["location"] == "https://example.com"

    def test_duplicate_create(self, client: TestClient):
        """Reusing an identifier keeps the original target"""
        create(client)

        response = create(client, url="https://other.example.org", owner="bob")
        assert response.status_code == 200
        assert "ID already exists" in response.text
        assert "class='message error'" in response.text

        response = client.get("/go/abc", follow_redirects=False)
        assert response.status_code == 301
        assert response.headers["location"] == "https://example.com"

    def test_redirect_missing(self, client: TestClient):
        """Unknown identifiers bounce back home with a temporary redirect"""
        response = client.get("/go/doesnotexist", follow_redirects=False)
        assert response.status_code == 307

        location = urlsplit(response.headers["location"])
        assert location.path == "/"
        params = parse_qs(location.query)
        assert params["message"] == ["Redirect not found"]
        assert params["success"] == ["false"]

    def test_message_query_not_rendered(self, client: TestClient):
        """The home page ignores the message carried by the redirect"""
        response = client.get("/go/doesnotexist")

        assert response.status_code == 200
        assert "Redirect not found" not in response.text
        assert "class='message" not in response.text

    def test_empty_fields_accepted(self, client: TestClient):
        """Presence is the only check on form fields"""
        response = create(client, short_name="empty", url="", owner="")
        assert "Redirect created successfully" in response.text

    def test_url_not_validated(self, client: TestClient, storage):
        """Targets are stored exactly as submitted"""
        create(client, short_name="odd", url="not-a-valid-url")

        assert asyncio.run(storage.lookup("odd")) == "not-a-valid-url"

    def test_missing_field(self, client: TestClient, storage):
        """A form without all three fields is rejected and stores nothing"""
        response = client.post("/create", data={"short_name": "abc", "url": "https://example.com"})
        assert response.status_code == 422
        assert len(storage) == 0

    def test_health(self, client: TestClient):
        create(client)

        response = client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["redirects"] == 1


class TestStorageFailures:
    """Internal storage errors degrade to pages and redirects"""

    def test_create_internal_error(self):
        with TestClient(create_app(storage=BrokenStorage())) as client:
            response = create(client)

        assert response.status_code == 200
        assert "An error occurred while creating the redirect" in response.text
        assert "class='message error'" in response.text

    def test_redirect_internal_error(self):
        with TestClient(create_app(storage=BrokenStorage())) as client:
            response = client.get("/go/abc", follow_redirects=False)

        assert response.status_code == 307
        location = urlsplit(response.headers["location"])
        assert location.path == "/"
        params = parse_qs(location.query)
        assert params["message"] == ["An error occurred while looking up the redirect"]
        assert params["success"] == ["false"]

    def test_failures_are_not_logged(self, caplog):
        """Storage errors become messages only, nothing above DEBUG is logged"""
        with TestClient(create_app(storage=BrokenStorage())) as client:
            caplog.set_level(logging.DEBUG, logger="shortener_app")
            create(client)
            client.get("/go/abc", follow_redirects=False)

        assert [r for r in caplog.records if r.levelno > logging.DEBUG] == []

    def test_health_internal_error(self):
        with TestClient(create_app(storage=BrokenStorage())) as client:
            response = client.get("/health")

        assert response.status_code == 503
        assert response.json()["status"] == "unhealthy"

    def test_health_lock_timeout(self):
        """A held lock makes /health report unhealthy instead of hanging"""
        storage = InMemoryRedirectStorage(lock_timeout=0.05)
        storage._lock.acquire_write()
        try:
            with TestClient(create_app(storage=storage)) as client:
                response = client.get("/health")
        finally:
            storage._lock.release_write()

        assert response.status_code == 503


class TestPageRenderer:
    """Test template substitution directly"""

    def test_render_without_message(self):
        renderer = PageRenderer(template=f"<body>{MESSAGE_PLACEHOLDER}</body>")
        assert renderer.render() == "<body></body>"

    def test_render_success(self):
        renderer = PageRenderer(template=f"<body>{MESSAGE_PLACEHOLDER}</body>")
        html = renderer.render("Done", is_success=True)
        assert html == "<body><div class='message success' style='display:block;'>Done</div></body>"

    def test_render_error(self):
        renderer = PageRenderer(template=f"<body>{MESSAGE_PLACEHOLDER}</body>")
        assert "class='message error'" in renderer.render("Nope")

    def test_default_template_has_placeholder(self):
        assert MESSAGE_PLACEHOLDER in PageRenderer().template
