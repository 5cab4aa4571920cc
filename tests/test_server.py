"""Tests for the aiohttp application and API endpoints."""

import json
from pathlib import Path
from typing import Any

import pytest
from aiohttp import web
from docsite.app_keys import controller_key, document_key
from docsite.config import Config
from docsite.core.theme import THEME_ATTRIBUTE, ThemeChoice
from docsite.server import create_app


@pytest.fixture
def app(test_config: Config) -> web.Application:
    return create_app(test_config)


class TestCreateApp:
    """Tests for create_app()."""

    def test__valid_config__returns_configured_app(self, app: web.Application) -> None:
        assert controller_key in app
        assert document_key in app
        assert app[controller_key].theme is ThemeChoice.DEVICE

    def test__applies_stored_theme_on_startup(self, test_config: Config) -> None:
        storage = test_config.theme.storage_file
        storage.parent.mkdir(parents=True, exist_ok=True)
        storage.write_text(json.dumps({"theme": "dark"}))

        app = create_app(test_config)

        assert app[controller_key].theme is ThemeChoice.DARK
        assert app[document_key].attributes == {THEME_ATTRIBUTE: "dark"}

    def test__missing_tree__raises(self, test_config: Config, tmp_path: Path) -> None:
        config = test_config.with_overrides(tree_file=tmp_path / "missing.json")

        with pytest.raises(FileNotFoundError):
            create_app(config)


class TestGetSiteView:
    """Tests for GET /api/site/{path}."""

    @pytest.mark.asyncio
    async def test__page__returns_view(self, aiohttp_client: Any, app: web.Application) -> None:
        client = await aiohttp_client(app)
        response = await client.get("/api/site/concepts/modules/")

        assert response.status == 200
        data = await response.json()
        assert data["route"] == "page"
        assert data["title"] == "Modules | webpack"
        assert data["content"] == "<h1>Modules</h1>"
        assert data["previous"]["url"] == "/concepts/"
        assert data["next"]["url"] == "/concepts/entry-points/"
        assert data["root_attributes"] == {THEME_ATTRIBUTE: "device"}

    @pytest.mark.asyncio
    async def test__missing_slash__redirects(
        self,
        aiohttp_client: Any,
        app: web.Application,
    ) -> None:
        client = await aiohttp_client(app)
        response = await client.get("/api/site/concepts/modules", allow_redirects=False)

        assert response.status == 301
        assert response.headers["Location"] == "/api/site/concepts/modules/"
        data = await response.json()
        assert data["redirect"] == "/concepts/modules/"

    @pytest.mark.asyncio
    async def test__root__is_landing(self, aiohttp_client: Any, app: web.Application) -> None:
        client = await aiohttp_client(app)
        response = await client.get("/api/site/")

        assert response.status == 200
        data = await response.json()
        assert data["route"] == "landing"
        assert data["view"] == "landing"

    @pytest.mark.asyncio
    async def test__fixed_view(self, aiohttp_client: Any, app: web.Application) -> None:
        client = await aiohttp_client(app)
        response = await client.get("/api/site/vote/")

        assert response.status == 200
        data = await response.json()
        assert data["route"] == "static"
        assert data["view"] == "vote"

    @pytest.mark.asyncio
    async def test__unknown__returns_404(self, aiohttp_client: Any, app: web.Application) -> None:
        client = await aiohttp_client(app)
        response = await client.get("/api/site/missing/")

        assert response.status == 404
        data = await response.json()
        assert data["route"] == "not_found"
        assert data["navigation"][0]["content"] == "Documentation"

    @pytest.mark.asyncio
    async def test__missing_payload__returns_404(
        self,
        aiohttp_client: Any,
        app: web.Application,
    ) -> None:
        client = await aiohttp_client(app)
        response = await client.get("/api/site/guides/getting-started/")

        assert response.status == 404
        data = await response.json()
        assert data == {
            "error": "Page content not found",
            "path": "/guides/getting-started/",
        }


class TestNavigationApi:
    """Tests for navigation and sidebar endpoints."""

    @pytest.mark.asyncio
    async def test__get_navigation(self, aiohttp_client: Any, app: web.Application) -> None:
        client = await aiohttp_client(app)
        response = await client.get("/api/navigation", params={"pathname": "/guides/"})

        assert response.status == 200
        data = await response.json()
        assert [link["content"] for link in data["links"]] == [
            "Documentation",
            "Contribute",
            "Vote",
            "Blog",
        ]
        assert data["links"][0]["active"] is True
        assert len(data["mobile_sidebar"]) == 5
        assert data["mobile_sidebar_open"] is False

    @pytest.mark.asyncio
    async def test__toggle_sidebar(self, aiohttp_client: Any, app: web.Application) -> None:
        client = await aiohttp_client(app)

        first = await client.post("/api/sidebar")
        second = await client.post("/api/sidebar", json={"open": True})

        assert (await first.json())["mobile_sidebar_open"] is True
        assert (await second.json())["mobile_sidebar_open"] is True
        assert app[controller_key].mobile_sidebar_open is True

    @pytest.mark.asyncio
    async def test__toggle_sidebar__rejects_non_boolean(
        self,
        aiohttp_client: Any,
        app: web.Application,
    ) -> None:
        client = await aiohttp_client(app)
        response = await client.post("/api/sidebar", json={"open": "yes"})

        assert response.status == 400


class TestThemeApi:
    """Tests for theme endpoints."""

    @pytest.mark.asyncio
    async def test__get_theme(self, aiohttp_client: Any, app: web.Application) -> None:
        client = await aiohttp_client(app)
        response = await client.get("/api/theme")

        assert response.status == 200
        assert await response.json() == {
            "theme": "device",
            "root_attributes": {THEME_ATTRIBUTE: "device"},
        }

    @pytest.mark.asyncio
    async def test__switch_theme__persists(
        self,
        aiohttp_client: Any,
        app: web.Application,
        test_config: Config,
    ) -> None:
        client = await aiohttp_client(app)
        response = await client.put("/api/theme", json={"theme": "dark"})

        assert response.status == 200
        data = await response.json()
        assert data["theme"] == "dark"
        assert data["root_attributes"] == {THEME_ATTRIBUTE: "dark"}
        stored = json.loads(test_config.theme.storage_file.read_text())
        assert stored == {"theme": "dark"}

    @pytest.mark.asyncio
    async def test__switch_theme__unknown_value(
        self,
        aiohttp_client: Any,
        app: web.Application,
    ) -> None:
        client = await aiohttp_client(app)
        response = await client.put("/api/theme", json={"theme": "sepia"})

        assert response.status == 400
        data = await response.json()
        assert data["choices"] == ["light", "dark", "device"]

    @pytest.mark.asyncio
    async def test__switch_theme__invalid_json(
        self,
        aiohttp_client: Any,
        app: web.Application,
    ) -> None:
        client = await aiohttp_client(app)
        response = await client.put("/api/theme", data="not json")

        assert response.status == 400
