"""aiohttp server for Docsite.

Application factory and route registration.
"""

import logging

from aiohttp import web

from docsite.api.navigation import create_navigation_routes
from docsite.api.pages import create_pages_routes
from docsite.api.theme import create_theme_routes
from docsite.app_keys import controller_key, document_key
from docsite.config import Config
from docsite.core.content import ContentTree
from docsite.core.loader import ContentLoader
from docsite.core.site import SiteController
from docsite.core.theme import DocumentRoot, JsonFileStore, ThemePreference

logger = logging.getLogger(__name__)


def create_controller(config: Config, document: DocumentRoot) -> SiteController:
    """Build the site controller from configuration.

    Args:
        config: Application configuration
        document: Root presentation context the theme is applied to

    Returns:
        Controller with the theme preference loaded and applied

    Raises:
        FileNotFoundError: If the content tree file doesn't exist
        ValueError: If the content tree is invalid
    """
    tree = ContentTree.load(config.content.tree_file)
    theme = ThemePreference.load(JsonFileStore(config.theme.storage_file), document)
    theme.apply_current()
    logger.info(f"Theme preference: {theme.theme.value}")

    return SiteController(
        tree,
        ContentLoader(config.content.content_dir),
        theme,
        site_title=config.content.site_title,
    )


def create_app(config: Config) -> web.Application:
    """Create aiohttp application.

    Args:
        config: Application configuration

    Returns:
        Configured aiohttp application
    """
    app = web.Application()

    document = DocumentRoot()
    app[document_key] = document
    app[controller_key] = create_controller(config, document)

    app.router.add_routes(create_pages_routes())
    app.router.add_routes(create_navigation_routes())
    app.router.add_routes(create_theme_routes())

    return app


def run_server(config: Config) -> None:
    """Run the server.

    Args:
        config: Application configuration
    """
    app = create_app(config)
    web.run_app(app, host=config.server.host, port=config.server.port)
