"""Pages API endpoint.

Resolves a location and returns the composed view model: navigation,
sidebar, adjacency and the page payload.
"""

import logging

from aiohttp import web

from docsite.app_keys import controller_key, document_key
from docsite.core.routing import RouteKind
from docsite.core.site import Location

logger = logging.getLogger(__name__)


def create_pages_routes() -> list[web.RouteDef]:
    return [
        web.get("/api/site/{path:.*}", get_site_view),
    ]


async def get_site_view(request: web.Request) -> web.Response:
    path = request.match_info["path"]
    pathname = f"/{path}"
    controller = request.app[controller_key]

    try:
        view = controller.render(Location(pathname=pathname))
    except FileNotFoundError as e:
        logger.warning(f"Missing content for {pathname}: {e}")
        return web.json_response(
            {"error": "Page content not found", "path": pathname},
            status=404,
        )

    data = view.to_dict()
    data["root_attributes"] = dict(request.app[document_key].attributes)

    if view.route.kind is RouteKind.REDIRECT:
        return web.json_response(
            data,
            status=301,
            headers={"Location": f"/api/site{view.route.redirect_to}"},
        )
    if view.route.kind is RouteKind.NOT_FOUND:
        return web.json_response(data, status=404)
    return web.json_response(data)
