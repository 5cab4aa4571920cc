"""Navigation API endpoints.

Provides the top navigation menu and the mobile sidebar, and the mobile
sidebar open/closed toggle.
"""

from aiohttp import web

from docsite.app_keys import controller_key


def create_navigation_routes() -> list[web.RouteDef]:
    return [
        web.get("/api/navigation", get_navigation),
        web.post("/api/sidebar", toggle_sidebar),
    ]


async def get_navigation(request: web.Request) -> web.Response:
    controller = request.app[controller_key]
    pathname = request.query.get("pathname", "/")
    links, mobile_sidebar = controller.navigation()
    return web.json_response(
        {
            "links": [link.to_dict(pathname) for link in links],
            "mobile_sidebar": [node.to_dict() for node in mobile_sidebar],
            "mobile_sidebar_open": controller.mobile_sidebar_open,
        },
    )


async def toggle_sidebar(request: web.Request) -> web.Response:
    controller = request.app[controller_key]
    desired: bool | None = None
    if request.can_read_body:
        try:
            body = await request.json()
        except ValueError:
            return web.json_response({"error": "Invalid JSON body"}, status=400)
        desired = body.get("open") if isinstance(body, dict) else None
        if desired is not None and not isinstance(desired, bool):
            return web.json_response({"error": "open must be a boolean"}, status=400)

    is_open = controller.toggle_sidebar(desired)
    return web.json_response({"mobile_sidebar_open": is_open})
