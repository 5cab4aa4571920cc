"""Theme API endpoints."""

from aiohttp import web

from docsite.app_keys import controller_key, document_key
from docsite.core.theme import ThemeChoice


def create_theme_routes() -> list[web.RouteDef]:
    return [
        web.get("/api/theme", get_theme),
        web.put("/api/theme", switch_theme),
    ]


async def get_theme(request: web.Request) -> web.Response:
    return _theme_response(request)


async def switch_theme(request: web.Request) -> web.Response:
    try:
        body = await request.json()
    except ValueError:
        return web.json_response({"error": "Invalid JSON body"}, status=400)

    value = body.get("theme") if isinstance(body, dict) else None
    try:
        theme = ThemeChoice(value)
    except ValueError:
        return web.json_response(
            {
                "error": "Unknown theme",
                "theme": value,
                "choices": [choice.value for choice in ThemeChoice],
            },
            status=400,
        )

    request.app[controller_key].switch_theme(theme)
    return _theme_response(request)


def _theme_response(request: web.Request) -> web.Response:
    return web.json_response(
        {
            "theme": request.app[controller_key].theme.value,
            "root_attributes": dict(request.app[document_key].attributes),
        },
    )
