"""Application keys for type-safe app configuration access."""

from aiohttp import web

from docsite.core.site import SiteController
from docsite.core.theme import DocumentRoot

controller_key = web.AppKey("controller", SiteController)
document_key = web.AppKey("document", DocumentRoot)
