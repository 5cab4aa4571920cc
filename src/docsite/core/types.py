"""Core type definitions."""

from typing import NewType

# URL path for routing (e.g., "/concepts/", "/guides/getting-started/")
# Distinct from source identifiers to catch type mismatches
URLPath = NewType("URLPath", str)

ROOT_URL = URLPath("/")
