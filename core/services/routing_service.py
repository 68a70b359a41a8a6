# =============================================================================
# core/services/routing_service.py - Named Routes and URL Generation
# =============================================================================
# Keeps a table of route name -> path pattern and builds URLs from it.
# Patterns use the Starlette syntax ("/members/{member_id}" or
# "/members/{member_id:int}"); the FastAPI layer fills the table from the
# app's routes at startup.
# =============================================================================

import logging
import re
from collections.abc import Iterable, Mapping
from typing import Any
from urllib.parse import quote, urlencode

from app.exceptions import RouteNotFoundError
from core.config_store import ConfigStore
from lib.utils import starts_with

logger = logging.getLogger(__name__)

# {name} or {name:converter}
PARAMETER_PATTERN = re.compile(r"{([a-zA-Z_][a-zA-Z0-9_]*)(?::([a-zA-Z_]+))?}")


class RoutingProvider:
    """
    Route table with URL generation.

    Example:
        routing.add("member", "/members/{member_id}")
        routing.build_url("member", {"member_id": 7, "tab": "posts"})
        # "http://localhost:8000/members/7?tab=posts"
    """

    def __init__(self, config: ConfigStore):
        self.config = config
        self._routes: dict[str, str] = {}

    def add(self, name: str, path: str) -> None:
        if not starts_with("/", path):
            path = f"/{path}"
        self._routes[name] = path

    def register(self, routes: Iterable[tuple[str, str]]) -> "RoutingProvider":
        """Add every (name, path) pair."""
        for name, path in routes:
            self.add(name, path)
        logger.info(f"Registered {len(self._routes)} routes")
        return self

    def has(self, name: str) -> bool:
        return name in self._routes

    def names(self) -> list[str]:
        return sorted(self._routes)

    def generate(self, name: str, arguments: Mapping[str, Any] | None = None) -> str:
        """
        Build the root-relative path for a route.

        Path parameters are taken from `arguments`; the remaining arguments
        become the query string.

        Raises:
            RouteNotFoundError: If the route is unknown or a parameter is missing
        """
        if name not in self._routes:
            raise RouteNotFoundError(name)

        remaining = dict(arguments or {})
        pattern = self._routes[name]

        def substitute(match: re.Match) -> str:
            parameter = match.group(1)
            if parameter not in remaining:
                raise RouteNotFoundError(name, reason=f"missing parameter '{parameter}'")
            safe = "/" if match.group(2) == "path" else ""
            return quote(str(remaining.pop(parameter)), safe=safe)

        path = PARAMETER_PATTERN.sub(substitute, pattern)
        if remaining:
            path = f"{path}?{urlencode(remaining, doseq=True)}"
        return path

    def build_url(self, route_name: str | None = None, arguments: Mapping[str, Any] | None = None) -> str:
        """
        Build the URL of a named route.

        Without a route name the base URL is returned. With
        "router.use_httpd_rewrite" the URL is absolute, otherwise it is the
        root-relative path.
        """
        base_url = self.config.key("base.full_url", "")
        if not route_name:
            return base_url

        path = self.generate(route_name, arguments)
        if self.config.key("router.use_httpd_rewrite", True):
            return f"{base_url}{path}"
        return path
