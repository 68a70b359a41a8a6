# =============================================================================
# core/models/environment.py - Runtime Environment
# =============================================================================
# The environment is fixed at startup and drives template caching, strict
# variable checks, debug tooling and the test fixture paths.
# =============================================================================

from enum import Enum


class Environment(str, Enum):
    """
    Runtime environment of the application.

    - development: strict templates, debug extension, developer error pages
    - production: cached templates, lenient variables, generic error pages
    - test: like development, plus fixture templates and catalogs; no
            exception log is written
    """
    DEVELOPMENT = "development"
    PRODUCTION = "production"
    TEST = "test"

    @classmethod
    def from_value(cls, value: "str | Environment | None") -> "Environment":
        """
        Parse an environment name.

        Accepts the full names and the short aliases "dev" and "prod".
        Anything else (including None) resolves to production.

        Example:
            Environment.from_value("dev")     # Environment.DEVELOPMENT
            Environment.from_value("staging") # Environment.PRODUCTION
        """
        if isinstance(value, cls):
            return value
        if not value:
            return cls.PRODUCTION

        normalized = str(value).strip().lower()
        normalized = _ALIASES.get(normalized, normalized)

        try:
            return cls(normalized)
        except ValueError:
            return cls.PRODUCTION


_ALIASES = {
    "dev": Environment.DEVELOPMENT.value,
    "prod": Environment.PRODUCTION.value,
}
