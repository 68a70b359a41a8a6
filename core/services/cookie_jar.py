# =============================================================================
# core/services/cookie_jar.py - Cookie Access
# =============================================================================
# Reads request cookies and records Set-Cookie instructions on the response.
# Path, domain and secure flag come from the "cookie.*" configuration.
#
# get() only strips a few control characters; it is not an encoding-aware
# sanitizer and values must still be escaped wherever they are output.
# =============================================================================

import logging
from collections.abc import MutableMapping

from core.config_store import ConfigStore
from core.models.response import ResponseBuffer

logger = logging.getLogger(__name__)

DEFAULT_TTL = 86400

# Removed from values on read. "\\s" is the literal two-character sequence.
STRIPPED_SEQUENCES = ("\0", "\n", "\t", "\\s")


class CookieJar:
    """Cookie get/set/destroy for one request."""

    def __init__(
        self,
        config: ConfigStore,
        request_cookies: MutableMapping[str, str],
        response: ResponseBuffer,
    ):
        self.config = config
        self.request_cookies = request_cookies
        self.response = response

    def _attributes(self) -> dict:
        return {
            "path": self.config.key("cookie.path", "/"),
            "domain": self.config.key("cookie.domain"),
            "secure": bool(self.config.key("cookie.secure", False)),
        }

    def set(self, name: str, value: str, ttl: int = DEFAULT_TTL) -> bool:
        """Set a cookie expiring in `ttl` seconds."""
        self.response.set_cookie(name, value, max_age=ttl, **self._attributes())
        return True

    def get(self, name: str) -> str | None:
        """
        Read a cookie value with control characters removed.

        Returns:
            The sanitized value, or None if the cookie was not sent
        """
        if name not in self.request_cookies:
            return None

        value = self.request_cookies[name]
        for sequence in STRIPPED_SEQUENCES:
            value = value.replace(sequence, "")
        return value.strip()

    def destroy(self, name: str) -> bool:
        """Forget a cookie for this request and expire it in the client."""
        self.request_cookies.pop(name, None)
        self.response.delete_cookie(name, **self._attributes())
        logger.debug(f"Cookie destroyed: {name}")
        return True
