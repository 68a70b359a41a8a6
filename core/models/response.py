# =============================================================================
# core/models/response.py - Response Buffer
# =============================================================================
# The response being built for one request, independent of the web framework:
# - status code and headers
# - body chunks written by View.display()
# - cookie instructions recorded by CookieJar
# - a gzip capture used by the compressed display path
#
# app/dependencies.py converts a buffer into a Starlette Response.
# =============================================================================

import importlib.util
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator


@dataclass(frozen=True)
class CookieInstruction:
    """One Set-Cookie to emit. max_age <= 0 expires the cookie."""
    name: str
    value: str
    max_age: int
    path: str = "/"
    domain: str | None = None
    secure: bool = False

    @property
    def expires(self) -> bool:
        return self.max_age <= 0


class ResponseBuffer:
    """
    Output of a single request.

    Example:
        response = ResponseBuffer(accept_encoding="gzip, deflate")
        response.write("<p>Hello</p>")
        response.body  # b"<p>Hello</p>"
    """

    def __init__(self, accept_encoding: str = "", media_type: str = "text/html"):
        self.status_code = 200
        self.media_type = media_type
        self.headers: dict[str, str] = {}
        self.cookies: list[CookieInstruction] = []
        self.accept_encoding = accept_encoding
        self._chunks: list[bytes] = []
        self._uncompressed = b""
        self._capturing = False

    # -------------------------------------------------------------------------
    # Body
    # -------------------------------------------------------------------------

    def write(self, text: str) -> None:
        data = text.encode("utf-8")
        if self.is_gzip_encoded and not self._capturing:
            self._compress(data)
            return
        self._chunks.append(data)

    @property
    def body(self) -> bytes:
        return b"".join(self._chunks)

    @property
    def has_output(self) -> bool:
        return any(self._chunks)

    # -------------------------------------------------------------------------
    # Compression
    # -------------------------------------------------------------------------

    @property
    def accepts_gzip(self) -> bool:
        for token in self.accept_encoding.split(","):
            coding = token.split(";", 1)[0].strip().lower()
            if coding in ("gzip", "*"):
                return True
        return False

    @property
    def is_gzip_encoded(self) -> bool:
        return self.headers.get("Content-Encoding") == "gzip"

    def compression_available(self) -> bool:
        """
        Whether output can go through gzip_capture().

        True once the body is gzip-encoded; otherwise needs zlib, a client
        that accepts gzip, and a body with nothing written to it yet.
        """
        if self.is_gzip_encoded:
            return True
        return (
            importlib.util.find_spec("zlib") is not None
            and self.accepts_gzip
            and not self.has_output
        )

    @contextmanager
    def gzip_capture(self) -> Iterator["ResponseBuffer"]:
        """
        Capture writes made inside the block and emit them gzip-compressed.

        The body stays a single gzip member: later captures recompress
        everything written so far. If the block raises, the captured output
        is discarded.
        """
        outer, self._chunks = self._chunks, []
        self._capturing = True
        try:
            yield self
        except BaseException:
            self._chunks = outer
            raise
        finally:
            self._capturing = False

        captured = b"".join(self._chunks)
        self._chunks = outer
        if captured:
            self._compress(captured)

    def _compress(self, data: bytes) -> None:
        import gzip

        if not self.is_gzip_encoded:
            self._uncompressed = b"".join(self._chunks)
        self._uncompressed += data
        self._chunks = [gzip.compress(self._uncompressed)]
        self.headers["Content-Encoding"] = "gzip"
        self.headers["Vary"] = "Accept-Encoding"

    # -------------------------------------------------------------------------
    # Cookies
    # -------------------------------------------------------------------------

    def set_cookie(
        self,
        name: str,
        value: str,
        max_age: int,
        path: str = "/",
        domain: str | None = None,
        secure: bool = False,
    ) -> None:
        self.cookies.append(CookieInstruction(name, value, max_age, path, domain, secure))

    def delete_cookie(
        self,
        name: str,
        path: str = "/",
        domain: str | None = None,
        secure: bool = False,
    ) -> None:
        self.cookies.append(CookieInstruction(name, "", 0, path, domain, secure))
