"""HTTP response with chainable .with_*() transformation API.

Each transformation returns a new Response. Immutable by convention,
built incrementally by design.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, replace


@dataclass(frozen=True, slots=True)
class Response:
    """An HTTP response built through immutable transformations.

    ``type`` is the logical media type (``"json"``, ``"html"``) the
    controller declared; the media renderer turns it into ``content_type``
    and a body. ``encoding`` is appended as the ``charset`` parameter.
    """

    body: str | bytes = ""
    status: int = 200
    content_type: str | None = None
    headers: tuple[tuple[str, str], ...] = ()
    type: str = "html"
    encoding: str | None = "UTF-8"

    # -- Chainable transformations --

    def with_status(self, status: int) -> Response:
        """Return a new Response with a different status code."""
        return replace(self, status=status)

    def with_header(self, name: str, value: str) -> Response:
        """Return a new Response with an additional header."""
        return replace(self, headers=(*self.headers, (name, value)))

    def with_headers(self, headers: Mapping[str, str]) -> Response:
        """Return a new Response with additional headers."""
        new = tuple(headers.items())
        return replace(self, headers=(*self.headers, *new))

    def with_content_type(self, content_type: str) -> Response:
        """Return a new Response with a different content type."""
        return replace(self, content_type=content_type)

    def with_type(self, type: str) -> Response:
        """Return a new Response declaring a different logical media type."""
        return replace(self, type=type)

    def with_body(self, body: str | bytes) -> Response:
        """Return a new Response with a different body."""
        return replace(self, body=body)

    # -- Accessors --

    def header(self, name: str) -> str | None:
        """Return the last value set for header *name* (case-insensitive)."""
        if name.lower() == "content-type" and self.content_type is not None:
            return self.content_type
        found = None
        for key, value in self.headers:
            if key.lower() == name.lower():
                found = value
        return found

    @property
    def body_bytes(self) -> bytes:
        """Body as bytes."""
        if isinstance(self.body, str):
            return self.body.encode(self.encoding or "utf-8")
        return self.body

    @property
    def text(self) -> str:
        """Body as string."""
        if isinstance(self.body, bytes):
            return self.body.decode(self.encoding or "utf-8")
        return self.body
