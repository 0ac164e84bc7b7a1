"""Immutable HTTP request.

Frozen metadata plus the route parameters the router matched. The media
layer reads the ``Accept`` header, the ``User-Agent`` header, and the
route-declared ``type`` parameter from it.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from tern.http.headers import Headers

_MOBILE_AGENTS = re.compile(
    "|".join(
        (
            "iPhone",
            "MIDP",
            "AvantGo",
            "BlackBerry",
            "J2ME",
            "Opera Mini",
            "DoCoMo",
            "NetFront",
            "Nokia",
            "PalmOS",
            "PalmSource",
            "portalmmm",
            "Plucker",
            "ReqwirelessWeb",
            "iPod",
            "SonyEricsson",
            "Symbian",
            r"UP\.Browser",
            "Windows CE",
            "Xiino",
            "Android",
        )
    ),
    re.IGNORECASE,
)

_HTTP_METHODS = frozenset({"get", "post", "put", "patch", "delete", "head", "options"})


def parse_accept(value: str | None) -> list[str]:
    """Parse an ``Accept`` header into media ranges, best first.

    Entries without an explicit ``q`` rank by position (earlier wins);
    ``*/*`` always ranks at 0.1. A missing or unparseable header means
    ``text/html``.
    """
    if not value or not re.search(r"[a-z,-]", value, re.IGNORECASE):
        return ["text/html"]

    entries = [part.strip() for part in value.split(",") if part.strip()]
    total = len(entries)
    ranked: dict[str, float] = {}
    for position, entry in enumerate(entries):
        media_range, *params = (p.strip() for p in entry.split(";"))
        quality = 1.0 + (total - 1 - position) / 100
        for param in params:
            name, _, raw = param.partition("=")
            if name.strip().lower() == "q":
                try:
                    quality = float(raw)
                except ValueError:
                    quality = 0.0
        if media_range == "*/*":
            quality = 0.1
        ranked.setdefault(media_range, quality)

    ordered = sorted(ranked, key=ranked.__getitem__, reverse=True)
    if ranked.get("application/xhtml+xml", 0.0) >= 1:
        ordered = [media for media in ordered if media != "application/xml"]
    return ordered


@dataclass(frozen=True, slots=True)
class Request:
    """An immutable HTTP request.

    ``params`` carries the route parameters (``controller``, ``action``,
    ``type``, ...) set by the router.
    """

    method: str = "GET"
    path: str = "/"
    headers: Headers = field(default_factory=Headers)
    params: dict[str, Any] = field(default_factory=dict)
    scheme: str = "http"

    # -- Computed properties --

    @property
    def type(self) -> str | None:
        """The route-declared content type (e.g. ``/posts.json`` -> ``json``)."""
        value = self.params.get("type")
        return value if isinstance(value, str) and value else None

    @property
    def user_agent(self) -> str:
        """The User-Agent header, or an empty string."""
        return self.headers.get("user-agent") or ""

    @property
    def is_mobile(self) -> bool:
        """True if the User-Agent looks like a mobile browser."""
        return bool(_MOBILE_AGENTS.search(self.user_agent))

    @property
    def is_ajax(self) -> bool:
        """True for ``X-Requested-With: XMLHttpRequest`` requests."""
        return self.headers.get("x-requested-with") == "XMLHttpRequest"

    @property
    def is_secure(self) -> bool:
        """True if the request arrived (or was forwarded) over HTTPS."""
        forwarded = self.headers.get("x-forwarded-proto")
        return self.scheme == "https" or forwarded == "https"

    def accepts(self) -> list[str]:
        """Media ranges from the ``Accept`` header, best first."""
        return parse_accept(self.headers.get("accept"))

    def is_(self, detector: str) -> bool:
        """Run a named detector: ``mobile``, ``ajax``, ``secure``, or an HTTP method."""
        name = detector.lower()
        if name in _HTTP_METHODS:
            return self.method.lower() == name
        check = _DETECTORS.get(name)
        if check is None:
            return False
        return check(self)

    def get(self, key: str) -> Any:
        """Look up ``http:<header>`` or ``params:<name>`` values.

        Returns ``None`` for unknown sources or missing keys.
        """
        source, _, name = key.partition(":")
        if source == "http":
            return self.headers.get(name)
        if source == "params":
            return self.params.get(name)
        return None

    # -- Factory --

    @classmethod
    def from_asgi(
        cls,
        scope: dict[str, Any],
        params: dict[str, Any] | None = None,
    ) -> Request:
        """Create a Request from an ASGI HTTP scope."""
        return cls(
            method=scope.get("method", "GET"),
            path=scope.get("path", "/"),
            headers=Headers(tuple(scope.get("headers", ()))),
            params=params or {},
            scheme=scope.get("scheme", "http"),
        )


_DETECTORS: dict[str, Callable[[Request], bool]] = {
    "mobile": lambda request: request.is_mobile,
    "ajax": lambda request: request.is_ajax,
    "secure": lambda request: request.is_secure,
    "ssl": lambda request: request.is_secure,
}
