"""The Media facade — one object owning every media registry.

``Media`` bundles the type registry, asset types, locations, the
renderer, and negotiation behind a single API. Create one per
application (or per test) and reset it to the built-in defaults with
``reset()``.

Basic usage::

    from tern import Media

    media = Media()
    media.register_type("csv", "text/csv", encode=encode_csv)
    media.asset("style", "css")                       # "/css/style.css"
    media.negotiate(request)                          # "json"
    response = media.render(Response(type="json"), {"ok": True})
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping
from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING, Any, Final

from tern.config import MediaConfig
from tern.environment import Environment
from tern.libraries import Libraries
from tern.media.assets import AssetRegistry, AssetType
from tern.media.locations import Location, LocationRegistry
from tern.media.negotiation import match as match_conditions
from tern.media.negotiation import negotiate as negotiate_type
from tern.media.render import Renderer
from tern.media.types import Handler, MediaType, TypeRegistry
from tern.media.urls import AssetUrls, is_external, library_webroot, locate

if TYPE_CHECKING:
    from tern.http.request import Request
    from tern.http.response import Response

logger = logging.getLogger("tern.media")


class _Current:
    def __repr__(self) -> str:
        return "<current scope>"


CURRENT: Final = _Current()
"""Sentinel for ``asset(scope=...)``: use whatever scope is active."""


class Media:
    """Content types, negotiation, rendering, and asset URLs.

    ``libraries`` and ``environment`` are created from *config* when not
    given; the application library named by ``config.app_name`` becomes
    the default library unless one is already registered.
    """

    __slots__ = (
        "_assets",
        "_locations",
        "_renderer",
        "_scope",
        "_types",
        "_urls",
        "config",
        "environment",
        "libraries",
    )

    def __init__(
        self,
        config: MediaConfig | None = None,
        *,
        libraries: Libraries | None = None,
        environment: Environment | None = None,
    ) -> None:
        self.config = config or MediaConfig()
        self.environment = environment or Environment(self.config.environment)
        self.libraries = libraries if libraries is not None else Libraries()
        if self.libraries.get(True) is None:
            self.libraries.add(
                self.config.app_name,
                self.config.app_path,
                webroot=self.config.app_webroot,
                default=True,
            )

        self._types = TypeRegistry()
        self._assets = AssetRegistry()
        self._locations = LocationRegistry()
        self._renderer = Renderer(self._types, self.libraries)
        self._urls = AssetUrls(self.libraries, self.environment)
        self._scope: str | None = None

    def reset(self) -> None:
        """Restore built-in types and assets; drop locations and the active scope."""
        self._types.reset()
        self._assets.reset()
        self._locations.reset()
        self._scope = None
        logger.debug("media registries reset")

    # ------------------------------------------------------------------
    # Media types
    # ------------------------------------------------------------------

    def types(self) -> list[str]:
        """Names of every registered media type."""
        return self._types.names()

    def formats(self) -> list[str]:
        """Names of every type that can be requested as a format."""
        return self._types.names()

    def type(self, name: str) -> MediaType | None:
        """Return a media type by name (aliases resolve to their target)."""
        return self._types.get(name)

    def register_type(
        self,
        name: str,
        content: str | Iterable[str] | None = None,
        **options: Any,
    ) -> MediaType:
        """Add or replace a media type. See ``TypeRegistry.register``."""
        return self._types.register(name, content, **options)

    def alias(self, name: str, target: str) -> None:
        self._types.alias(name, target)

    def remove_type(self, name: str) -> None:
        self._types.remove(name)

    def types_for(self, mime: str) -> list[str]:
        """Every type name serving *mime* (``"text/html; charset=UTF-8"`` is fine)."""
        return self._types.names_for(mime)

    def type_for(self, mime: str) -> str | None:
        """The first type name serving *mime*, or None."""
        names = self._types.names_for(mime)
        return names[0] if names else None

    def handler(self, name: str) -> Handler | None:
        media_type = self._types.get(name)
        return media_type.handler if media_type is not None else None

    # ------------------------------------------------------------------
    # Negotiation
    # ------------------------------------------------------------------

    def negotiate(self, request: Request) -> str | None:
        """Pick the registered type name that best serves *request*."""
        return negotiate_type(request, self._types)

    def match(self, request: Request, media_type: MediaType | str) -> bool:
        """True if *request* satisfies the negotiation conditions of a type."""
        if isinstance(media_type, str):
            resolved = self._types.get(media_type)
            if resolved is None:
                return False
            media_type = resolved
        return match_conditions(request, media_type)

    # ------------------------------------------------------------------
    # Rendering and codecs
    # ------------------------------------------------------------------

    def render(
        self,
        response: Response,
        data: Any = None,
        *,
        type: str | None = None,
        request: Request | None = None,
        **options: Any,
    ) -> Response:
        """Render *data* for the response's type. Returns a new Response.

        Raises ``MediaError`` for unhandled types and ``TemplateNotFound``
        when a view cannot find its template.
        """
        return self._renderer.render(response, data, type=type, request=request, **options)

    def encode(
        self,
        handler: Handler | str | None,
        data: Any,
        response: Response | None = None,
    ) -> Any:
        """Encode *data* with a handler or a type's handler; None without an encoder."""
        return self._renderer.encode(handler, data, response)

    def to(self, type: str, data: Any) -> Any:
        """Shorthand for ``encode(type, data)``."""
        return self._renderer.encode(type, data)

    def decode(self, type: Handler | str, data: Any, **options: Any) -> Any:
        """Decode *data* with a type's decoder; None without a decoder."""
        return self._renderer.decode(type, data, **options)

    def view(
        self,
        handler: Handler | str,
        response: Response | None = None,
        *,
        type: str = "html",
        request: Request | None = None,
    ) -> Any:
        """Build the view instance a handler renders through."""
        return self._renderer.view(handler, response, type=type, request=request)

    # ------------------------------------------------------------------
    # Asset types
    # ------------------------------------------------------------------

    def assets(self) -> dict[str, AssetType]:
        """Every registered asset type, by name."""
        return self._assets.all()

    def asset_type(self, name: str) -> AssetType | None:
        return self._assets.get(name)

    def register_assets(
        self,
        name: str,
        *,
        suffix: str | None = None,
        paths: Mapping[str, Iterable[str]] | None = None,
        filter: Mapping[str, str] | None = None,
    ) -> AssetType:
        """Add an asset type or update the given fields of an existing one."""
        return self._assets.register(name, suffix=suffix, paths=paths, filter=filter)

    def remove_assets(self, name: str) -> None:
        self._assets.remove(name)

    # ------------------------------------------------------------------
    # Locations
    # ------------------------------------------------------------------

    def attach(self, name: str | None, **config: Any) -> None:
        """Attach a location. ``None`` names the default scope.

        Environment sections are passed as mapping-valued keywords::

            media.attach("cdn", production={"absolute": True, "host": "cdn.com"})
        """
        self._locations.attach(name, config)

    def detach(self, name: str | None) -> None:
        self._locations.detach(name)

    def attached(self, name: str | None) -> Location | None:
        """Resolve a location for the current environment, or None."""
        return self._locations.get(name, self.environment.get())

    def locations(self) -> dict[str, Location]:
        """Every named location, resolved for the current environment."""
        env = self.environment.get()
        resolved = {name: self._locations.get(name, env) for name in self._locations.names()}
        return {name: location for name, location in resolved.items() if location is not None}

    @property
    def current_scope(self) -> str | None:
        """The active location name; None means the default scope."""
        return self._scope

    def scope(self, name: str | None) -> None:
        """Make *name* the active location for subsequent ``asset()`` calls."""
        self._scope = name
        logger.debug("asset scope set to %s", name)

    @contextmanager
    def scoped(self, name: str | None) -> Iterator[None]:
        """Temporarily switch the active location."""
        former = self._scope
        self._scope = name
        try:
            yield
        finally:
            self._scope = former

    # ------------------------------------------------------------------
    # Asset URLs and files
    # ------------------------------------------------------------------

    def _asset_type(self, name: str) -> AssetType:
        return self._assets.get(name) or self._assets.get("generic") or AssetType()

    def asset(
        self,
        path: str,
        type: str,
        *,
        library: str | bool = True,
        base: str | None = None,
        check: bool | None = None,
        timestamp: bool | None = None,
        scope: str | bool | None | _Current = CURRENT,
        suffix: str | None = None,
        filter: Mapping[str, str] | None = None,
    ) -> str | None:
        """Return the public URL of an asset, or None if ``check`` fails.

        URLs with a scheme (``http://``) or protocol-relative URLs
        (``//host/...``) are returned unchanged. Unknown asset types
        use the ``generic`` rules. When a location is active (or passed
        as *scope*) it decides base, prefix, and host; otherwise *library*
        does. ``scope=None`` is the default scope; ``scope=False`` skips
        locations entirely.
        """
        if is_external(path):
            return path

        asset_type = self._asset_type(type)
        if scope is False:
            location = None
        else:
            name = self._scope if isinstance(scope, _Current) or scope is True else scope
            location = self.attached(name)

        if suffix is None:
            suffix = (location.suffix if location is not None else None) or asset_type.suffix
        if suffix and suffix not in path:
            path = f"{path}{suffix}"

        replacements = {
            **(asset_type.filter or {}),
            **((location.filter or {}) if location is not None else {}),
            **(filter or {}),
        }
        if check is None:
            check = location.check if location is not None else False
        if timestamp is None:
            timestamp = location.timestamp if location is not None else False

        if location is not None:
            return self._urls.through_location(
                path,
                asset_type,
                location,
                base=base,
                check=check,
                timestamp=timestamp,
                replacements=replacements,
            )
        return self._urls.through_library(
            path,
            type,
            asset_type,
            library=library,
            base=base or "",
            check=check,
            timestamp=timestamp,
            replacements=replacements,
        )

    def path(self, path: str, type: str, *, library: str | bool = True) -> str | None:
        """Return the real on-disk path of an asset, or None if it does not exist."""
        root = self.webroot(library)
        if root is None:
            return None
        return locate(path, self._asset_type(type), Path(root))

    def webroot(self, library: str | bool = True) -> str | None:
        """A library's public directory (``webroot`` or ``<path>/webroot``)."""
        config = self.libraries.get(library)
        if config is None:
            return None
        return str(library_webroot(config))
