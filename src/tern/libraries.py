"""Library registry — where asset and template files live on disk.

A library is a named directory tree (the application itself, or a plugin)
with an optional public webroot and optional CDN hosts per asset type.
Exactly one library is the default; ``get(True)`` returns it.
"""

import logging
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from tern.errors import ConfigurationError

logger = logging.getLogger("tern.libraries")


@dataclass(frozen=True, slots=True)
class Library:
    """A registered library.

    ``assets`` maps an asset type (``"js"``) to a host prefix
    (``"http://static.cdn.com"``). A nested mapping keyed by environment
    name overrides the flat entries for that environment::

        assets={"js": "http://cdn.dev", "production": {"js": "http://cdn.com"}}
    """

    name: str
    path: Path
    webroot: Path | None = None
    assets: Mapping[str, Any] = field(default_factory=dict)
    default: bool = False

    @property
    def dirname(self) -> str:
        """The last path segment, used as ``{library}`` in asset URLs."""
        return self.path.name

    def asset_host(self, asset_type: str, environment: str) -> str | None:
        """Return the CDN host for *asset_type* in *environment*, if any."""
        scoped = self.assets.get(environment)
        if isinstance(scoped, Mapping) and scoped.get(asset_type):
            return scoped[asset_type]
        host = self.assets.get(asset_type)
        return host if isinstance(host, str) and host else None


class Libraries:
    """Mutable name -> Library registry.

    The first library added with ``default=True`` becomes the default;
    adding another default library replaces it.
    """

    __slots__ = ("_default", "_libraries")

    def __init__(self) -> None:
        self._libraries: dict[str, Library] = {}
        self._default: str | None = None

    def add(
        self,
        name: str,
        path: str | Path,
        *,
        webroot: str | Path | None = None,
        assets: Mapping[str, Any] | None = None,
        default: bool = False,
    ) -> Library:
        """Register (or replace) a library and return it."""
        if not name:
            msg = "Library name must be a non-empty string."
            raise ConfigurationError(msg)
        library = Library(
            name=name,
            path=Path(path),
            webroot=Path(webroot) if webroot is not None else None,
            assets=dict(assets or {}),
            default=default,
        )
        self._libraries[name] = library
        if default:
            self._default = name
        logger.debug("library added: %s (%s)", name, library.path)
        return library

    def get(self, name: str | bool) -> Library | None:
        """Return a library by name, or the default library for ``True``."""
        if name is True:
            if self._default is None:
                return None
            return self._libraries.get(self._default)
        if not isinstance(name, str):
            return None
        return self._libraries.get(name)

    def remove(self, name: str) -> None:
        """Remove a library. Unknown names are ignored."""
        if self._libraries.pop(name, None) is not None:
            logger.debug("library removed: %s", name)
        if self._default == name:
            self._default = None

    def __contains__(self, name: object) -> bool:
        return name in self._libraries

    def __iter__(self) -> Iterator[str]:
        return iter(self._libraries)

    def __len__(self) -> int:
        return len(self._libraries)
