"""Asset URL construction.

Turns a short asset reference (``"style"``, ``"/img/logo.png"``) into a
public URL, either relative to a library (the application or a plugin)
or through a named location (a CDN or a mounted prefix).
"""

import logging
import re
from collections.abc import Mapping
from pathlib import Path

from tern.environment import Environment
from tern.errors import ConfigurationError
from tern.libraries import Libraries, Library
from tern.media.assets import AssetType
from tern.media.locations import Location

logger = logging.getLogger("tern.media")

# scheme://host/... or protocol-relative //host/...
_EXTERNAL = re.compile(r"^(?:[a-z0-9-]+:)?//", re.IGNORECASE)


def is_external(path: str) -> bool:
    """True for URLs that already name a host."""
    return bool(_EXTERNAL.match(path))


def expand(path: str, template: str | None, *, base: str, library: str = "") -> str:
    """Place *path* into *template*, or prepend *base* to an absolute path.

    Absolute paths that already start with *base* are left alone.
    """
    if path.startswith("/"):
        if base and not path.startswith(base):
            return f"{base}{path}"
        return path
    if template is None:
        return f"{base}/{path}"
    return template.format_map({"base": base, "library": library, "path": path})


def apply_filter(url: str, replacements: Mapping[str, str] | None) -> str:
    """Apply string replacements in order."""
    for old, new in (replacements or {}).items():
        url = url.replace(old, new)
    return url


def stamp(url: str, file: str) -> str:
    """Append the file's modification time as a cache-busting query value."""
    separator = "&" if "?" in url else "?"
    return f"{url}{separator}{int(Path(file).stat().st_mtime)}"


def locate(path: str, asset_type: AssetType, root: Path | None) -> str | None:
    """Return the on-disk file an asset URL refers to, or None if missing."""
    if root is None:
        return None
    path = path.split("?", 1)[0]
    if path.startswith("/"):
        file = root / path.lstrip("/")
    else:
        template = asset_type.template(with_library=False)
        if template is None:
            file = root / path
        else:
            file = Path(template.format_map({"base": str(root), "library": "", "path": path}))
    if not file.is_file():
        return None
    return str(file.resolve())


def library_webroot(library: Library) -> Path:
    return library.webroot if library.webroot is not None else library.path / "webroot"


class AssetUrls:
    """Builds asset URLs from asset types, libraries, and locations."""

    __slots__ = ("_environment", "_libraries")

    def __init__(self, libraries: Libraries, environment: Environment) -> None:
        self._libraries = libraries
        self._environment = environment

    def library(self, name: str | bool) -> Library:
        library = self._libraries.get(name)
        if library is None:
            msg = f"Unknown library `{name}`."
            raise ConfigurationError(msg)
        return library

    def through_library(
        self,
        path: str,
        type_name: str,
        asset_type: AssetType,
        *,
        library: str | bool,
        base: str,
        check: bool,
        timestamp: bool,
        replacements: Mapping[str, str] | None,
    ) -> str | None:
        """URL for an asset served from a library's webroot."""
        config = self.library(library)
        template = asset_type.template(with_library=not config.default)

        file = None
        if check or timestamp:
            file = locate(path, asset_type, library_webroot(config))
        if check and file is None:
            logger.debug("asset %s not found in library %s", path, config.name)
            return None

        url = expand(path, template, base=base, library=config.dirname)
        url = apply_filter(url, replacements)
        if timestamp and file is not None:
            url = stamp(url, file)

        host = config.asset_host(type_name, self._environment.get())
        if host:
            url = f"{host}{url}"
        return url

    def through_location(
        self,
        path: str,
        asset_type: AssetType,
        location: Location,
        *,
        base: str | None,
        check: bool,
        timestamp: bool,
        replacements: Mapping[str, str] | None,
    ) -> str | None:
        """URL for an asset served from a named location.

        The location prefix follows the base; absolute locations put
        ``scheme + host`` in front of both.
        """
        if base is None:
            base = f"/{location.base.strip('/')}" if location.base else ""
        if location.prefix:
            base = f"{base}/{location.prefix}"
        if location.absolute:
            base = f"{location.origin(path)}{base}"

        root = Path(location.path) if location.path else None
        if root is None and (check or timestamp):
            default = self._libraries.get(True)
            root = library_webroot(default) if default is not None else None

        file = None
        if check or timestamp:
            file = locate(path, asset_type, root)
        if check and file is None:
            logger.debug("asset %s not found under %s", path, root)
            return None

        url = expand(path, asset_type.template(with_library=False), base=base)
        url = apply_filter(url, replacements)
        if timestamp and file is not None:
            url = stamp(url, file)
        return url
