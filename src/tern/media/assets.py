"""Asset type registry — URL templates per kind of static file.

Each asset type (``js``, ``css``, ``image``, ``generic``, or a custom one)
owns a suffix, an ordered set of URL templates keyed by the variables
they require, and an optional filter of string replacements applied to
the finished URL.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from typing import Any

from tern.errors import ConfigurationError

logger = logging.getLogger("tern.media")

# Variables a path template may require.
TEMPLATE_VARIABLES = frozenset({"base", "library", "path"})


@dataclass(frozen=True, slots=True)
class AssetType:
    """URL construction rules for one kind of asset.

    ``paths`` maps a template such as ``"{base}/{library}/css/{path}"`` to
    the variables it needs. Templates that need ``library`` serve assets
    of non-default libraries; the others serve the default library and
    named locations.
    """

    suffix: str | None = None
    paths: Mapping[str, tuple[str, ...]] = field(default_factory=dict)
    filter: Mapping[str, str] | None = None

    def template(self, *, with_library: bool) -> str | None:
        """Pick the template for library-relative or plain lookups.

        Falls back to whichever template exists when the asset type
        only defines one kind.
        """
        if not self.paths:
            return None
        for template, variables in self.paths.items():
            if ("library" in variables) == with_library:
                return template
        return next(iter(self.paths)) if with_library else list(self.paths)[-1]


def _directory_paths(directory: str) -> dict[str, tuple[str, ...]]:
    segment = f"/{directory}" if directory else ""
    return {
        f"{{base}}/{{library}}{segment}/{{path}}": ("base", "library", "path"),
        f"{{base}}{segment}/{{path}}": ("base", "path"),
    }


DEFAULT_ASSETS: Mapping[str, AssetType] = {
    "js": AssetType(suffix=".js", paths=_directory_paths("js")),
    "css": AssetType(suffix=".css", paths=_directory_paths("css")),
    "image": AssetType(paths=_directory_paths("img")),
    "generic": AssetType(paths=_directory_paths("")),
}


def _normalize_paths(paths: Mapping[str, Any]) -> dict[str, tuple[str, ...]]:
    normalized: dict[str, tuple[str, ...]] = {}
    for template, variables in paths.items():
        required = tuple(variables)
        unknown = set(required) - TEMPLATE_VARIABLES
        if unknown:
            msg = (
                f"Asset path `{template}` requires unknown variable(s): "
                f"{', '.join(sorted(unknown))}"
            )
            raise ConfigurationError(msg)
        normalized[template] = required
    return normalized


class AssetRegistry:
    """Mutable name -> AssetType registry layered over the built-ins."""

    __slots__ = ("_assets", "_removed")

    def __init__(self) -> None:
        self._assets: dict[str, AssetType] = {}
        self._removed: set[str] = set()

    def reset(self) -> None:
        self._assets.clear()
        self._removed.clear()

    def all(self) -> dict[str, AssetType]:
        """Every live asset type: built-ins in order, then user types."""
        result = {
            name: self._assets.get(name, asset)
            for name, asset in DEFAULT_ASSETS.items()
            if name not in self._removed
        }
        for name, asset in self._assets.items():
            result.setdefault(name, asset)
        return result

    def get(self, name: str) -> AssetType | None:
        if name in self._removed:
            return None
        return self._assets.get(name) or DEFAULT_ASSETS.get(name)

    def register(
        self,
        name: str,
        *,
        suffix: str | None = None,
        paths: Mapping[str, Any] | None = None,
        filter: Mapping[str, str] | None = None,
    ) -> AssetType:
        """Add an asset type, or update an existing one.

        Updates only replace the values given (empty values are ignored),
        so ``register("my", filter={...})`` keeps the suffix and paths.
        """
        updates: dict[str, Any] = {}
        if suffix:
            updates["suffix"] = suffix
        if paths:
            updates["paths"] = _normalize_paths(paths)
        if filter:
            updates["filter"] = dict(filter)

        current = self.get(name)
        asset = replace(current, **updates) if current is not None else AssetType(**updates)
        self._removed.discard(name)
        self._assets[name] = asset
        logger.debug("asset type registered: %s (suffix=%s)", name, asset.suffix)
        return asset

    def remove(self, name: str) -> None:
        """Remove a user or built-in asset type. Unknown names are ignored."""
        self._assets.pop(name, None)
        if name in DEFAULT_ASSETS:
            self._removed.add(name)
        logger.debug("asset type removed: %s", name)
