"""Named asset locations (scopes) — where a set of assets is served from.

A location describes a URL prefix, an optional absolute host (a CDN),
and the on-disk directory its files live in. Configuration may carry
per-environment sections that override the shared values::

    registry.attach("cdn", prefix="assets", production={"absolute": True,
                                                         "host": "cdn.example.com"})
"""

import logging
import zlib
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, fields
from typing import Any

from tern.errors import ConfigurationError

logger = logging.getLogger("tern.media")

DEFAULT_SCOPE = "__default__"


@dataclass(frozen=True, slots=True)
class Location:
    """A resolved location for the current environment.

    ``host`` and ``scheme`` may be sequences; the entry used for a given
    asset is chosen by a stable hash of the asset path (see ``origin``).
    """

    absolute: bool = False
    host: str | tuple[str, ...] = "localhost"
    scheme: str | tuple[str, ...] = "http://"
    base: str | None = None
    prefix: str = ""
    path: str | None = None
    timestamp: bool = False
    filter: Mapping[str, str] | None = None
    suffix: str | None = None
    check: bool = False

    def origin(self, asset_path: str) -> str:
        """``scheme + host`` for *asset_path*; identical paths get identical origins."""
        index = zlib.crc32(asset_path.encode("utf-8"))
        host = self.host
        scheme = self.scheme
        if isinstance(host, tuple):
            host = host[index % len(host)] if host else "localhost"
        if isinstance(scheme, tuple):
            scheme = scheme[index % len(scheme)] if scheme else "http://"
        return f"{scheme}{host}"


LOCATION_FIELDS = frozenset(f.name for f in fields(Location))


def _coerce(config: Mapping[str, Any]) -> Location:
    values = dict(config)
    for key in ("host", "scheme"):
        value = values.get(key)
        if isinstance(value, Sequence) and not isinstance(value, str):
            values[key] = tuple(value)
    if values.get("prefix") is None:
        values["prefix"] = ""
    values["prefix"] = values["prefix"].strip("/")
    if values.get("filter") is not None:
        values["filter"] = dict(values["filter"])
    return Location(**values)


class LocationRegistry:
    """Mutable name -> raw location config registry.

    Raw configuration is stored as given; ``get`` resolves it against an
    environment name each time it is read.
    """

    __slots__ = ("_configs",)

    def __init__(self) -> None:
        self._configs: dict[str, dict[str, Any]] = {}

    def reset(self) -> None:
        self._configs.clear()

    def attach(self, name: str | None, config: Mapping[str, Any]) -> None:
        """Store *config* under *name* (``None`` = the default scope).

        Keys must be location fields, or environment names whose values
        are mappings of location fields.
        """
        key = DEFAULT_SCOPE if name is None else name
        for option, value in config.items():
            if option in LOCATION_FIELDS:
                continue
            if not isinstance(value, Mapping):
                msg = f"Unknown location option `{option}` for `{key}`."
                raise ConfigurationError(msg)
            unknown = set(value) - LOCATION_FIELDS
            if unknown:
                msg = (
                    f"Unknown location option(s) in `{key}.{option}`: "
                    f"{', '.join(sorted(unknown))}"
                )
                raise ConfigurationError(msg)
        self._configs[key] = dict(config)
        logger.debug("location attached: %s", key)

    def detach(self, name: str | None) -> None:
        """Remove a location. Unknown names are ignored."""
        key = DEFAULT_SCOPE if name is None else name
        if self._configs.pop(key, None) is not None:
            logger.debug("location detached: %s", key)

    def get(self, name: str | None, environment: str) -> Location | None:
        """Resolve a location for *environment*, or None if not attached."""
        key = DEFAULT_SCOPE if name is None else name
        config = self._configs.get(key)
        if config is None:
            return None
        shared = {k: v for k, v in config.items() if k in LOCATION_FIELDS}
        section = config.get(environment)
        if environment not in LOCATION_FIELDS and isinstance(section, Mapping):
            shared.update(section)
        return _coerce(shared)

    def names(self) -> list[str]:
        """Names of explicitly named locations (the default scope excluded)."""
        return [name for name in self._configs if name != DEFAULT_SCOPE]
