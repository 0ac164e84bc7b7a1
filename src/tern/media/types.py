"""Media type registry — logical type names, MIME types, and handlers.

A media type maps a short name (``"json"``) to an ordered tuple of MIME
types and to a ``Handler`` that knows how to encode, decode, or render
content of that type. Built-in types are always present unless removed;
user registrations shadow them and sort first.
"""

import logging
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field, fields, replace
from typing import Any

from tern.errors import ConfigurationError
from tern.media.codecs import decode_form, decode_json, encode_form, encode_json, encode_text
from tern.template.view import TemplateView

logger = logging.getLogger("tern.media")

DEFAULT_VIEW_PATHS: Mapping[str, str | None] = {
    "template": "{library}/views/{controller}/{template}.{type}.html",
    "layout": "{library}/views/layouts/{layout}.{type}.html",
    "element": "{library}/views/elements/{template}.{type}.html",
}


@dataclass(frozen=True, slots=True)
class Handler:
    """How content of one media type is encoded, decoded, or rendered.

    ``paths`` maps template kinds (``template``, ``layout``, ``element``)
    to path templates; ``None`` disables that kind (e.g. no layout).
    ``conditions`` restrict when negotiation may pick the type. ``options``
    carries render-time values (template, layout, route params, the
    request) through to encoders and views.
    """

    view: type | None = None
    encode: Callable[..., Any] | None = None
    decode: Callable[..., Any] | None = None
    cast: bool = True
    paths: Mapping[str, str | None] = field(default_factory=lambda: dict(DEFAULT_VIEW_PATHS))
    conditions: Mapping[str, Any] = field(default_factory=dict)
    options: Mapping[str, Any] = field(default_factory=dict)


HANDLER_FIELDS = frozenset(f.name for f in fields(Handler))

# Fallback for anything a type's handler leaves unset: render through a view.
DEFAULT_HANDLER = Handler(view=TemplateView, cast=False)


@dataclass(frozen=True, slots=True)
class MediaType:
    """A registered media type."""

    name: str
    content: tuple[str, ...]
    handler: Handler | None = None


# name -> MIME types, or the name of the type it aliases
DEFAULT_TYPES: Mapping[str, tuple[str, ...] | str] = {
    "html": ("text/html", "application/xhtml+xml", "*/*"),
    "htm": "html",
    "form": ("application/x-www-form-urlencoded", "multipart/form-data"),
    "json": ("application/json",),
    "rss": ("application/rss+xml",),
    "atom": ("application/atom+xml",),
    "css": ("text/css",),
    "js": ("application/javascript", "text/javascript"),
    "text": ("text/plain",),
    "txt": "text",
    "xml": ("application/xml", "text/xml"),
}

DEFAULT_HANDLERS: Mapping[str, Handler] = {
    "html": Handler(),
    "json": Handler(cast=True, encode=encode_json, decode=decode_json, paths={}),
    "text": Handler(cast=False, encode=encode_text, paths={}),
    "form": Handler(cast=True, encode=encode_form, decode=decode_form, paths={}),
}


def strip_parameters(mime: str) -> str:
    """``"application/json; charset=UTF-8"`` -> ``"application/json"``."""
    return mime.split(";", 1)[0].strip().lower()


def build_handler(options: Mapping[str, Any], base: Handler | None = None) -> Handler:
    """Merge handler *options* over *base* (or the default handler options).

    ``paths`` merge key-by-key so a single ``{"layout": None}`` keeps the
    default template and element paths.
    """
    unknown = set(options) - HANDLER_FIELDS
    if unknown:
        msg = f"Unknown handler option(s): {', '.join(sorted(unknown))}"
        raise ConfigurationError(msg)
    base = base or Handler()
    values = dict(options)
    if "paths" in values and values["paths"] is not None:
        values["paths"] = {**base.paths, **values["paths"]}
    for key in ("conditions", "options"):
        if key in values and values[key] is None:
            values[key] = {}
    if values.get("options"):
        values["options"] = {**base.options, **values["options"]}
    return replace(base, **values)


class TypeRegistry:
    """Mutable name -> MediaType registry layered over the built-ins."""

    __slots__ = ("_aliases", "_handlers", "_removed", "_types")

    def __init__(self) -> None:
        self._types: dict[str, tuple[str, ...]] = {}
        self._aliases: dict[str, str] = {}
        self._handlers: dict[str, Handler | None] = {}
        self._removed: set[str] = set()

    def reset(self) -> None:
        """Forget every user registration and removal."""
        self._types.clear()
        self._aliases.clear()
        self._handlers.clear()
        self._removed.clear()

    # -- Mutation --

    def register(
        self,
        name: str,
        content: str | Iterable[str] | None = None,
        **options: Any,
    ) -> MediaType:
        """Add or replace a media type and return it.

        *content* may be a single MIME string or several; ``None`` keeps
        the existing MIME types. Options (``view``, ``encode``, ``decode``,
        ``cast``, ``paths``, ``conditions``) are merged over the default
        handler options. Registering without options leaves the type with
        an empty handler that renders through the default view.
        """
        if not name or "/" in name:
            msg = f"Invalid media type name `{name}`."
            raise ConfigurationError(msg)
        if content is None:
            current = self.get(name)
            if current is None:
                msg = f"Media type `{name}` needs content types on first registration."
                raise ConfigurationError(msg)
            mimes = current.content
        elif isinstance(content, str):
            mimes = (content,)
        else:
            mimes = tuple(content)

        self._removed.discard(name)
        self._aliases.pop(name, None)
        self._types.pop(name, None)
        self._types[name] = mimes
        self._handlers[name] = build_handler(options) if options else Handler()
        logger.debug("media type registered: %s -> %s", name, ", ".join(mimes))
        return MediaType(name, mimes, self._handlers[name])

    def alias(self, name: str, target: str) -> None:
        """Make *name* resolve to *target*."""
        self._removed.discard(name)
        self._types.pop(name, None)
        self._handlers.pop(name, None)
        self._aliases[name] = target

    def remove(self, name: str) -> None:
        """Remove a user or built-in type. Unknown names are ignored."""
        self._types.pop(name, None)
        self._aliases.pop(name, None)
        self._handlers.pop(name, None)
        if name in DEFAULT_TYPES:
            self._removed.add(name)
        logger.debug("media type removed: %s", name)

    # -- Queries --

    def _entries(self) -> dict[str, tuple[str, ...] | str]:
        """All live entries: user types first, then surviving built-ins."""
        entries: dict[str, tuple[str, ...] | str] = {}
        for name, mimes in self._types.items():
            entries[name] = mimes
        for name, target in self._aliases.items():
            entries.setdefault(name, target)
        for name, value in DEFAULT_TYPES.items():
            if name not in entries and name not in self._removed:
                entries[name] = value
        return entries

    def names(self) -> list[str]:
        """Names of every registered type (aliases included)."""
        return list(self._entries())

    def get(self, name: str) -> MediaType | None:
        """Return the MediaType for *name*, following aliases."""
        entries = self._entries()
        seen: set[str] = set()
        value = entries.get(name)
        while isinstance(value, str):
            if value in seen:
                return None
            seen.add(value)
            name = value
            value = entries.get(name)
        if value is None:
            return None
        return MediaType(name, value, self.handler(name))

    def handler(self, name: str) -> Handler | None:
        """Return the handler for *name* (not following aliases), or None."""
        if name in self._handlers:
            return self._handlers[name]
        if name in self._types or name in self._removed:
            return None
        return DEFAULT_HANDLERS.get(name)

    def names_for(self, mime: str) -> list[str]:
        """All type names whose content includes *mime* (parameters ignored)."""
        wanted = strip_parameters(mime)
        return [
            name
            for name, value in self._entries().items()
            if not isinstance(value, str) and wanted in (m.lower() for m in value)
        ]
