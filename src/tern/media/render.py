"""Response rendering — turns controller data into a response body.

Dispatch order for a resolved handler:

1. ``encode`` set          -> encoder output (``json``, ``text``, ``form``, ...)
2. ``template=False`` + str -> the string, as-is
3. ``view`` set            -> view instance renders template (+ layout)

Types that are unregistered, or registered without a handler (``xml``,
``css``), raise ``MediaError`` before the response is touched.
"""

import logging
from collections.abc import Mapping
from dataclasses import replace
from typing import Any

from tern._internal.invoke import invoke
from tern.errors import ConfigurationError, MediaError
from tern.http.request import Request
from tern.http.response import Response
from tern.libraries import Libraries
from tern.media.codecs import cast_all
from tern.media.types import (
    DEFAULT_HANDLER,
    HANDLER_FIELDS,
    Handler,
    MediaType,
    TypeRegistry,
)

logger = logging.getLogger("tern.media")


def content_type_header(mime: str, encoding: str | None) -> str:
    """``("application/json", "UTF-8")`` -> ``"application/json; charset=UTF-8"``."""
    return f"{mime}; charset={encoding}" if encoding else mime


class Renderer:
    """Encodes, decodes, and renders data for registered media types."""

    __slots__ = ("_libraries", "_types")

    def __init__(self, types: TypeRegistry, libraries: Libraries) -> None:
        self._types = types
        self._libraries = libraries

    def _handler(self, handler: Handler | str | None) -> Handler | None:
        if isinstance(handler, str):
            media_type = self._types.get(handler)
            return media_type.handler if media_type is not None else None
        return handler

    # -- Codecs --

    def encode(
        self,
        handler: Handler | str | None,
        data: Any,
        response: Response | None = None,
    ) -> Any:
        """Encode *data* with a handler (or a type name's handler).

        Returns ``None`` when there is no handler or it has no encoder.
        Encoders receive ``(data, handler, response)``, or fewer leading
        arguments if that is all they accept.
        """
        resolved = self._handler(handler)
        if resolved is None or not resolved.encode:
            return None
        if resolved.cast:
            data = cast_all(data)
        return invoke(resolved.encode, data, resolved, response)

    def decode(self, handler: Handler | str | None, data: Any, **options: Any) -> Any:
        """Decode *data*; ``None`` when the type has no decoder."""
        resolved = self._handler(handler)
        if resolved is None or not resolved.decode:
            return None
        if options:
            resolved = replace(resolved, options={**resolved.options, **options})
        return invoke(resolved.decode, data, resolved)

    # -- Views --

    def view(
        self,
        handler: Handler | str,
        response: Response | None = None,
        *,
        type: str = "html",
        request: Request | None = None,
    ) -> Any:
        """Instantiate the view class of *handler* for one render."""
        if isinstance(handler, str):
            type = handler
        resolved = self._handler(handler)
        if resolved is None:
            msg = f"No view configured for media type `{type}`."
            raise MediaError(msg)
        library_name = resolved.options.get("library", True)
        library = self._libraries.get(library_name)
        if library is None:
            msg = f"Unknown library `{library_name}`."
            raise ConfigurationError(msg)
        view_class = resolved.view or DEFAULT_HANDLER.view
        return view_class(
            paths=resolved.paths or DEFAULT_HANDLER.paths,
            library=library.path,
            type=type,
            response=response if response is not None else Response(type=type),
            request=request,
        )

    # -- Rendering --

    def resolve(
        self,
        type_name: str,
        options: Mapping[str, Any],
        request: Request | None = None,
    ) -> tuple[MediaType, Handler]:
        """Merge render *options* over the handler for *type_name*.

        Handler fields given as options override the registered handler;
        everything else (template, layout, library, route params) lands in
        ``handler.options``. ``None`` values fall back to the default
        handler, so ``view`` ends up as the template view.
        """
        media_type = self._types.get(type_name)
        if media_type is None or media_type.handler is None:
            logger.debug("no handler for media type %s", type_name)
            raise MediaError(f"Unhandled media type `{type_name}`.")

        overrides = {
            key: value
            for key, value in options.items()
            if key in HANDLER_FIELDS and key != "options" and value is not None
        }
        extras = {key: value for key, value in options.items() if key not in HANDLER_FIELDS}
        if request is not None:
            for key, value in request.params.items():
                extras.setdefault(key, value)
            extras["request"] = request

        handler = replace(
            media_type.handler,
            **overrides,
            options={**media_type.handler.options, **extras},
        )
        if handler.view is None:
            handler = replace(handler, view=DEFAULT_HANDLER.view)
        if not handler.paths:
            handler = replace(handler, paths=DEFAULT_HANDLER.paths)
        return media_type, handler

    def render(
        self,
        response: Response,
        data: Any = None,
        *,
        type: str | None = None,
        request: Request | None = None,
        **options: Any,
    ) -> Response:
        """Render *data* into a copy of *response*.

        The type is the ``type`` option, else ``response.type``. Sets the
        ``Content-Type`` from the type's first MIME type and the response
        encoding. A view may return a whole ``Response`` to change headers.
        """
        type_name = type or response.type
        media_type, handler = self.resolve(type_name, options, request)
        name = media_type.name

        if media_type.content:
            response = response.with_content_type(
                content_type_header(media_type.content[0], response.encoding)
            )
        logger.debug("rendering %s response", name)
        result = self._handle(name, handler, data, response, request)
        if isinstance(result, Response):
            return result
        if result is None:
            result = ""
        if not isinstance(result, (str, bytes)):
            result = str(result)
        return response.with_body(result)

    def _handle(
        self,
        name: str,
        handler: Handler,
        data: Any,
        response: Response,
        request: Request | None,
    ) -> Any:
        if handler.encode:
            return self.encode(handler, data, response)
        if handler.options.get("template") is False and isinstance(data, str):
            return data
        if handler.view:
            view = self.view(handler, response, type=name, request=request)
            return view.render(data, handler.options)
        msg = f"Could not interpret type settings for handler `{name}`."
        raise MediaError(msg)
