"""Content negotiation — picks the media type a request should get.

The route-declared type (``/posts.json``) wins when its conditions hold.
Otherwise the request's ``Accept`` ranges are walked best-first, and each
registered type serving that MIME type is tried in registry order (user
types before built-ins). ``*/*`` maps to ``html``.
"""

import logging

from tern.http.request import Request
from tern.media.types import MediaType, TypeRegistry

logger = logging.getLogger("tern.media")


def match(request: Request, media_type: MediaType) -> bool:
    """True if every negotiation condition of *media_type* holds for *request*.

    Condition keys:

    - ``type``: whether the route declared this type
    - ``http:<header>`` / ``params:<name>``: compared with ``request.get(key)``
    - anything else: a request detector (``mobile``, ``ajax``, ``post``, ...)
    """
    handler = media_type.handler
    if handler is None:
        return True
    for key, expected in handler.conditions.items():
        if key == "type":
            actual: object = request.type == media_type.name
        elif ":" in key:
            actual = request.get(key)
        else:
            actual = request.is_(key)
        if actual != expected:
            return False
    return True


def negotiate(request: Request, registry: TypeRegistry) -> str | None:
    """Return the best registered type name for *request*, or None."""
    declared = request.type
    accepts = request.accepts()

    if declared is not None:
        media_type = registry.get(declared)
        if media_type is not None:
            if match(request, media_type):
                logger.debug("negotiated %s from route type", declared)
                return declared
            if media_type.content:
                preferred = media_type.content[0]
                accepts = [preferred, *(m for m in accepts if m != preferred)]

    for mime in accepts:
        for name in registry.names_for(mime):
            media_type = registry.get(name)
            if media_type is not None and match(request, media_type):
                logger.debug("negotiated %s from Accept range %s", name, mime)
                return name
    logger.debug("no media type acceptable for %s", ", ".join(accepts))
    return None
