"""Tern — media types, content negotiation, and asset URLs for web apps.

Maps logical content types to MIME types and codecs, negotiates the
``Accept`` header, renders controller data through encoders or kida
views, and builds public URLs for static assets.

Basic usage::

    from tern import Media, Request, Response

    media = Media()
    media.asset("style", "css")                        # "/css/style.css"
    media.negotiate(request)                           # "json"
    response = media.render(Response(type="json"), {"ok": True})
"""

__version__ = "0.1.0-dev"
__all__ = [
    "ConfigurationError",
    "Environment",
    "Handler",
    "Libraries",
    "Media",
    "MediaConfig",
    "MediaError",
    "Request",
    "Response",
    "TemplateNotFound",
    "TernError",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import tern`` fast while providing a clean top-level API.
    """
    if name in ("Media", "Handler"):
        from tern import media as _media

        return getattr(_media, name)

    if name == "MediaConfig":
        from tern.config import MediaConfig

        return MediaConfig

    if name == "Environment":
        from tern.environment import Environment

        return Environment

    if name == "Libraries":
        from tern.libraries import Libraries

        return Libraries

    if name == "Request":
        from tern.http.request import Request

        return Request

    if name == "Response":
        from tern.http.response import Response

        return Response

    if name in ("TernError", "ConfigurationError", "MediaError", "TemplateNotFound"):
        from tern import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
