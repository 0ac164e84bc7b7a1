"""Tern exception hierarchy.

Shared across the media registry, renderer, and views so every module
raises and catches the same types.
"""


class TernError(Exception):
    """Base for all tern-specific errors."""


class ConfigurationError(TernError):
    """Raised when a registry or library configuration is invalid."""


class MediaError(TernError):
    """Raised when content cannot be rendered for a media type.

    The message names the offending type, e.g. ``Unhandled media type `xml`.``
    """


class TemplateNotFound(MediaError):  # noqa: N818
    """A view-based render could not locate its template or layout file."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Template not found at path `{path}`.")
