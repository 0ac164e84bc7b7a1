"""Template views used by the media renderer."""

from tern.template.view import TemplateView, View

__all__ = ["TemplateView", "View"]
