"""Kida-backed template view.

The media renderer hands a view the resolved handler paths, the
library root, and the response being built. ``TemplateView`` resolves
the template and layout files from those paths, renders them with kida,
and wraps the template output in the layout's ``content`` variable.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import TYPE_CHECKING, Any, Protocol

from kida import Environment, FileSystemLoader
from kida.template import Markup

from tern.errors import TemplateNotFound

if TYPE_CHECKING:
    from tern.http.request import Request
    from tern.http.response import Response

logger = logging.getLogger("tern.template")


class View(Protocol):
    """What the renderer expects from a view class.

    ``render`` returns the body, or a whole ``Response`` when the view
    needs to change headers or status.
    """

    def __init__(
        self,
        *,
        paths: Mapping[str, str | None],
        library: Path,
        type: str,
        response: Response,
        request: Request | None = None,
    ) -> None: ...

    def render(self, data: Any, options: Mapping[str, Any]) -> str | Response: ...


def _context(data: Any) -> dict[str, Any]:
    if data is None:
        return {}
    if isinstance(data, Mapping):
        return dict(data)
    return {"data": data}


class TemplateView:
    """Render ``{template}`` and ``{layout}`` files from a library's views."""

    __slots__ = ("library", "paths", "request", "response", "type")

    def __init__(
        self,
        *,
        paths: Mapping[str, str | None],
        library: Path,
        type: str,
        response: Response,
        request: Request | None = None,
    ) -> None:
        self.paths = paths
        self.library = library
        self.type = type
        self.response = response
        self.request = request

    def resolve(self, kind: str, options: Mapping[str, Any]) -> Path:
        """Return the file for template *kind*; raise if it does not exist."""
        pattern = self.paths.get(kind)
        # element paths name their file with {template}
        key = "template" if kind == "element" else kind
        name = options.get(key)
        if kind == "template" and not name:
            name = options.get("action")
        variables = {
            "library": str(self.library),
            "controller": options.get("controller") or "",
            "type": self.type,
            key: name or "",
        }
        if not pattern:
            raise TemplateNotFound(f"<no {kind} path for type `{self.type}`>")
        file = Path(pattern.format_map(variables))
        if not name or not file.is_file():
            raise TemplateNotFound(str(file))
        return file

    def render(self, data: Any, options: Mapping[str, Any]) -> str:
        """Render the template, then wrap it in the layout when one is set."""
        context = _context(data)
        template = self.resolve("template", options)
        content = _render_file(template, context)

        if not options.get("layout") or not self.paths.get("layout"):
            return content
        layout = self.resolve("layout", options)
        return _render_file(layout, {**context, "content": Markup(content)})


def _render_file(file: Path, context: dict[str, Any]) -> str:
    logger.debug("rendering template %s", file)
    env = Environment(loader=FileSystemLoader(str(file.parent)))
    return env.get_template(file.name).render(context)
