"""Shared fixtures: a fresh Media bound to a temporary application."""

from collections.abc import Callable
from pathlib import Path

import pytest

from tern.config import MediaConfig
from tern.http.headers import Headers
from tern.http.request import Request
from tern.media import Media


@pytest.fixture
def app_dir(tmp_path: Path) -> Path:
    """An application directory with an empty webroot."""
    app = tmp_path / "app"
    (app / "webroot").mkdir(parents=True)
    return app


@pytest.fixture
def media(app_dir: Path) -> Media:
    return Media(MediaConfig(app_path=app_dir, environment="test"))


def _make_request(
    accept: str | None = None,
    *,
    user_agent: str | None = None,
    params: dict | None = None,
    **headers: str,
) -> Request:
    values = {name.replace("_", "-"): value for name, value in headers.items()}
    if accept is not None:
        values["Accept"] = accept
    if user_agent is not None:
        values["User-Agent"] = user_agent
    return Request(headers=Headers.from_mapping(values), params=params or {})


@pytest.fixture
def make_request() -> Callable[..., Request]:
    """Build a Request from header values: ``make_request("text/html", X_Foo="1")``."""
    return _make_request
