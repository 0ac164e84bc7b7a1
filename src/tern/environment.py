"""Deployment environment tracking.

The current environment name (``development``, ``test``, ``production``,
or anything an application adds) selects per-environment sections of
location and library asset configuration.
"""

import os

ENV_VAR = "TERN_ENV"
DEFAULT_ENVIRONMENT = "development"


class Environment:
    """Holds the name of the active deployment environment.

    Usage::

        env = Environment("test")
        env.get()              # "test"
        env.set("production")
        env.is_("production")  # True
    """

    __slots__ = ("_name",)

    def __init__(self, name: str | None = None) -> None:
        self._name = name or os.environ.get(ENV_VAR) or DEFAULT_ENVIRONMENT

    def get(self) -> str:
        """Return the active environment name."""
        return self._name

    def set(self, name: str) -> None:
        """Switch the active environment."""
        if not name:
            msg = "Environment name must be a non-empty string."
            raise ValueError(msg)
        self._name = name

    def is_(self, name: str) -> bool:
        """True if *name* is the active environment."""
        return self._name == name

    def __repr__(self) -> str:
        return f"Environment({self._name!r})"
