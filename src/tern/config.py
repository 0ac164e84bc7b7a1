"""Media layer configuration.

MediaConfig is a frozen dataclass — immutable after creation, IDE-autocompletable,
no string-key dict lookups.
"""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class MediaConfig:
    """Media configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = MediaConfig(app_path="./myapp", environment="production")
    """

    # Application library (the default library for asset and template lookup)
    app_name: str = "app"
    app_path: str | Path = "."
    app_webroot: str | Path | None = None  # Defaults to <app_path>/webroot

    # Deployment environment (None = read TERN_ENV, falling back to "development")
    environment: str | None = None
