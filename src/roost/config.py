"""Application configuration.

AppConfig is a frozen dataclass — immutable after creation, IDE-autocompletable,
no string-key dict lookups.
"""

import os
from dataclasses import dataclass, field, fields
from pathlib import Path

from roost.errors import ConfigurationError
from roost.middleware.access_control import AccessControlConfig

DEVELOPMENT = "development"


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = AppConfig(port=3000, version="development")
    """

    # Server
    host: str = "127.0.0.1"
    port: int = 8000
    debug: bool = False
    workers: int = 1
    log_level: str = "info"

    # Timeouts (seconds)
    idle_timeout: int = 60
    read_timeout: int = 30
    write_timeout: int = 30

    # Application assets. "development" serves app_directory from disk;
    # any other version serves the copy bundled inside app_package.
    version: str = ""
    app_directory: str | Path = "app"
    app_package: str | None = None
    static_prefix: str = "/static"

    # CORS headers stamped on every response by the presets
    access_control: AccessControlConfig = field(default_factory=AccessControlConfig)

    @property
    def is_development(self) -> bool:
        return self.version == DEVELOPMENT

    @classmethod
    def from_env(cls, prefix: str = "ROOST_", **overrides: object) -> "AppConfig":
        """Build a config from ``{prefix}{FIELD}`` environment variables.

        Only scalar fields are read (``ROOST_PORT=3000``,
        ``ROOST_VERSION=development``). Keyword *overrides* win over the
        environment. Raises ``ConfigurationError`` for values that do not
        parse.
        """
        values: dict[str, object] = {}
        for f in fields(cls):
            if f.name == "access_control":
                continue
            raw = os.environ.get(f"{prefix}{f.name.upper()}")
            if raw is None:
                continue
            values[f.name] = _parse_env_value(f.name, f.type, raw)
        values.update(overrides)
        return cls(**values)  # type: ignore[arg-type]


def _parse_env_value(name: str, annotation: object, raw: str) -> object:
    type_name = annotation if isinstance(annotation, str) else getattr(annotation, "__name__", "")
    if type_name == "bool":
        return raw.strip().lower() in ("1", "true", "yes", "on")
    if type_name == "int":
        try:
            return int(raw)
        except ValueError as exc:
            msg = f"Environment value for {name!r} must be an integer, got {raw!r}"
            raise ConfigurationError(msg) from exc
    return raw
