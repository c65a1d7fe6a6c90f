"""Environment resolution for the database configuration.

The process environment and an optional ``.env`` file are merged into a single
read-only mapping. Variables already present in the process environment always
win over values defined in the file; the file only fills gaps.

Loading never mutates ``os.environ``, so callers (and tests) can resolve a
synthetic environment without side effects.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType

import structlog
from dotenv import dotenv_values

logger = structlog.get_logger()

DEFAULT_ENV_FILENAME = ".env"


def default_env_file() -> Path:
    """Return the well-known ``.env`` location under the current working directory."""

    return Path.cwd() / DEFAULT_ENV_FILENAME


@dataclass(frozen=True)
class EnvironmentSnapshot:
    """Result of resolving the ambient environment together with a ``.env`` file."""

    values: Mapping[str, str]
    ambient: Mapping[str, str]
    file_values: Mapping[str, str] = field(default_factory=dict)
    env_file: Path | None = None
    file_error: str | None = None

    @property
    def loaded_file(self) -> bool:
        """Whether the environment file was read successfully."""

        return self.env_file is not None and self.file_error is None

    def get(self, key: str, default: str | None = None) -> str | None:
        """Return the resolved value of ``key``, or ``default`` if it is not set."""

        return self.values.get(key, default)

    def in_ambient(self, key: str) -> bool:
        """Whether ``key`` is set to a non-blank value in the ambient environment."""

        value = self.ambient.get(key)
        return value is not None and value.strip() != ""


def _read_env_file(path: Path) -> tuple[dict[str, str], str | None]:
    if not path.exists():
        return {}, f"{path} does not exist"
    if not path.is_file():
        return {}, f"{path} is not a regular file"

    try:
        raw = dotenv_values(path, encoding="utf-8", interpolate=False)
    except (OSError, UnicodeDecodeError) as e:
        return {}, f"{path} could not be read: {e}"

    # Bare keys without "=" parse as None; they define nothing.
    return {k: v for k, v in raw.items() if v is not None}, None


def load_environment(
    env_file: Path | str | None = None,
    environ: Mapping[str, str] | None = None,
) -> EnvironmentSnapshot:
    """Resolve the effective environment.

    Args:
        env_file: Path to the environment file. Defaults to ``<cwd>/.env``.
        environ: Ambient environment. Defaults to ``os.environ``.

    Returns:
        EnvironmentSnapshot: The merged, read-only view. Ambient values take
        precedence over values from the file.
    """

    path = Path(env_file) if env_file is not None else default_env_file()
    ambient = dict(os.environ if environ is None else environ)

    file_values, file_error = _read_env_file(path)
    if file_error is None:
        logger.debug("env_file_loaded", path=str(path), variable_count=len(file_values))

    merged = {**file_values, **ambient}

    return EnvironmentSnapshot(
        values=MappingProxyType(merged),
        ambient=MappingProxyType(ambient),
        file_values=MappingProxyType(file_values),
        env_file=path,
        file_error=file_error,
    )
