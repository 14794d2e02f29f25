"""Typed configuration loading for binpack.toml.

The file is optional and lives at the project root. Every key has a default
and every key can be overridden from the command line.

    builder = "mytool"
    prefix = "@acme"
    description = "My tool, packaged for npm"
    files = ["README.md", "LICENSE"]
    keywords = ["cli"]

    [paths]
    dist = "dist"
    artifacts = "dist/artifacts.json"
    metadata = "dist/metadata.json"
    npm = "dist/npm"
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_str, get_str_list, get_table

__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "PackConfig",
    "PathsConfig",
    "load_config",
    "load_config_or_default",
]

CONFIG_FILENAME = "binpack.toml"

DEFAULT_DIST_DIR = "dist"
DEFAULT_ARTIFACTS_PATH = "dist/artifacts.json"
DEFAULT_METADATA_PATH = "dist/metadata.json"
DEFAULT_NPM_DIR = "dist/npm"


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded or parsed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class PathsConfig:
    """Paths relative to the project root."""

    dist: str = DEFAULT_DIST_DIR
    artifacts: str = DEFAULT_ARTIFACTS_PATH
    metadata: str = DEFAULT_METADATA_PATH
    npm: str = DEFAULT_NPM_DIR


@dataclass(frozen=True, slots=True)
class PackConfig:
    """Main configuration container."""

    builder: str | None = None
    prefix: str | None = None
    description: str | None = None
    files: tuple[str, ...] = ()
    keywords: tuple[str, ...] = ()
    paths: PathsConfig = field(default_factory=PathsConfig)

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> PackConfig:
        """Create PackConfig from a mapping (parsed TOML)."""
        paths: StrDict = get_table(data, "paths") or {}

        return cls(
            builder=get_str(data, "builder"),
            prefix=get_str(data, "prefix"),
            description=get_str(data, "description"),
            files=tuple(get_str_list(data, "files") or ()),
            keywords=tuple(get_str_list(data, "keywords") or ()),
            paths=PathsConfig(
                dist=get_str(paths, "dist") or DEFAULT_DIST_DIR,
                artifacts=get_str(paths, "artifacts") or DEFAULT_ARTIFACTS_PATH,
                metadata=get_str(paths, "metadata") or DEFAULT_METADATA_PATH,
                npm=get_str(paths, "npm") or DEFAULT_NPM_DIR,
            ),
        )


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    import tomllib

    try:
        content = path.read_bytes()
        data_obj: object = tomllib.loads(content.decode("utf-8"))
        data = as_str_dict(data_obj)
        if data is None:
            return Err(ConfigError("Config root must be a TOML table", path=path))
        return Ok(data)
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))


def load_config(path: Path) -> Result[PackConfig, ConfigError]:
    """Load and parse configuration from a TOML file.

    Args:
        path: Path to binpack.toml

    Returns:
        Ok(PackConfig) on success, Err(ConfigError) on failure
    """
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    try:
        return Ok(PackConfig.from_dict(result.value))
    except (KeyError, TypeError, ValueError) as e:
        return Err(ConfigError(f"Invalid config structure: {e}", path=path))


def load_config_or_default(path: Path) -> Result[PackConfig, ConfigError]:
    """Load config if the file exists, otherwise return defaults.

    A present-but-broken file is still an error.
    """
    if not path.exists():
        return Ok(PackConfig())
    return load_config(path)
