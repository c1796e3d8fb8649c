"""Configuration loading and management."""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from pathlib import Path
import tomllib

from pygments.styles import get_style_by_name
from pygments.util import ClassNotFound

from .constants import (
    CONFIG_DOTFILE,
    CONFIG_TABLE,
    DEFAULT_BULLET_MARKER,
    DEFAULT_DARK_CODE_STYLE,
    DEFAULT_LIGHT_CODE_STYLE,
    DEFAULT_MAX_FILE_SIZE,
)


@dataclass(frozen=True)
class RenderConfig:
    """Configuration for rendering Markdown into styled documents.

    Attributes:
        dark_mode: Default color mode when the caller does not choose one.
        bullet_marker: Prefix inserted at the start of every list item.
        dark_code_style: Pygments style used to color code on dark backgrounds.
        light_code_style: Pygments style used to color code on light backgrounds.
        max_file_size: Maximum file size in bytes that will be loaded.

    Examples:
        RenderConfig(dark_mode=True, bullet_marker="- ")
    """

    dark_mode: bool = False
    bullet_marker: str = DEFAULT_BULLET_MARKER

    # Code highlighting
    dark_code_style: str = DEFAULT_DARK_CODE_STYLE
    light_code_style: str = DEFAULT_LIGHT_CODE_STYLE

    # Limits
    max_file_size: int = DEFAULT_MAX_FILE_SIZE

    def code_style(self, dark: bool) -> str:
        """Return the code style name for the given color mode."""
        return self.dark_code_style if dark else self.light_code_style


class ConfigError(ValueError):
    """Exception raised when configuration values are invalid.

    Examples:
        raise ConfigError("`max_file_size` must be a positive integer")
    """


def load_config(search_path: Path) -> RenderConfig:
    """Load configuration from the nearest config file.

    Walks parent directories from `search_path` to the filesystem root, reading
    the ``[tool.styled-markdown]`` table from `pyproject.toml` and the
    ``[styled-markdown]`` or ``[tool.styled-markdown]`` table from
    `.styled-markdown.toml` when present. Returns default values when no
    configuration is found. TOML files that cannot be read or decoded are
    skipped.

    Args:
        search_path: Directory used as the starting point for configuration lookup.

    Returns:
        RenderConfig: Loaded configuration with defaults applied when necessary.

    Raises:
        ConfigError: If the table is present but not a mapping or contains
            unsupported keys.

    Examples:
        load_config(Path("docs"))
    """
    current = search_path.resolve()

    while True:
        pyproject_config = _load_from_file(
            current / "pyproject.toml", table_paths=[("tool", CONFIG_TABLE)]
        )
        if pyproject_config is not None:
            return pyproject_config

        dotfile_config = _load_from_file(
            current / CONFIG_DOTFILE,
            table_paths=[(CONFIG_TABLE,), ("tool", CONFIG_TABLE)],
        )
        if dotfile_config is not None:
            return dotfile_config

        parent = current.parent
        if parent == current:
            break
        current = parent

    return RenderConfig()


_MISSING = object()


def _load_from_file(
    config_file: Path, table_paths: list[tuple[str, ...]]
) -> RenderConfig | None:
    if not config_file.exists():
        return None

    try:
        with open(config_file, "rb") as stream:
            data = tomllib.load(stream)
    except (OSError, tomllib.TOMLDecodeError):
        return None

    for table_path in table_paths:
        raw_config = _extract_table(data, table_path)
        if raw_config is _MISSING:
            continue
        return _build_config_from_raw(raw_config, config_file, table_path)

    return None


def _extract_table(data: object, table_path: tuple[str, ...]) -> object:
    current = data
    for key in table_path:
        if not isinstance(current, dict) or key not in current:
            return _MISSING
        current = current[key]
    return current


def _build_config_from_raw(
    raw_config: object, config_file: Path, table_path: tuple[str, ...]
) -> RenderConfig:
    table_display = ".".join(table_path)

    if raw_config is None or raw_config == {}:
        return RenderConfig()

    if not isinstance(raw_config, dict):
        raise ConfigError(f"Invalid `[{table_display}]` settings in {config_file}")

    unknown_keys = sorted(set(raw_config) - {field.name for field in fields(RenderConfig)})
    if unknown_keys:
        raise ConfigError(
            f"Unknown `[{table_display}]` settings in {config_file}: {', '.join(unknown_keys)}"
        )

    return RenderConfig(**raw_config)


def validate_config(config: RenderConfig) -> None:
    """Validate a `RenderConfig` instance.

    Args:
        config: Configuration to validate.

    Returns:
        None.

    Raises:
        ConfigError: If a field has the wrong type, the size limit is not
            positive, or a code style is not known to Pygments.

    Examples:
        validate_config(RenderConfig(dark_code_style="native"))
    """
    if not isinstance(config.dark_mode, bool):
        raise ConfigError("`dark_mode` must be a boolean")
    if not isinstance(config.bullet_marker, str):
        raise ConfigError("`bullet_marker` must be a string")

    if isinstance(config.max_file_size, bool) or not isinstance(config.max_file_size, int):
        raise ConfigError("`max_file_size` must be an integer")
    if config.max_file_size <= 0:
        raise ConfigError("`max_file_size` must be a positive integer")

    for key in ("dark_code_style", "light_code_style"):
        style_name = getattr(config, key)
        if not isinstance(style_name, str) or not style_name:
            raise ConfigError(f"`{key}` must be a non-empty string")
        try:
            get_style_by_name(style_name)
        except ClassNotFound as error:
            raise ConfigError(f"`{key}` names an unknown style: {style_name}") from error


def apply_overrides(config: RenderConfig, **overrides: object) -> RenderConfig:
    """Apply override values to a `RenderConfig`.

    Args:
        config: Base configuration to update.
        overrides: Override values keyed by configuration field name; values set to
            None are ignored.

    Returns:
        RenderConfig: New configuration with the provided overrides applied. The
        original configuration is returned when no changes are supplied.

    Raises:
        TypeError: If an override name is not defined on `RenderConfig`.

    Examples:
        updated = apply_overrides(config, dark_mode=True)
    """
    changes = {key: value for key, value in overrides.items() if value is not None}
    if not changes:
        return config
    return replace(config, **changes)


def build_config(search_path: Path, **overrides: object) -> RenderConfig:
    """Load, override, and validate configuration.

    Args:
        search_path: Directory where configuration files are resolved.
        overrides: Override values keyed by configuration attributes; None values
            are ignored.

    Returns:
        RenderConfig: Validated configuration ready for rendering.

    Raises:
        ConfigError: If configuration loading or validation fails.

    Examples:
        config = build_config(Path.cwd(), dark_mode=True)
    """
    config = load_config(search_path)
    config = apply_overrides(config, **overrides)
    validate_config(config)
    return config
