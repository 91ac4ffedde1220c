"""Configuration loading and management."""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields, replace
from pathlib import Path
import tomllib

logger = logging.getLogger(__name__)


@dataclass
class TagdownConfig:
    """Configuration for converting and formatting tagged Markdown.

    Attributes:
        indent_unit: Characters used per nesting level by the beautifier.
        indent_spaces: Number of spaces per nesting level (alternative schema);
            overrides `indent_unit` when set.
        base_header_level: Header level emitted for top-level tags.
        max_header_level: Deepest header level the converter emits.
        escape_underscores: Whether underscores in tag and attribute names are
            escaped in generated headers.
        max_file_size: Maximum file size in bytes that will be processed.
        max_line_length: Maximum line length allowed when reading files.

    Examples:
        TagdownConfig(base_header_level=3, indent_spaces=4)
    """

    # Formatting
    indent_unit: str = "  "
    indent_spaces: int | None = None

    # Conversion
    base_header_level: int = 2
    max_header_level: int = 6
    escape_underscores: bool = True

    # Limits
    max_file_size: int = 10 * 1024 * 1024
    max_line_length: int = 10_000


class ConfigError(ValueError):
    """Exception raised when configuration values are invalid.

    Examples:
        raise ConfigError("`max_header_level` must be >= `base_header_level`")
    """


# Files searched in each directory, with the tables read from each.
CONFIG_SOURCES: tuple[tuple[str, tuple[tuple[str, ...], ...]], ...] = (
    ("pyproject.toml", (("tool", "tagdown"),)),
    (".tagdown.toml", (("tagdown",), ("tool", "tagdown"))),
)

_MISSING = object()


def load_config(search_path: Path) -> TagdownConfig:
    """Load configuration from the nearest config file.

    Walks from `search_path` up to the filesystem root. In each directory the
    ``[tool.tagdown]`` table of `pyproject.toml` wins over the ``[tagdown]``
    or ``[tool.tagdown]`` table of `.tagdown.toml`. Files that cannot be read
    or decoded are skipped, and defaults apply when nothing is found.

    Args:
        search_path: Directory used as the starting point for configuration lookup.

    Returns:
        TagdownConfig: Loaded configuration with defaults applied when necessary.

    Raises:
        ConfigError: If a tagdown table is present but not a mapping or
            contains unsupported keys.

    Examples:
        load_config(Path("docs"))
    """
    for directory in (search_path.resolve(), *search_path.resolve().parents):
        for filename, table_paths in CONFIG_SOURCES:
            config = _load_from_file(directory / filename, table_paths)
            if config is not None:
                logger.debug("Using configuration from %s", directory / filename)
                return normalize_config(config)

    return TagdownConfig()


def _load_from_file(
    config_file: Path, table_paths: tuple[tuple[str, ...], ...]
) -> TagdownConfig | None:
    if not config_file.is_file():
        return None

    try:
        with open(config_file, "rb") as stream:
            data = tomllib.load(stream)
    except (OSError, tomllib.TOMLDecodeError) as error:
        logger.debug("Skipping unreadable %s: %s", config_file, error)
        return None

    for table_path in table_paths:
        raw_config = _extract_table(data, table_path)
        if raw_config is not _MISSING:
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
) -> TagdownConfig:
    table_display = ".".join(table_path)

    if not isinstance(raw_config, dict):
        raise ConfigError(f"Invalid `[{table_display}]` settings in {config_file}")

    known = {field.name for field in fields(TagdownConfig)}
    unknown = sorted(set(raw_config) - known)
    if unknown:
        raise ConfigError(
            f"Invalid `[{table_display}]` settings in {config_file}: "
            f"unknown key(s) {', '.join(unknown)}"
        )

    return TagdownConfig(**raw_config)


def normalize_config(config: TagdownConfig) -> TagdownConfig:
    """Resolve `indent_spaces` into `indent_unit`."""
    if config.indent_spaces is None:
        return config

    _ensure_integers({"indent_spaces": config.indent_spaces})
    if config.indent_spaces <= 0:
        raise ConfigError("`indent_spaces` must be a positive integer")
    return replace(config, indent_unit=" " * config.indent_spaces)


def validate_config(config: TagdownConfig) -> None:
    """Validate a `TagdownConfig` instance.

    Args:
        config: Configuration to validate.

    Raises:
        ConfigError: If header levels are inconsistent, the indent unit is
            empty or not whitespace, or numeric limits are non-positive.

    Examples:
        validate_config(TagdownConfig(base_header_level=2, max_header_level=4))
    """
    config = normalize_config(config)

    _ensure_integers(
        {
            "base_header_level": config.base_header_level,
            "max_header_level": config.max_header_level,
            "max_file_size": config.max_file_size,
            "max_line_length": config.max_line_length,
        }
    )

    if config.base_header_level < 1:
        raise ConfigError("`base_header_level` must be >= 1")
    if config.max_header_level < config.base_header_level:
        raise ConfigError("`max_header_level` must be >= `base_header_level`")
    if config.max_header_level > 6:
        raise ConfigError("`max_header_level` must be <= 6")

    if not isinstance(config.indent_unit, str) or not config.indent_unit:
        raise ConfigError("`indent_unit` must not be empty")
    if config.indent_unit.strip(" \t"):
        raise ConfigError("`indent_unit` must contain only spaces or tabs")
    if not isinstance(config.escape_underscores, bool):
        raise ConfigError("`escape_underscores` must be a boolean")

    _ensure_positive(
        {
            "max_file_size": config.max_file_size,
            "max_line_length": config.max_line_length,
        }
    )


def apply_overrides(config: TagdownConfig, **overrides: object) -> TagdownConfig:
    """Apply override values to a `TagdownConfig`.

    Args:
        config: Base configuration to update.
        overrides: Override values keyed by configuration field name; values set to
            None are ignored.

    Returns:
        TagdownConfig: New configuration with the provided overrides applied. The
        original configuration is returned when no changes are supplied.

    Raises:
        TypeError: If an override name is not defined on `TagdownConfig`.
    """
    changes = {key: value for key, value in overrides.items() if value is not None}
    if "indent_unit" in changes and "indent_spaces" not in changes:
        changes["indent_spaces"] = None
    if not changes:
        return config
    return replace(config, **changes)


def build_config(search_path: Path, **overrides: object) -> TagdownConfig:
    """Load, override, and validate configuration.

    Args:
        search_path: Directory where configuration files are resolved.
        overrides: Override values keyed by configuration attributes; None values
            are ignored.

    Returns:
        TagdownConfig: Validated configuration.

    Raises:
        ConfigError: If configuration loading or validation fails.

    Examples:
        config = build_config(Path.cwd(), base_header_level=3)
    """
    config = load_config(search_path)
    config = apply_overrides(config, **overrides)
    config = normalize_config(config)
    validate_config(config)
    return config


def _ensure_positive(values: dict[str, int]) -> None:
    for key, value in values.items():
        if value <= 0:
            raise ConfigError(f"`{key}` must be a positive integer")


def _ensure_integers(values: dict[str, object]) -> None:
    for key, value in values.items():
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConfigError(f"`{key}` must be an integer")
