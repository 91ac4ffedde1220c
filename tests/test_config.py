from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from tagdown.config import (
    ConfigError,
    TagdownConfig,
    apply_overrides,
    build_config,
    load_config,
    normalize_config,
    validate_config,
)


def _write_pyproject(base: Path, body: str) -> Path:
    path = base / "pyproject.toml"
    path.write_text(textwrap.dedent(body).lstrip(), encoding="utf-8")
    return path


def _write_dotfile(base: Path, body: str) -> Path:
    path = base / ".tagdown.toml"
    path.write_text(textwrap.dedent(body).lstrip(), encoding="utf-8")
    return path


def test_loads_config_from_pyproject(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.tagdown]
        indent_unit = "\\t"
        base_header_level = 3
        max_header_level = 5
        escape_underscores = false
        max_file_size = 1
        max_line_length = 2
        """,
    )

    config = load_config(tmp_path)

    assert config == TagdownConfig(
        indent_unit="\t",
        base_header_level=3,
        max_header_level=5,
        escape_underscores=False,
        max_file_size=1,
        max_line_length=2,
    )


def test_loads_config_from_dotfile(tmp_path: Path):
    _write_dotfile(
        tmp_path,
        """
        [tagdown]
        base_header_level = 1
        """,
    )
    nested = tmp_path / "child"
    nested.mkdir()

    config = load_config(nested)

    assert config.base_header_level == 1


def test_load_config_walks_up_directories(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.tagdown]
        max_header_level = 4
        """,
    )
    nested = tmp_path / "a" / "b" / "c"
    nested.mkdir(parents=True)

    assert load_config(nested).max_header_level == 4


def test_empty_config_table_stops_inheritance(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.tagdown]
        max_header_level = 4
        """,
    )
    child = tmp_path / "child"
    child.mkdir()
    _write_pyproject(
        child,
        """
        [tool.tagdown]
        """,
    )

    assert load_config(child) == TagdownConfig()


def test_load_config_returns_defaults_when_missing(tmp_path: Path):
    assert load_config(tmp_path) == TagdownConfig()


def test_load_config_skips_invalid_toml(tmp_path: Path):
    invalid_dir = tmp_path / "invalid"
    invalid_dir.mkdir()
    _write_pyproject(invalid_dir, "not = {valid")
    _write_pyproject(
        tmp_path,
        """
        [tool.tagdown]
        base_header_level = 3
        """,
    )

    nested = invalid_dir / "child"
    nested.mkdir()

    assert load_config(nested).base_header_level == 3


def test_load_config_errors_on_unknown_keys(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.tagdown]
        base_header_level = 2
        unexpected = true
        """,
    )

    with pytest.raises(ConfigError, match=r"unknown key\(s\) unexpected"):
        load_config(tmp_path)


def test_load_config_errors_on_non_table(tmp_path: Path):
    _write_dotfile(tmp_path, 'tagdown = "yes"\n')

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_indent_spaces_sets_indent_unit(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.tagdown]
        indent_spaces = 4
        """,
    )

    config = load_config(tmp_path)

    assert config.indent_spaces == 4
    assert config.indent_unit == "    "


def test_normalize_config_rejects_bad_indent_spaces():
    with pytest.raises(ConfigError):
        normalize_config(TagdownConfig(indent_spaces=0))


def test_apply_overrides_ignores_none():
    config = TagdownConfig()

    assert apply_overrides(config, base_header_level=None) is config
    assert apply_overrides(config, base_header_level=3).base_header_level == 3


def test_apply_overrides_indent_unit_clears_indent_spaces():
    config = apply_overrides(TagdownConfig(indent_spaces=4), indent_unit="\t")

    assert config.indent_spaces is None
    assert normalize_config(config).indent_unit == "\t"


def test_build_config_applies_overrides(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.tagdown]
        base_header_level = 3
        """,
    )

    config = build_config(tmp_path, indent_spaces=3, escape_underscores=False)

    assert config.base_header_level == 3
    assert config.indent_unit == "   "
    assert config.escape_underscores is False


def test_build_config_validates(tmp_path: Path):
    with pytest.raises(ConfigError):
        build_config(tmp_path, base_header_level=5, max_header_level=4)


@pytest.mark.parametrize(
    "config",
    [
        TagdownConfig(base_header_level=0),
        TagdownConfig(base_header_level=4, max_header_level=3),
        TagdownConfig(max_header_level=7),
        TagdownConfig(indent_unit=""),
        TagdownConfig(indent_unit="--"),
        TagdownConfig(escape_underscores="yes"),  # type: ignore[arg-type]
        TagdownConfig(max_file_size=0),
        TagdownConfig(max_line_length=-1),
    ],
)
def test_validate_config_rejects_invalid_values(config: TagdownConfig):
    with pytest.raises(ConfigError):
        validate_config(config)


@pytest.mark.parametrize(
    "config",
    [
        TagdownConfig(max_file_size="big"),  # type: ignore[arg-type]
        TagdownConfig(max_line_length="long"),  # type: ignore[arg-type]
        TagdownConfig(base_header_level="2"),  # type: ignore[arg-type]
        TagdownConfig(max_header_level=True),  # type: ignore[arg-type]
    ],
)
def test_validate_config_rejects_non_numeric_values(config: TagdownConfig):
    with pytest.raises(ConfigError):
        validate_config(config)
