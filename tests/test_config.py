from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from md_to_html.config import (
    ConfigError,
    ConverterConfig,
    apply_overrides,
    build_config,
    load_config,
    validate_config,
)


def _write_pyproject(base: Path, body: str) -> Path:
    path = base / "pyproject.toml"
    path.write_text(textwrap.dedent(body).lstrip(), encoding="utf-8")
    return path


def _write_dotfile(base: Path, body: str) -> Path:
    path = base / ".md-to-html.toml"
    path.write_text(textwrap.dedent(body).lstrip(), encoding="utf-8")
    return path


def test_defaults_when_no_config(tmp_path: Path):
    assert load_config(tmp_path) == ConverterConfig()


def test_loads_config_from_pyproject(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.md-to-html]
        strict_links = false
        skip_malformed = false
        output_suffix = ".htm"
        max_file_size = 1
        max_line_length = 2
        """,
    )

    config = load_config(tmp_path)

    assert config == ConverterConfig(
        strict_links=False,
        skip_malformed=False,
        output_suffix=".htm",
        max_file_size=1,
        max_line_length=2,
    )


def test_loads_config_from_dotfile(tmp_path: Path):
    _write_dotfile(
        tmp_path,
        """
        [md-to-html]
        output_suffix = ".xhtml"
        """,
    )

    assert load_config(tmp_path).output_suffix == ".xhtml"


def test_dotfile_accepts_tool_table(tmp_path: Path):
    _write_dotfile(
        tmp_path,
        """
        [tool.md-to-html]
        strict_links = false
        """,
    )

    assert load_config(tmp_path).strict_links is False


def test_load_config_walks_up_directories(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.md-to-html]
        max_line_length = 80
        """,
    )
    nested = tmp_path / "docs" / "guides"
    nested.mkdir(parents=True)

    assert load_config(nested).max_line_length == 80


def test_pyproject_without_table_falls_through_to_dotfile(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.other]
        value = 1
        """,
    )
    _write_dotfile(
        tmp_path,
        """
        [md-to-html]
        strict_links = false
        """,
    )

    assert load_config(tmp_path).strict_links is False


def test_invalid_toml_is_skipped(tmp_path: Path):
    (tmp_path / "pyproject.toml").write_text("[tool.md-to-html\n", encoding="utf-8")

    assert load_config(tmp_path) == ConverterConfig()


def test_unknown_keys_raise(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.md-to-html]
        clamp_levels = true
        """,
    )

    with pytest.raises(ConfigError, match="tool.md-to-html"):
        load_config(tmp_path)


def test_non_table_raises(tmp_path: Path):
    _write_dotfile(tmp_path, 'md-to-html = "yes"\n')

    with pytest.raises(ConfigError):
        load_config(tmp_path)


@pytest.mark.parametrize(
    "config",
    [
        ConverterConfig(strict_links="yes"),
        ConverterConfig(skip_malformed=1),
        ConverterConfig(output_suffix="html"),
        ConverterConfig(output_suffix="."),
        ConverterConfig(output_suffix="./x"),
        ConverterConfig(max_file_size=0),
        ConverterConfig(max_line_length=-1),
        ConverterConfig(max_line_length=True),
        ConverterConfig(max_file_size="10"),
    ],
)
def test_validate_config_rejects_invalid_values(config: ConverterConfig):
    with pytest.raises(ConfigError):
        validate_config(config)


def test_validate_config_accepts_defaults():
    validate_config(ConverterConfig())


def test_apply_overrides_ignores_none():
    config = ConverterConfig()

    assert apply_overrides(config, strict_links=None) is config
    assert apply_overrides(config, strict_links=False).strict_links is False


def test_build_config_applies_overrides_over_file(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.md-to-html]
        strict_links = false
        max_line_length = 40
        """,
    )

    config = build_config(tmp_path, strict_links=True, skip_malformed=None)

    assert config.strict_links is True
    assert config.max_line_length == 40


def test_build_config_validates(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.md-to-html]
        output_suffix = "html"
        """,
    )

    with pytest.raises(ConfigError):
        build_config(tmp_path)
