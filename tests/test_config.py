from __future__ import annotations

from datetime import date
from pathlib import Path

import pytest

from stock_tables.core.config import AppConfig, ConfigLoader
from stock_tables.core.exceptions import ConfigError
from stock_tables.output.theme import get_theme


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(ConfigLoader, "DEFAULT_CONFIG_PATHS", [tmp_path / "config.yaml"])


def test_defaults() -> None:
    config = ConfigLoader().load()

    assert config.data.universe == "default"
    assert config.data.window_start == date(2024, 1, 2)
    assert config.data.start_date == date(2023, 1, 1)
    assert config.static_table.color_domain == (-0.05, 0.05)
    assert config.static_table.palette == ["red", "white", "green"]
    assert config.interactive_table.group_by == "symbol"
    assert config.interactive_table.theme is None


def test_yaml_file_and_variables(tmp_path, monkeypatch) -> None:
    monkeypatch.setenv("REPORT_TITLE", "January moves")
    path = tmp_path / "custom.yaml"
    path.write_text(
        "data:\n"
        "  symbols: [aapl, msft]\n"
        "  window_start: 2021-01-11\n"
        "  window_end: 2021-01-15\n"
        "static_table:\n"
        "  title: ${REPORT_TITLE}\n"
        "interactive_table:\n"
        "  title: ${data.window_start} returns\n"
        "  page_size: 25\n"
    )

    config = ConfigLoader(path).load()

    assert config.data.symbols == ["aapl", "msft"]
    assert config.data.window_end == date(2021, 1, 15)
    assert config.data.start_date == date(2021, 1, 11)
    assert config.static_table.title == "January moves"
    assert config.interactive_table.title == "2021-01-11 returns"
    assert config.interactive_table.page_size == 25


def test_cli_overrides_beat_file_and_skip_none(tmp_path) -> None:
    path = tmp_path / "config.yaml"
    path.write_text("data:\n  universe: faang\n  window_end: 2024-03-01\n")

    config = ConfigLoader(
        cli_overrides={"data": {"universe": "default", "window_end": None}},
    ).load()

    assert config.data.universe == "default"
    assert config.data.window_end == date(2024, 3, 1)


def test_inverted_window_is_a_config_error() -> None:
    overrides = {"data": {"window_start": "2024-02-01", "window_end": "2024-01-01"}}

    with pytest.raises(ConfigError):
        ConfigLoader(cli_overrides=overrides).load()


def test_bad_color_domain_is_a_config_error() -> None:
    with pytest.raises(ConfigError):
        ConfigLoader(cli_overrides={"static_table": {"color_domain": [0.05, -0.05]}}).load()


def test_missing_explicit_file_is_a_config_error(tmp_path) -> None:
    with pytest.raises(ConfigError):
        ConfigLoader(tmp_path / "absent.yaml").load()


def test_environment_variables_fill_nested_fields(monkeypatch) -> None:
    monkeypatch.setenv("STOCK_TABLES_DATA__UNIVERSE", "faang")

    config = AppConfig()

    assert config.data.universe == "faang"



def test_none_overrides_without_config_file_are_dropped() -> None:
    overrides = {
        "data": {
            "symbols": None,
            "universe": None,
            "start_date": None,
            "window_start": "2021-01-04",
            "window_end": "2021-01-05",
        },
        "interactive_table": {"theme": None},
    }

    config = ConfigLoader(cli_overrides=overrides).load()

    assert config.data.universe == "default"
    assert config.data.window_start == date(2021, 1, 4)
    assert config.interactive_table.theme is None


def test_explicit_start_after_window_is_a_config_error() -> None:
    overrides = {"data": {"start_date": "2024-03-01", "window_end": "2024-01-31"}}

    with pytest.raises(ConfigError):
        ConfigLoader(cli_overrides=overrides).load()


def test_merge_skips_none_at_every_level() -> None:
    merged = ConfigLoader._merge(
        {"static_table": {"title": "Kept"}},
        {"data": {"universe": None}, "static_table": {"title": None, "footnote": "New"}},
    )

    assert merged == {"static_table": {"title": "Kept", "footnote": "New"}}


def test_example_config_loads_and_its_theme_builds() -> None:
    example = Path(__file__).resolve().parent.parent / "config.example.yaml"

    config = ConfigLoader(example).load()

    assert config.interactive_table.theme == "dark"
    assert get_theme(config.interactive_table.theme) is not None
