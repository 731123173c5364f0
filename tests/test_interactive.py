from __future__ import annotations

import math
from datetime import date
from types import SimpleNamespace

import pytest
from reactable import Reactable, Theme

from stock_tables.core.config import InteractiveTableConfig
from stock_tables.core.exceptions import ValidationError
from stock_tables.output.interactive import InteractiveTableRenderer, RowDetails, describe_row
from stock_tables.output.summary import column_footer
from stock_tables.output.theme import THEMES, get_theme, theme_names


def test_describe_row_rounds_price_and_scales_return() -> None:
    sentence = describe_row("AAPL", date(2021, 1, 11), 102.004, 0.02)

    assert sentence == (
        "On January 11, 2021, AAPL closed at an adjusted price of $102.00, "
        "a daily return of 2.00%."
    )


def test_describe_row_without_prior_day() -> None:
    for missing in (None, math.nan):
        sentence = describe_row("MSFT", date(2021, 1, 4), 200.0, missing)
        assert sentence.endswith("with no prior trading day to compute a return.")


def test_row_details_follow_table_order(stock_table) -> None:
    details = InteractiveTableRenderer().row_details(stock_table)

    assert len(details.sentences) == len(stock_table)
    assert details(0).startswith("On January 11, 2021, AAPL")
    assert details(1).startswith("On January 11, 2021, MSFT")
    assert details(SimpleNamespace(row_index=1)) == details(1)


def test_row_details_accepts_plain_index() -> None:
    assert RowDetails(["a", "b"])(1) == "b"


def test_build_returns_reactable(stock_table) -> None:
    table = InteractiveTableRenderer().build(stock_table)

    assert isinstance(table, Reactable)


def test_build_with_theme_and_without_extras(stock_table) -> None:
    config = InteractiveTableConfig(
        theme="dark", details=False, footers=False, group_by=None, pagination=False
    )

    table = InteractiveTableRenderer(config).build(stock_table)

    assert isinstance(table, Reactable)


def test_build_leaves_table_untouched(stock_table) -> None:
    before = stock_table.fingerprint()

    InteractiveTableRenderer().build(stock_table)

    assert stock_table.fingerprint() == before


def test_prepared_frame_keeps_configured_columns(stock_table) -> None:
    frame = InteractiveTableRenderer()._prepare(stock_table)

    assert list(frame.columns) == ["symbol", "date", "adjusted", "returns", "volume"]
    assert frame["date"].iloc[0] == "2021-01-11"


def test_theme_presets() -> None:
    assert theme_names() == ["dark", "light"]
    assert get_theme(None) is None
    for preset in THEMES.values():
        assert {"background_color", "border_color", "striped_color", "highlight_color", "input_style"} <= set(preset)


@pytest.mark.parametrize("name", ["light", "dark", "Dark"])
def test_every_theme_preset_builds(name) -> None:
    assert isinstance(get_theme(name), Theme)


def test_dark_theme_uses_dashboard_palette() -> None:
    assert THEMES["dark"]["background_color"] == "#0e1117"
    assert THEMES["dark"]["striped_color"] == "#1a1f2e"


def test_unknown_theme_is_rejected() -> None:
    with pytest.raises(ValidationError):
        get_theme("neon")


def test_broken_theme_preset_is_a_validation_error(monkeypatch) -> None:
    monkeypatch.setitem(THEMES, "broken", {"no_such_option": "#000000"})

    with pytest.raises(ValidationError):
        get_theme("broken")


def test_render_with_dark_theme(stock_table) -> None:
    html = InteractiveTableRenderer(InteractiveTableConfig(theme="dark")).render(stock_table)

    assert "#0e1117" in html


def test_rendered_page_carries_detail_sentences(stock_table) -> None:
    html = InteractiveTableRenderer().render(stock_table)

    assert "AAPL closed at an adjusted price of $106.00" in html
    assert "Daily stock returns" in html


def test_volume_column_has_footer_and_symbol_has_none(stock_table) -> None:
    renderer = InteractiveTableRenderer()
    frame = renderer._prepare(stock_table)

    columns = {c.id: c for c in renderer._columns(frame, renderer.footers(frame))}

    assert columns["symbol"].footer is None
    assert columns["date"].footer is None
    assert "mean" in columns["volume"].footer
    assert columns["volume"].aggregate == "sum"


def test_footer_sparklines_run_per_symbol(stock_table) -> None:
    renderer = InteractiveTableRenderer()
    frame = renderer._prepare(stock_table)
    by_symbol = frame.sort_values(["symbol", "date"])

    footers = renderer.footers(frame)

    assert footers["adjusted"] == column_footer(by_symbol["adjusted"])
    assert footers["adjusted"] != column_footer(frame["adjusted"])


def test_document_is_rendered_and_written_from_one_build(stock_table, tmp_path) -> None:
    renderer = InteractiveTableRenderer()
    document = renderer.document(stock_table)

    path = renderer.write(document, tmp_path / "interactive.html")

    assert path.exists()
    assert "AAPL closed at an adjusted price" in renderer.to_html(document)
