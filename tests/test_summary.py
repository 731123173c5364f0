from __future__ import annotations

import math

import pandas as pd

from stock_tables.output.summary import (
    SPARK_BLOCKS,
    column_footer,
    column_footers,
    format_compact,
    sparkline,
)


def test_numeric_column_always_has_a_footer() -> None:
    footer = column_footer(pd.Series([1_000_000, 2_000_000, 3_000_000]))

    assert footer is not None
    assert footer.endswith("mean 2.0M")
    assert footer.startswith(SPARK_BLOCKS[0])


def test_non_numeric_column_has_no_footer() -> None:
    assert column_footer(pd.Series(["AAPL", "MSFT"])) is None
    assert column_footer(pd.Series(["2021-01-11", "2021-01-12"])) is None
    assert column_footer(pd.Series([True, False])) is None


def test_missing_values_are_ignored() -> None:
    footer = column_footer(pd.Series([math.nan, 0.01, 0.03]))

    assert footer.endswith("mean 0.0200")


def test_object_column_of_numbers_and_none_counts_as_numeric() -> None:
    assert column_footer(pd.Series([None, 0.5, 1.5], dtype=object)) is not None


def test_all_missing_numeric_column_still_gets_a_footer() -> None:
    assert column_footer(pd.Series([math.nan, math.nan])) == "no data"


def test_sparkline_scales_between_lowest_and_highest_block() -> None:
    line = sparkline([1, 2, 3, 4, 5, 6, 7, 8])

    assert line == SPARK_BLOCKS


def test_sparkline_of_flat_series_uses_middle_block() -> None:
    assert sparkline([5, 5, 5]) == SPARK_BLOCKS[4] * 3


def test_sparkline_buckets_long_series() -> None:
    assert len(sparkline(range(100), width=10)) == 10


def test_format_compact() -> None:
    assert format_compact(1_250_000) == "1.2M"
    assert format_compact(3_400) == "3.4K"
    assert format_compact(184.256) == "184.26"
    assert format_compact(-0.0123) == "-0.0123"


def test_footers_only_for_numeric_columns(stock_table) -> None:
    footers = column_footers(stock_table.frame())

    assert "symbol" not in footers
    assert "date" not in footers
    assert {"volume", "adjusted", "returns"} <= set(footers)


def test_footers_follow_requested_row_order() -> None:
    frame = pd.DataFrame(
        {
            "symbol": ["AAPL", "MSFT", "AAPL", "MSFT"],
            "date": ["2021-01-11", "2021-01-11", "2021-01-12", "2021-01-12"],
            "adjusted": [1.0, 10.0, 2.0, 9.0],
        }
    )

    footers = column_footers(frame, order_by=["symbol", "date"])

    assert footers["adjusted"].startswith("▁▂█▇")
    assert column_footers(frame)["adjusted"].startswith("▁█▂▇")
