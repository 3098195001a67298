"""
Tests of `covid_ratio.reshaping`
"""

from __future__ import annotations

import re
from contextlib import nullcontext as does_not_raise

import pandas as pd
import pytest

from covid_ratio.exceptions import UnparseableDateColumnError
from covid_ratio.normalisation import normalise_global_table
from covid_ratio.reshaping import long_to_wide, parse_date_columns, wide_to_long
from covid_ratio.testing import (
    get_date_headers,
    get_random_cumulative_counts,
    get_raw_global_table,
)


@pytest.mark.parametrize(
    "columns, exp",
    (
        pytest.param(["1/22/20", "1/23/20"], does_not_raise(), id="valid"),
        pytest.param(["12/31/20", "1/1/21"], does_not_raise(), id="year-boundary"),
        pytest.param(
            ["1/22/20", "Population"],
            pytest.raises(
                UnparseableDateColumnError,
                match=re.escape(
                    "Could not parse column 'Population' as a date "
                    "with format '%m/%d/%y'"
                ),
            ),
            id="not-a-date",
        ),
        pytest.param(
            ["1/22/20", "13/1/20"],
            pytest.raises(UnparseableDateColumnError, match="13/1/20"),
            id="invalid-month",
        ),
    ),
)
def test_parse_date_columns(columns, exp):
    wide = pd.DataFrame([[1] * len(columns)], columns=columns)

    with exp:
        res = parse_date_columns(wide)

        assert isinstance(res.columns, pd.DatetimeIndex)
        assert res.columns.name == "date"


def test_wide_to_long_malformed_header_aborts():
    wide = pd.DataFrame(
        [[1, 2]],
        columns=["1/22/20", "not a date"],
        index=pd.Index(["l1"], name="location"),
    )

    with pytest.raises(UnparseableDateColumnError):
        wide_to_long(wide, value_name="confirmed")


def test_wide_to_long_basic():
    wide = pd.DataFrame(
        [[1, 2], [10, 20]],
        columns=["3/1/20", "3/2/20"],
        index=pd.MultiIndex.from_tuples(
            [("l1", "c1"), ("l2", "c2")], names=["location", "country"]
        ),
    )

    res = wide_to_long(wide, value_name="confirmed")

    assert res.index.names == ["location", "country", "date"]
    assert res.columns.tolist() == ["confirmed"]
    assert res.loc[("l1", "c1", pd.Timestamp("2020-03-02")), "confirmed"] == 2
    assert res.loc[("l2", "c2", pd.Timestamp("2020-03-01")), "confirmed"] == 10


@pytest.mark.parametrize("n_locations, n_dates", ((1, 1), (3, 10), (8, 45)))
def test_wide_to_long_round_trip(n_locations, n_dates):
    dates = get_date_headers("2020-01-22", n_dates)
    raw = get_raw_global_table(
        locations=[(f"p{i}", f"c{i}") for i in range(n_locations)],
        counts=get_random_cumulative_counts(n_locations, n_dates),
        dates=dates,
    )
    wide = normalise_global_table(raw)

    long = wide_to_long(wide, value_name="confirmed")

    assert long.shape[0] == n_locations * n_dates
    # Every identifying level is repeated on every row
    assert long.index.droplevel("date").unique().equals(wide.index.unique())

    res = long_to_wide(long, value_name="confirmed")
    pd.testing.assert_frame_equal(
        res.sort_index(), parse_date_columns(wide).sort_index()
    )
