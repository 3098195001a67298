"""
Tests of `covid_ratio.normalisation`
"""

from __future__ import annotations

import re

import pandas as pd
import pytest

from covid_ratio.exceptions import MissingColumnsError
from covid_ratio.normalisation import normalise_global_table, normalise_us_table
from covid_ratio.testing import get_date_headers, get_raw_global_table, get_raw_us_table

DATES = get_date_headers("2020-03-01", 3)


def test_normalise_us_table():
    raw = get_raw_us_table(
        locations=[
            (84001001, "Autauga", "Alabama"),
            (84090001, "Unassigned", "Alabama"),
            (16, None, "American Samoa"),
            (84001003, "Baldwin", "Alabama"),
            (99999999, "Somewhere", "Elsewhere"),
        ],
        counts=[[1, 2, 3], [4, 5, 6], [7, 8, 9], [10, 11, 12], [13, 14, 15]],
        dates=DATES,
        countries=["US", "US", "US", "US", "Canada"],
    )

    res = normalise_us_table(raw)

    exp = pd.DataFrame(
        [[1, 2, 3], [10, 11, 12]],
        columns=DATES,
        index=pd.MultiIndex.from_tuples(
            [
                (84001001, "Autauga", "Alabama", "US"),
                (84001003, "Baldwin", "Alabama", "US"),
            ],
            names=["location", "county", "province_state", "country"],
        ),
    )

    pd.testing.assert_frame_equal(res, exp)


def test_normalise_us_table_keeps_population():
    raw = get_raw_us_table(
        locations=[(84001001, "Autauga", "Alabama")],
        counts=[[0, 0, 1]],
        dates=DATES,
        population=[55869],
    )

    res = normalise_us_table(raw)

    assert res.index.names == [
        "location",
        "county",
        "province_state",
        "country",
        "population",
    ]
    assert res.index.get_level_values("population").tolist() == [55869]
    assert res.columns.tolist() == DATES


def test_normalise_us_table_custom_exclusion():
    raw = get_raw_us_table(
        locations=[
            (84001001, "Autauga", "Alabama"),
            (84001003, "Baldwin", "Alabama"),
        ],
        counts=[[1, 2, 3], [4, 5, 6]],
        dates=DATES,
    )

    res = normalise_us_table(raw, excluded_county="Baldwin")

    assert res.index.get_level_values("county").tolist() == ["Autauga"]


def test_normalise_global_table():
    raw = get_raw_global_table(
        locations=[
            (None, "Afghanistan"),
            ("Alberta", "Canada"),
            (None, "Antarctica"),
            ("Ontario", "Canada"),
            (None, "Korea, North"),
        ],
        counts=[[1, 2, 3], [4, 5, 6], [7, 8, 9], [10, 11, 12], [13, 14, 15]],
        dates=DATES,
    )

    res = normalise_global_table(raw)

    exp = pd.DataFrame(
        [[1, 2, 3], [4, 5, 6], [10, 11, 12]],
        columns=DATES,
        index=pd.MultiIndex.from_tuples(
            [
                ("Afghanistan|", "", "Afghanistan"),
                ("Canada|Alberta", "Alberta", "Canada"),
                ("Canada|Ontario", "Ontario", "Canada"),
            ],
            names=["location", "province_state", "country"],
        ),
    )

    pd.testing.assert_frame_equal(res, exp)


def test_normalise_global_table_custom_separator_and_exclusions():
    raw = get_raw_global_table(
        locations=[("Alberta", "Canada"), (None, "Antarctica")],
        counts=[[4, 5, 6], [7, 8, 9]],
        dates=DATES,
    )

    res = normalise_global_table(
        raw, excluded_countries=["Canada"], level_separator=", "
    )

    assert res.index.get_level_values("location").tolist() == ["Antarctica, "]


@pytest.mark.parametrize(
    "normaliser, raw, missing",
    (
        pytest.param(
            normalise_us_table,
            get_raw_us_table(
                locations=[(84001001, "Autauga", "Alabama")],
                counts=[[1, 2, 3]],
                dates=DATES,
            ).drop(columns=["Admin2"]),
            "Admin2",
            id="us",
        ),
        pytest.param(
            normalise_global_table,
            get_raw_global_table(
                locations=[(None, "Afghanistan")],
                counts=[[1, 2, 3]],
                dates=DATES,
            ).drop(columns=["Country/Region"]),
            "Country/Region",
            id="global",
        ),
    ),
)
def test_missing_columns(normaliser, raw, missing):
    with pytest.raises(MissingColumnsError, match=re.escape(f"['{missing}']")):
        normaliser(raw)
