"""
Tests of `covid_ratio.joining`
"""

from __future__ import annotations

import numpy as np
import pandas as pd
import pytest

from covid_ratio.exceptions import MissingIndexLevelsError
from covid_ratio.joining import join_confirmed_and_deaths

D1 = pd.Timestamp("2020-03-01")
D2 = pd.Timestamp("2020-03-02")


def get_confirmed():
    return pd.DataFrame(
        [[10, np.nan], [12, 2.0], [5, np.nan]],
        columns=["confirmed", "new_confirmed"],
        index=pd.MultiIndex.from_tuples(
            [("a", "ca", D1), ("a", "ca", D2), ("b", "cb", D1)],
            names=["location", "country", "date"],
        ),
    )


def test_join_missing_partner():
    deaths = pd.DataFrame(
        [[1, np.nan], [1, 0.0]],
        columns=["deaths", "new_deaths"],
        index=pd.MultiIndex.from_tuples(
            [("a", "ca", D1), ("a", "ca", D2)],
            names=["location", "country", "date"],
        ),
    )

    res = join_confirmed_and_deaths(get_confirmed(), deaths)

    exp = pd.DataFrame(
        [
            [10, np.nan, 1.0, np.nan],
            [12, 2.0, 1.0, 0.0],
            [5, np.nan, np.nan, np.nan],
        ],
        columns=["confirmed", "new_confirmed", "deaths", "new_deaths"],
        index=get_confirmed().index,
    )

    pd.testing.assert_frame_equal(res, exp)


def test_join_deaths_only_levels_become_columns():
    deaths = pd.DataFrame(
        [[1, np.nan], [1, 0.0], [0, np.nan]],
        columns=["deaths", "new_deaths"],
        index=pd.MultiIndex.from_tuples(
            [("a", 100, D1), ("a", 100, D2), ("b", 50, D1)],
            names=["location", "population", "date"],
        ),
    )

    res = join_confirmed_and_deaths(get_confirmed(), deaths)

    assert res.index.names == ["location", "country", "date"]
    assert res["population"].tolist() == [100, 100, 50]
    assert res["new_deaths"].isnull().tolist() == [True, False, True]


def test_join_fans_out_on_duplicate_keys():
    deaths = pd.DataFrame(
        [[1, np.nan], [2, np.nan]],
        columns=["deaths", "new_deaths"],
        index=pd.MultiIndex.from_tuples(
            [("b", "cb", D1), ("b", "cb", D1)],
            names=["location", "country", "date"],
        ),
    )

    res = join_confirmed_and_deaths(get_confirmed(), deaths)

    # No de-duplication, the duplicated death row doubles the confirmed row
    assert res.shape[0] == 4
    assert res.loc[("b", "cb", D1), "deaths"].tolist() == [1, 2]


def test_join_missing_level():
    deaths = pd.DataFrame(
        [[1]],
        columns=["deaths"],
        index=pd.Index(["a"], name="location"),
    )

    with pytest.raises(MissingIndexLevelsError, match="date"):
        join_confirmed_and_deaths(get_confirmed(), deaths)
