"""
Joining of the confirmed case and death tables
"""

from __future__ import annotations

from collections.abc import Sequence

import pandas as pd

from covid_ratio.assertions import assert_has_index_levels
from covid_ratio.constants import LOCATION_LEVEL, TIME_LEVEL
from covid_ratio.typing import LongCountDataFrame


def join_confirmed_and_deaths(
    confirmed: pd.DataFrame,
    deaths: pd.DataFrame,
    on: Sequence[str] = (LOCATION_LEVEL, TIME_LEVEL),
) -> LongCountDataFrame:
    """
    Left join the deaths data onto the confirmed case data

    Only `on` is used to match rows.
    Index levels which are in both inputs (e.g. `country`)
    are taken from `confirmed`.
    Index levels which are only in `deaths` (e.g. `population`)
    are returned as columns, because they are missing
    wherever a confirmed row has no partner.

    No de-duplication is done.
    If the keys aren't unique in either input, the join fans out
    (each matching pair of rows gives a row in the output).

    Parameters
    ----------
    confirmed
        Long confirmed case data

    deaths
        Long death data

    on
        Index levels to join on

    Returns
    -------
    :
        Joined data.
        The index is the same as `confirmed`'s
        (with repeats if the join fans out).
        Rows in `confirmed` with no partner in `deaths`
        have NaN in the columns which come from `deaths`.

    Raises
    ------
    MissingIndexLevelsError
        Either input is missing one of the levels in `on`
    """
    on = list(on)
    assert_has_index_levels(confirmed, on)
    assert_has_index_levels(deaths, on)

    confirmed_flat = confirmed.reset_index()
    deaths_flat = deaths.reset_index()

    deaths_cols = [
        c for c in deaths_flat.columns if c in on or c not in confirmed_flat.columns
    ]

    res = pd.merge(
        confirmed_flat,
        deaths_flat[deaths_cols],
        how="left",
        on=on,
    ).set_index(list(confirmed.index.names))

    return res
