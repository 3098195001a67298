"""
Code to support our tests

This is here, rather than in our `tests` directory
because of the issues that come
when you turn your tests into a package using `__init__.py` files
(for details, see https://docs.pytest.org/en/7.1.x/explanation/goodpractices.html#choosing-an-import-mode).
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import numpy as np
import pandas as pd

RNG = np.random.default_rng()


def get_raw_us_table(
    locations: Sequence[tuple[int, Any, str]],
    counts: Sequence[Sequence[int]],
    dates: Sequence[str],
    countries: Sequence[str] | None = None,
    population: Sequence[int] | None = None,
) -> pd.DataFrame:
    """
    Get a table in the format of the raw US tables

    Parameters
    ----------
    locations
        UID, county (Admin2) and province/state of each row

    counts
        Cumulative counts for each row, one value per date

    dates
        Date column headers (e.g. `"1/22/20"`)

    countries
        Country of each row.
        If not supplied, every row's country is `"US"`.

    population
        Population of each row.
        If supplied, a Population column is added (as in the raw deaths table).

    Returns
    -------
    :
        Raw-like US table
    """
    if countries is None:
        countries = ["US"] * len(locations)

    rows = []
    for i, ((uid, county, province_state), loc_counts) in enumerate(
        zip(locations, counts)
    ):
        row: dict[str, Any] = {
            "UID": uid,
            "iso2": "US",
            "iso3": "USA",
            "code3": 840,
            "FIPS": float(uid % 100000),
            "Admin2": county,
            "Province_State": province_state,
            "Country_Region": countries[i],
            "Lat": 0.0,
            "Long_": 0.0,
            "Combined_Key": f"{county}, {province_state}, {countries[i]}",
        }
        if population is not None:
            row["Population"] = population[i]

        row.update(dict(zip(dates, loc_counts)))
        rows.append(row)

    return pd.DataFrame(rows)


def get_raw_global_table(
    locations: Sequence[tuple[Any, str]],
    counts: Sequence[Sequence[int]],
    dates: Sequence[str],
) -> pd.DataFrame:
    """
    Get a table in the format of the raw global tables

    Parameters
    ----------
    locations
        Province/state (`None` if the row is a whole country) and country of each row

    counts
        Cumulative counts for each row, one value per date

    dates
        Date column headers (e.g. `"1/22/20"`)

    Returns
    -------
    :
        Raw-like global table
    """
    rows = []
    for (province_state, country), loc_counts in zip(locations, counts):
        row: dict[str, Any] = {
            "Province/State": province_state,
            "Country/Region": country,
            "Lat": 0.0,
            "Long": 0.0,
        }
        row.update(dict(zip(dates, loc_counts)))
        rows.append(row)

    return pd.DataFrame(rows)


def get_date_headers(start: str, periods: int) -> list[str]:
    """
    Get date column headers in the raw format

    Parameters
    ----------
    start
        First date

    periods
        Number of (consecutive) dates

    Returns
    -------
    :
        Headers like `"1/22/20"`

    Examples
    --------
    >>> get_date_headers("2020-01-30", 3)
    ['1/30/20', '1/31/20', '2/1/20']
    """
    return [
        f"{d.month}/{d.day}/{d.strftime('%y')}"
        for d in pd.date_range(start, periods=periods, freq="D")
    ]


def get_random_cumulative_counts(
    n_locations: int, n_dates: int, max_daily: int = 50
) -> np.ndarray[Any, np.dtype[np.int64]]:
    """
    Get random, non-decreasing, cumulative counts

    Parameters
    ----------
    n_locations
        Number of locations (rows)

    n_dates
        Number of dates (columns)

    max_daily
        Maximum daily increase

    Returns
    -------
    :
        Cumulative counts
    """
    return RNG.integers(0, max_daily, size=(n_locations, n_dates)).cumsum(axis=1)
