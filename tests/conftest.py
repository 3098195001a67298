"""
Re-useable fixtures etc. for tests

See https://docs.pytest.org/en/7.1.x/reference/fixtures.html#conftest-py-sharing-fixtures-across-multiple-files
"""

from pathlib import Path

import pandas as pd
import pytest

from covid_ratio.testing import get_date_headers, get_raw_global_table, get_raw_us_table

REPO_ROOT = Path(__file__).parents[1]


@pytest.fixture(scope="session", autouse=True)
def pandas_terminal_width():
    # Set pandas terminal width so that doctests don't depend on terminal width.

    # We set the display width to 120 because examples should be short,
    # anything more than this is too wide to read in the source.
    pd.set_option("display.width", 120)

    # Display as many columns as you want (i.e. let the display width do the
    # truncation)
    pd.set_option("display.max_columns", 1000)


@pytest.fixture
def four_day_dates():
    return get_date_headers("2020-03-01", 4)


@pytest.fixture
def raw_us_confirmed(four_day_dates):
    return get_raw_us_table(
        locations=[
            (84001001, "Autauga", "Alabama"),
            (84090001, "Unassigned", "Alabama"),
        ],
        counts=[
            [10, 10, 15, 25],
            [1000, 2000, 3000, 4000],
        ],
        dates=four_day_dates,
    )


@pytest.fixture
def raw_us_deaths(four_day_dates):
    return get_raw_us_table(
        locations=[
            (84001001, "Autauga", "Alabama"),
            (84090001, "Unassigned", "Alabama"),
        ],
        counts=[
            [0, 0, 1, 1],
            [10, 20, 30, 40],
        ],
        dates=four_day_dates,
        population=[55869, 0],
    )


@pytest.fixture
def raw_global_confirmed(four_day_dates):
    return get_raw_global_table(
        locations=[
            (None, "Afghanistan"),
            (None, "Antarctica"),
        ],
        counts=[
            [10, 10, 15, 25],
            [1000, 2000, 3000, 4000],
        ],
        dates=four_day_dates,
    )


@pytest.fixture
def raw_global_deaths(four_day_dates):
    return get_raw_global_table(
        locations=[
            (None, "Afghanistan"),
            (None, "Antarctica"),
        ],
        counts=[
            [0, 0, 1, 1],
            [10, 20, 30, 40],
        ],
        dates=four_day_dates,
    )
