"""
Normalisation of the locations in the raw tables

Here we drop metadata we don't use,
drop locations we don't want to analyse
and move everything that identifies a location into the index.
After normalisation, the only columns left are the date columns.

Rows which don't pass the filters are dropped silently
(they are logged at debug level).
This is an exploratory analysis, not a data quality gate.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

import pandas as pd

from covid_ratio.constants import (
    GLOBAL_DROP_COLUMNS_RAW,
    GLOBAL_EXCLUDED_COUNTRIES,
    GLOBAL_RENAME_MAP_RAW,
    LEVEL_SEPARATOR,
    LOCATION_LEVEL,
    US_COUNTRY,
    US_DROP_COLUMNS_RAW,
    US_EXCLUDED_COUNTY,
    US_RENAME_MAP_RAW,
)
from covid_ratio.exceptions import MissingColumnsError

logger = logging.getLogger(__name__)


def assert_has_columns(
    raw: pd.DataFrame, columns: Iterable[str], table_name: str
) -> None:
    """
    Assert that a raw table has the given columns

    Parameters
    ----------
    raw
        Raw table to check

    columns
        Columns which must be present

    table_name
        Name of the table (used in the error message)

    Raises
    ------
    MissingColumnsError
        `raw` is missing at least one of `columns`
    """
    missing = set(columns).difference(raw.columns)
    if missing:
        raise MissingColumnsError(
            table_name=table_name, missing=missing, available=raw.columns
        )


def normalise_us_table(
    raw: pd.DataFrame,
    excluded_county: str = US_EXCLUDED_COUNTY,
    country: str = US_COUNTRY,
    table_name: str = "US table",
) -> pd.DataFrame:
    """
    Normalise a raw US table

    Parameters
    ----------
    raw
        Raw table, as read from the source

    excluded_county
        County label which marks cases that couldn't be assigned to a county

        Rows with this label are dropped.
        Rows with no county label at all are also dropped,
        as there is no county to group them on.

    country
        Rows whose country is not this value are dropped

    table_name
        Name of the table (only used in error and log messages)

    Returns
    -------
    :
        Normalised table.
        The index levels are `location` (the UID), `county`, `province_state`,
        `country` and, if it is in `raw`, `population`.
        The columns are the (not yet parsed) date columns.

    Raises
    ------
    MissingColumnsError
        `raw` does not have the columns we expect of a raw US table
    """
    assert_has_columns(
        raw,
        ["UID", "Admin2", "Province_State", "Country_Region", *US_DROP_COLUMNS_RAW],
        table_name=table_name,
    )

    res = raw.drop(columns=list(US_DROP_COLUMNS_RAW))

    keep_locator = (
        res["Admin2"].notnull()
        & (res["Admin2"] != excluded_county)
        & (res["Country_Region"] == country)
    )
    logger.debug(
        "Dropping %d of %d rows from %s", (~keep_locator).sum(), len(res), table_name
    )

    id_cols = [v for k, v in US_RENAME_MAP_RAW.items() if k in res.columns]
    res = res.loc[keep_locator].rename(columns=US_RENAME_MAP_RAW).set_index(id_cols)

    return res


def normalise_global_table(
    raw: pd.DataFrame,
    excluded_countries: Iterable[str] = GLOBAL_EXCLUDED_COUNTRIES,
    level_separator: str = LEVEL_SEPARATOR,
    table_name: str = "global table",
) -> pd.DataFrame:
    """
    Normalise a raw global table

    The source doesn't supply a numeric ID for global locations,
    so we build the location key from the country and province/state.
    Locations without a province/state get an empty province/state.

    Parameters
    ----------
    raw
        Raw table, as read from the source

    excluded_countries
        Countries to drop

    level_separator
        Separator between country and province/state in the location key

    table_name
        Name of the table (only used in error and log messages)

    Returns
    -------
    :
        Normalised table.
        The index levels are `location`, `province_state` and `country`.
        The columns are the (not yet parsed) date columns.

    Raises
    ------
    MissingColumnsError
        `raw` does not have the columns we expect of a raw global table
    """
    assert_has_columns(
        raw,
        [*GLOBAL_RENAME_MAP_RAW, *GLOBAL_DROP_COLUMNS_RAW],
        table_name=table_name,
    )

    res = raw.drop(columns=list(GLOBAL_DROP_COLUMNS_RAW)).rename(
        columns=GLOBAL_RENAME_MAP_RAW
    )

    keep_locator = ~res["country"].isin(list(excluded_countries))
    logger.debug(
        "Dropping %d of %d rows from %s", (~keep_locator).sum(), len(res), table_name
    )

    res = res.loc[keep_locator]
    province_state = res["province_state"].fillna("").astype(str)
    res = res.assign(
        **{
            "province_state": province_state,
            LOCATION_LEVEL: res["country"].astype(str)
            + level_separator
            + province_state,
        }
    ).set_index([LOCATION_LEVEL, "province_state", "country"])

    return res
