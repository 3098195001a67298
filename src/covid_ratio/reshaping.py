"""
Reshaping between wide (one column per date) and long (one row per date) data
"""

from __future__ import annotations

import pandas as pd

from covid_ratio.constants import RAW_DATE_FORMAT, TIME_LEVEL
from covid_ratio.exceptions import UnparseableDateColumnError
from covid_ratio.typing import LongCountDataFrame, WideCountDataFrame


def parse_date_columns(
    wide: pd.DataFrame, date_format: str = RAW_DATE_FORMAT
) -> WideCountDataFrame:
    """
    Parse the column headers of a wide table into dates

    Parameters
    ----------
    wide
        Wide table whose columns are all date strings

    date_format
        Format of the date strings

    Returns
    -------
    :
        `wide` with its columns converted to a [pd.DatetimeIndex][pandas.DatetimeIndex]

    Raises
    ------
    UnparseableDateColumnError
        A column header could not be parsed.
        We don't try to recover from this, the data is malformed.

    Examples
    --------
    >>> wide = pd.DataFrame([[1, 3]], columns=["1/22/20", "12/3/21"])
    >>> parse_date_columns(wide).columns.strftime("%Y-%m-%d").tolist()
    ['2020-01-22', '2021-12-03']
    """
    parsed = []
    for column in wide.columns:
        try:
            parsed.append(pd.to_datetime(column, format=date_format))
        except (TypeError, ValueError) as exc:
            raise UnparseableDateColumnError(
                column=column, date_format=date_format
            ) from exc

    res = wide.copy()
    res.columns = pd.DatetimeIndex(parsed, name=TIME_LEVEL)

    return res


def wide_to_long(
    wide: pd.DataFrame,
    value_name: str,
    date_format: str = RAW_DATE_FORMAT,
) -> LongCountDataFrame:
    """
    Convert a wide table into a long table

    This is a pure fan-out, nothing is filtered.
    The output has exactly one row per row and date column of the input.

    Parameters
    ----------
    wide
        Wide table.
        All identifying information should be in the index
        and all columns should be dates
        (either already parsed or as strings in `date_format`).

    value_name
        Name of the column which holds the values in the output

    date_format
        Format of the date strings, used if the columns aren't parsed yet

    Returns
    -------
    :
        Long table with the same index levels as `wide` plus `date` as the last level.
        The rows are in the order they are reshaped (date by date),
        they are not sorted by location.

    Raises
    ------
    UnparseableDateColumnError
        A column header could not be parsed as a date
    """
    if not isinstance(wide.columns, pd.DatetimeIndex):
        wide = parse_date_columns(wide, date_format=date_format)

    res = wide.melt(
        var_name=TIME_LEVEL, value_name=value_name, ignore_index=False
    ).set_index(TIME_LEVEL, append=True)

    return res


def long_to_wide(long: pd.DataFrame, value_name: str) -> WideCountDataFrame:
    """
    Convert a long table back into a wide table

    This is the inverse of [wide_to_long][(m).].

    Parameters
    ----------
    long
        Long table, with `date` as an index level

    value_name
        Column to put in the body of the wide table

    Returns
    -------
    :
        Wide table with one column per date
    """
    return long[value_name].unstack(TIME_LEVEL)
