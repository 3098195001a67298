"""
Calculation of daily deltas from cumulative counts

The only thing that really matters here is that we never
take a difference across two different locations.
We make sure of this by sorting with location as the primary key
and then only differencing rows whose predecessor is the same location.
The first observation of each location has no delta (it is NaN).

Decreases in the cumulative counts (corrections issued by the source)
produce negative deltas.
These are passed through, we don't clamp or smooth.
"""

from __future__ import annotations

import pandas as pd

from covid_ratio.assertions import assert_has_index_levels
from covid_ratio.constants import LOCATION_LEVEL, TIME_LEVEL
from covid_ratio.typing import LongCountDataFrame


def sort_by_location_and_time(
    long: pd.DataFrame,
    location_level: str = LOCATION_LEVEL,
    time_level: str = TIME_LEVEL,
) -> pd.DataFrame:
    """
    Sort long data so that each location's observations are contiguous and in time order

    The sort is stable so ties keep their input order.

    Parameters
    ----------
    long
        Long data to sort

    location_level
        Level which identifies the location

    time_level
        Level which holds the time

    Returns
    -------
    :
        Sorted data
    """
    sort_keys = pd.DataFrame(
        {
            location_level: long.index.get_level_values(location_level),
            time_level: long.index.get_level_values(time_level),
        }
    )
    # Positional because sort_keys has a default RangeIndex
    sort_order = sort_keys.sort_values(
        [location_level, time_level], kind="stable"
    ).index

    return long.iloc[sort_order]


def calculate_deltas(
    long: pd.DataFrame,
    value_name: str,
    delta_name: str,
    location_level: str = LOCATION_LEVEL,
    time_level: str = TIME_LEVEL,
) -> LongCountDataFrame:
    """
    Calculate the change in a cumulative count from one observation to the next

    Parameters
    ----------
    long
        Long data, with cumulative counts in `value_name`

    value_name
        Column holding the cumulative count

    delta_name
        Column in which to put the deltas

    location_level
        Level which identifies the location

    time_level
        Level which holds the time

    Returns
    -------
    :
        `long`, sorted by location then time, with an extra column, `delta_name`.
        `delta_name` is NaN for the first observation of each location.

    Raises
    ------
    MissingIndexLevelsError
        `long` doesn't have `location_level` or `time_level` in its index
    """
    assert_has_index_levels(long, [location_level, time_level])

    res = sort_by_location_and_time(
        long, location_level=location_level, time_level=time_level
    )

    locations = pd.Series(res.index.get_level_values(location_level), index=res.index)
    same_location_as_previous = locations.eq(locations.shift())

    deltas = res[value_name].diff().where(same_location_as_previous)

    return res.assign(**{delta_name: deltas})
