"""
Aggregation of daily deltas to months and calculation of the deaths to cases ratio
"""

from __future__ import annotations

import logging
from typing import Any

import numpy as np
import pandas as pd
from attrs import define, field, validators
from pandas_openscm.grouping import groupby_except

from covid_ratio.assertions import assert_has_index_levels
from covid_ratio.constants import (
    EPOCH,
    MIN_MONTHLY_CONFIRMED,
    RATIO_SCALE,
    TIME_LEVEL,
)

logger = logging.getLogger(__name__)

MISSING_DELTA_POLICIES: tuple[str, ...] = ("exclude", "zero")
"""
Supported ways of handling missing deltas when summing to months

- "exclude": missing deltas don't contribute to the sum.
  If all of a month's deltas are missing, the month's sum is missing.
- "zero": missing deltas are treated as zero
"""


class BelowThresholdError(ValueError):
    """
    Raised when monthly data contains months with too few confirmed cases
    """

    def __init__(self, below: pd.DataFrame, min_confirmed: float) -> None:
        """
        Initialise the error

        Parameters
        ----------
        below
            Rows which are below the threshold

        min_confirmed
            The threshold
        """
        error_msg = (
            f"The following rows have fewer than {min_confirmed} "
            f"new confirmed cases:\n{below}"
        )
        super().__init__(error_msg)


class InconsistentRatioError(ValueError):
    """
    Raised when the ratio is not consistent with the monthly sums
    """

    def __init__(self, comparison: pd.DataFrame) -> None:
        """
        Initialise the error

        Parameters
        ----------
        comparison
            Rows where the ratio and the sums disagree
        """
        error_msg = (
            f"The ratio is not consistent with the sums. comparison=\n{comparison}"
        )
        super().__init__(error_msg)


def get_month_index(
    dates: pd.DatetimeIndex, epoch: pd.Timestamp = EPOCH
) -> pd.Index:
    """
    Get the number of whole calendar months between `epoch` and each date

    Parameters
    ----------
    dates
        Dates for which to get the month index

    epoch
        Date from which months are counted

    Returns
    -------
    :
        Month index of each date

    Examples
    --------
    >>> dates = pd.DatetimeIndex(["2020-01-31", "2020-02-01", "2021-03-15"])
    >>> get_month_index(dates, epoch=pd.Timestamp("2020-01-01")).tolist()
    [0, 1, 14]
    >>> get_month_index(dates, epoch=pd.Timestamp("2019-12-15")).tolist()
    [1, 1, 15]
    """
    dates = pd.DatetimeIndex(dates)
    calendar_months = (dates.year - epoch.year) * 12 + (dates.month - epoch.month)
    # A month isn't complete until we reach the epoch's day of the month
    incomplete = np.asarray(dates.day < epoch.day, dtype=int)

    month_index = np.asarray(calendar_months, dtype=int) - incomplete

    return pd.Index(month_index, name="month_index")


def get_month_label(dates: pd.DatetimeIndex) -> pd.Index:
    """
    Get a "YYYY-MM" label for each date

    Parameters
    ----------
    dates
        Dates to label

    Returns
    -------
    :
        Month label of each date

    Examples
    --------
    >>> get_month_label(pd.DatetimeIndex(["2020-01-31", "2021-11-01"])).tolist()
    ['2020-01', '2021-11']
    """
    return pd.Index(pd.DatetimeIndex(dates).strftime("%Y-%m"), name="month")


def calculate_ratio(
    new_deaths: pd.Series[Any],
    new_confirmed: pd.Series[Any],
    scale: float = RATIO_SCALE,
) -> pd.Series[Any]:
    """
    Calculate deaths per `scale` confirmed cases

    Parameters
    ----------
    new_deaths
        Number of new deaths

    new_confirmed
        Number of new confirmed cases

    scale
        Scale of the ratio

    Returns
    -------
    :
        Ratio.
        Where `new_confirmed` is zero, the ratio is NaN
        (rather than infinite or an error).
    """
    denominator = new_confirmed.where(new_confirmed != 0).astype(float)

    return new_deaths.astype(float) * scale / denominator


def sum_to_months(
    daily: pd.DataFrame,
    group_levels: tuple[str, ...] | list[str],
    value_columns: tuple[str, ...] | list[str],
    epoch: pd.Timestamp = EPOCH,
    missing_deltas: str = "exclude",
    time_level: str = TIME_LEVEL,
) -> pd.DataFrame:
    """
    Sum daily data to months

    Parameters
    ----------
    daily
        Daily data

    group_levels
        Levels to keep when grouping (in addition to the month)

    value_columns
        Columns to sum

    epoch
        Date from which the month index is counted

    missing_deltas
        How to handle missing values, see
        [MISSING_DELTA_POLICIES][(m).]

    time_level
        Level which holds the date of each row

    Returns
    -------
    :
        Monthly sums, with index levels `group_levels`, `month` and `month_index`

    Raises
    ------
    NotImplementedError
        `missing_deltas` is not a supported policy
    """
    assert_has_index_levels(daily, [*group_levels, time_level])

    dates = daily.index.get_level_values(time_level)
    to_sum = daily[list(value_columns)].set_index(
        [get_month_label(dates), get_month_index(dates, epoch=epoch)], append=True
    )

    keep_levels = [*group_levels, "month", "month_index"]
    drop_levels = [v for v in to_sum.index.names if v not in keep_levels]

    if missing_deltas == "exclude":
        # min_count=1 means all missing gives missing, rather than zero
        res = groupby_except(to_sum, drop_levels).sum(min_count=1)

    elif missing_deltas == "zero":
        res = groupby_except(to_sum.fillna(0), drop_levels).sum()

    else:
        raise NotImplementedError(missing_deltas)

    res = res.reorder_levels(keep_levels).sort_index()

    return res


def assert_monthly_ratios_valid(
    monthly: pd.DataFrame,
    min_confirmed: float,
    ratio_scale: float,
    confirmed_col: str = "new_confirmed",
    deaths_col: str = "new_deaths",
    ratio_col: str = "ratio",
    rtol: float = 1e-10,
) -> None:
    """
    Assert that monthly ratio data is valid

    Parameters
    ----------
    monthly
        Data to check

    min_confirmed
        Minimum number of new confirmed cases each row should have

    ratio_scale
        Scale which was used to calculate the ratio

    confirmed_col
        Column holding the number of new confirmed cases

    deaths_col
        Column holding the number of new deaths

    ratio_col
        Column holding the ratio

    rtol
        Relative tolerance to use when checking the ratio

    Raises
    ------
    BelowThresholdError
        There are rows with fewer than `min_confirmed` new confirmed cases

    InconsistentRatioError
        The ratio doesn't match the sums
    """
    below_locator = ~(monthly[confirmed_col] >= min_confirmed)
    if below_locator.any():
        raise BelowThresholdError(
            below=monthly.loc[below_locator], min_confirmed=min_confirmed
        )

    exp_ratio = calculate_ratio(
        monthly[deaths_col], monthly[confirmed_col], scale=ratio_scale
    )
    differences_locator = ~np.isclose(
        monthly[ratio_col], exp_ratio, rtol=rtol, equal_nan=True
    )
    if differences_locator.any():
        comparison = pd.concat(
            [
                monthly.loc[differences_locator, ratio_col],
                exp_ratio[differences_locator].rename("expected"),
            ],
            axis="columns",
        )
        raise InconsistentRatioError(comparison=comparison)


@define
class MonthlyRatioAggregator:
    """
    Aggregator of daily deltas to monthly deaths to cases ratios
    """

    group_levels: tuple[str, ...] = field(converter=tuple)
    """
    Levels to group by (in addition to the month)

    For example, `("country",)` gives one row per country per month.
    """

    epoch: pd.Timestamp = field(default=EPOCH, converter=pd.Timestamp)
    """
    Date from which the month index is counted
    """

    min_confirmed: float = MIN_MONTHLY_CONFIRMED
    """
    Minimum number of new confirmed cases for a month to be kept
    """

    ratio_scale: float = RATIO_SCALE
    """
    Scale of the ratio (the ratio is deaths per `ratio_scale` cases)
    """

    missing_deltas: str = field(
        default="exclude", validator=validators.in_(MISSING_DELTA_POLICIES)
    )
    """
    How to handle missing deltas, see [MISSING_DELTA_POLICIES][(m).]
    """

    confirmed_col: str = "new_confirmed"
    """
    Column which holds the daily new confirmed cases
    """

    deaths_col: str = "new_deaths"
    """
    Column which holds the daily new deaths
    """

    time_level: str = TIME_LEVEL
    """
    Level in data indexes that holds the date of each observation
    """

    run_checks: bool = True
    """
    If `True`, run checks on both input and output data

    If you are sure about your workflow,
    you can disable the checks to speed things up.
    """

    def __call__(self, daily: pd.DataFrame) -> pd.DataFrame:
        """
        Aggregate to months

        Parameters
        ----------
        daily
            Daily data, e.g. the output of
            [join_confirmed_and_deaths][covid_ratio.joining.join_confirmed_and_deaths]

        Returns
        -------
        :
            Monthly data with columns
            `self.confirmed_col`, `self.deaths_col` and `ratio`.
            Only months with at least `self.min_confirmed`
            new confirmed cases are returned.
        """
        if self.run_checks:
            assert_has_index_levels(daily, [*self.group_levels, self.time_level])

        monthly = sum_to_months(
            daily,
            group_levels=self.group_levels,
            value_columns=[self.confirmed_col, self.deaths_col],
            epoch=self.epoch,
            missing_deltas=self.missing_deltas,
            time_level=self.time_level,
        )
        monthly["ratio"] = calculate_ratio(
            monthly[self.deaths_col],
            monthly[self.confirmed_col],
            scale=self.ratio_scale,
        )

        keep_locator = monthly[self.confirmed_col] >= self.min_confirmed
        logger.debug(
            "Dropping %d of %d months with fewer than %s new confirmed cases",
            (~keep_locator).sum(),
            len(monthly),
            self.min_confirmed,
        )
        res = monthly.loc[keep_locator]

        if self.run_checks:
            assert_monthly_ratios_valid(
                res,
                min_confirmed=self.min_confirmed,
                ratio_scale=self.ratio_scale,
                confirmed_col=self.confirmed_col,
                deaths_col=self.deaths_col,
            )

        return res
