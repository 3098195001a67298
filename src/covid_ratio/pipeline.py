"""
The full tidying and transforming pipeline

This goes from the four raw tables to monthly ratio tables
at the US county and global country level.
Each granularity is processed independently:

1. normalise locations
1. reshape to long data
1. calculate daily deltas for each location
1. join confirmed cases and deaths
1. sum to months and calculate the ratio
"""

from __future__ import annotations

import logging

import pandas as pd
from attrs import define, field, validators

from covid_ratio.aggregation import MISSING_DELTA_POLICIES, MonthlyRatioAggregator
from covid_ratio.assertions import (
    assert_data_is_all_numeric,
    assert_index_is_multiindex,
)
from covid_ratio.constants import (
    EPOCH,
    GLOBAL_EXCLUDED_COUNTRIES,
    GLOBAL_GROUP_LEVELS,
    LEVEL_SEPARATOR,
    MIN_MONTHLY_CONFIRMED,
    RATIO_SCALE,
    US_EXCLUDED_COUNTY,
    US_GROUP_LEVELS,
)
from covid_ratio.deltas import calculate_deltas
from covid_ratio.joining import join_confirmed_and_deaths
from covid_ratio.loading import RawTables
from covid_ratio.normalisation import normalise_global_table, normalise_us_table
from covid_ratio.reshaping import wide_to_long

logger = logging.getLogger(__name__)


def get_daily_deltas(normalised: pd.DataFrame, kind: str) -> pd.DataFrame:
    """
    Get daily deltas from a normalised wide table

    Parameters
    ----------
    normalised
        Normalised wide table

    kind
        Kind of count (e.g. "confirmed" or "deaths").
        The cumulative count is put in a column with this name
        and the deltas in a column called `f"new_{kind}"`.

    Returns
    -------
    :
        Long data with cumulative counts and deltas
    """
    long = wide_to_long(normalised, value_name=kind)

    return calculate_deltas(long, value_name=kind, delta_name=f"new_{kind}")


def tidy_us(
    confirmed_raw: pd.DataFrame,
    deaths_raw: pd.DataFrame,
    excluded_county: str = US_EXCLUDED_COUNTY,
) -> pd.DataFrame:
    """
    Tidy the US tables into joined daily data

    Parameters
    ----------
    confirmed_raw
        Raw US confirmed cases table

    deaths_raw
        Raw US deaths table

    excluded_county
        County label to exclude

    Returns
    -------
    :
        Daily confirmed cases and deaths (cumulative and new) per county
    """
    confirmed = get_daily_deltas(
        normalise_us_table(
            confirmed_raw,
            excluded_county=excluded_county,
            table_name="US confirmed",
        ),
        kind="confirmed",
    )
    deaths = get_daily_deltas(
        normalise_us_table(
            deaths_raw,
            excluded_county=excluded_county,
            table_name="US deaths",
        ),
        kind="deaths",
    )

    return join_confirmed_and_deaths(confirmed, deaths)


def tidy_global(
    confirmed_raw: pd.DataFrame,
    deaths_raw: pd.DataFrame,
    excluded_countries: tuple[str, ...] = GLOBAL_EXCLUDED_COUNTRIES,
    level_separator: str = LEVEL_SEPARATOR,
) -> pd.DataFrame:
    """
    Tidy the global tables into joined daily data

    Parameters
    ----------
    confirmed_raw
        Raw global confirmed cases table

    deaths_raw
        Raw global deaths table

    excluded_countries
        Countries to exclude

    level_separator
        Separator to use between country and province/state in location keys

    Returns
    -------
    :
        Daily confirmed cases and deaths (cumulative and new)
        per country and province/state
    """
    confirmed, deaths = (
        get_daily_deltas(
            normalise_global_table(
                raw,
                excluded_countries=excluded_countries,
                level_separator=level_separator,
                table_name=f"global {kind}",
            ),
            kind=kind,
        )
        for raw, kind in ((confirmed_raw, "confirmed"), (deaths_raw, "deaths"))
    )

    return join_confirmed_and_deaths(confirmed, deaths)


@define
class MonthlyRatioResult:
    """
    Result of running [MonthlyRatioPipeline][(m).]
    """

    all_us: pd.DataFrame
    """
    Monthly ratios for each US county
    """

    all_global: pd.DataFrame
    """
    Monthly ratios for each country
    """

    us_daily: pd.DataFrame
    """
    Joined daily data for each US county, from which `all_us` is derived
    """

    global_daily: pd.DataFrame
    """
    Joined daily data for each global location, from which `all_global` is derived
    """


@define
class MonthlyRatioPipeline:
    """
    Pipeline from the raw tables to monthly deaths to cases ratios
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
    How to handle missing deltas when summing to months

    See [MISSING_DELTA_POLICIES][covid_ratio.aggregation.MISSING_DELTA_POLICIES].
    """

    us_excluded_county: str = US_EXCLUDED_COUNTY
    """
    County label to exclude from the US data
    """

    global_excluded_countries: tuple[str, ...] = field(
        default=GLOBAL_EXCLUDED_COUNTRIES, converter=tuple
    )
    """
    Countries to exclude from the global data
    """

    level_separator: str = LEVEL_SEPARATOR
    """
    Separator between country and province/state in global location keys
    """

    us_group_levels: tuple[str, ...] = field(default=US_GROUP_LEVELS, converter=tuple)
    """
    Levels to group US data by when aggregating to months
    """

    global_group_levels: tuple[str, ...] = field(
        default=GLOBAL_GROUP_LEVELS, converter=tuple
    )
    """
    Levels to group global data by when aggregating to months
    """

    run_checks: bool = True
    """
    If `True`, run checks on both input and output data

    If you are sure about your workflow,
    you can disable the checks to speed things up
    (but we don't recommend this unless you really
    are confident about what you're doing).
    """

    def get_aggregator(self, group_levels: tuple[str, ...]) -> MonthlyRatioAggregator:
        """
        Get the aggregator to use for a given grouping

        Parameters
        ----------
        group_levels
            Levels to group by

        Returns
        -------
        :
            Aggregator, configured consistently with `self`
        """
        return MonthlyRatioAggregator(
            group_levels=group_levels,
            epoch=self.epoch,
            min_confirmed=self.min_confirmed,
            ratio_scale=self.ratio_scale,
            missing_deltas=self.missing_deltas,
            run_checks=self.run_checks,
        )

    def __call__(self, raw: RawTables) -> MonthlyRatioResult:
        """
        Run the pipeline

        Parameters
        ----------
        raw
            Raw tables to process

        Returns
        -------
        :
            Monthly ratios (and the daily data they come from)
        """
        us_daily = tidy_us(
            raw.us_confirmed,
            raw.us_deaths,
            excluded_county=self.us_excluded_county,
        )
        logger.info("Tidied US data into %d daily rows", len(us_daily))

        global_daily = tidy_global(
            raw.global_confirmed,
            raw.global_deaths,
            excluded_countries=self.global_excluded_countries,
            level_separator=self.level_separator,
        )
        logger.info("Tidied global data into %d daily rows", len(global_daily))

        if self.run_checks:
            for daily in (us_daily, global_daily):
                assert_index_is_multiindex(daily)
                assert_data_is_all_numeric(daily)

        all_us = self.get_aggregator(self.us_group_levels)(us_daily)
        logger.info("Aggregated US data into %d monthly rows", len(all_us))

        all_global = self.get_aggregator(self.global_group_levels)(global_daily)
        logger.info("Aggregated global data into %d monthly rows", len(all_global))

        return MonthlyRatioResult(
            all_us=all_us,
            all_global=all_global,
            us_daily=us_daily,
            global_daily=global_daily,
        )
