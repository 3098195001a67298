"""
Trend of the deaths to cases ratio over time

We fit a straight line to the monthly ratio as a function of the month index.
A negative, significant slope is evidence that the ratio declines over time.
"""

from __future__ import annotations

from typing import Any

import pandas as pd
from attrs import define

from covid_ratio.exceptions import MissingOptionalDependencyError


@define
class RatioTrend:
    """
    Result of fitting a linear trend to the ratio
    """

    slope: float
    """
    Change in the ratio per month
    """

    intercept: float
    """
    Ratio at month index zero
    """

    p_value: float
    """
    p-value of the slope
    """

    n_observations: int
    """
    Number of monthly rows used in the fit
    """

    results: Any
    """
    The full fitted results object from statsmodels

    Useful for e.g. `results.summary()`.
    """

    def is_declining(self, alpha: float = 0.05) -> bool:
        """
        Get whether the ratio declines significantly over time

        Parameters
        ----------
        alpha
            Significance level

        Returns
        -------
        :
            `True` if the slope is negative and its p-value is below `alpha`
        """
        return self.slope < 0 and self.p_value < alpha


def fit_ratio_trend(
    monthly: pd.DataFrame,
    response: str = "ratio",
    predictor: str = "month_index",
) -> RatioTrend:
    """
    Fit a linear trend to monthly ratios

    Parameters
    ----------
    monthly
        Monthly data, e.g. the output of
        [MonthlyRatioAggregator][covid_ratio.aggregation.MonthlyRatioAggregator].
        `response` and `predictor` can be either columns or index levels.

    response
        Name of the variable to explain

    predictor
        Name of the variable to explain it with

    Returns
    -------
    :
        Fitted trend

    Raises
    ------
    MissingOptionalDependencyError
        statsmodels is not installed
    """
    try:
        import statsmodels.formula.api as smf
    except ImportError as exc:
        raise MissingOptionalDependencyError(
            "fit_ratio_trend", requirement="statsmodels"
        ) from exc

    to_fit = monthly.reset_index()[[predictor, response]].dropna().astype(float)

    results = smf.ols(f"{response} ~ {predictor}", data=to_fit).fit()

    return RatioTrend(
        slope=float(results.params[predictor]),
        intercept=float(results.params["Intercept"]),
        p_value=float(results.pvalues[predictor]),
        n_observations=int(results.nobs),
        results=results,
    )
