"""
Useful assertions
"""

from __future__ import annotations

from collections.abc import Iterable

import pandas as pd

from covid_ratio.exceptions import MissingIndexLevelsError


def assert_has_index_levels(indf: pd.DataFrame, levels: Iterable[str]) -> None:
    """
    Assert that a [pd.DataFrame][pandas.DataFrame] has the given index levels

    Parameters
    ----------
    indf
        Data to check

    levels
        Levels we expect to be in the index

    Raises
    ------
    MissingIndexLevelsError
        `indf` is missing at least one of `levels`
    """
    missing_levels = set(levels).difference(indf.index.names)
    if missing_levels:
        raise MissingIndexLevelsError(
            missing_levels=missing_levels, available_levels=indf.index.names
        )


def assert_index_is_multiindex(indf: pd.DataFrame) -> None:
    """
    Assert that a [pd.DataFrame][pandas.DataFrame]'s index is a [pd.MultiIndex][pandas.MultiIndex]

    Parameters
    ----------
    indf
        Data to check

    Raises
    ------
    TypeError
        `indf`'s index is not a [pd.MultiIndex][pandas.MultiIndex]
    """  # noqa: E501
    if not isinstance(indf.index, pd.MultiIndex):
        msg = f"The index is not a `pd.MultiIndex`, instead we have {type(indf.index)=}"
        raise TypeError(msg)


def assert_data_is_all_numeric(indf: pd.DataFrame) -> None:
    """
    Assert that all the data in a [pd.DataFrame][pandas.DataFrame] is numeric

    Parameters
    ----------
    indf
        Data to check

    Raises
    ------
    TypeError
        There is non-numeric data in `indf`
    """
    non_numeric = [
        c
        for c, dtype in indf.dtypes.items()
        if not pd.api.types.is_numeric_dtype(dtype)
    ]
    if non_numeric:
        msg = f"The following columns are not numeric: {non_numeric}"
        raise TypeError(msg)

