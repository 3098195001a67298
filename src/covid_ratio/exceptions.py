"""
Exceptions that are used throughout
"""

from __future__ import annotations

from collections.abc import Collection
from typing import Any


class MissingOptionalDependencyError(ImportError):
    """
    Raised when an optional dependency is missing

    For example, statsmodels, which is only needed for fitting trends
    """

    def __init__(self, callable_name: str, requirement: str) -> None:
        """
        Initialise the error

        Parameters
        ----------
        callable_name
            The name of the callable that requires the dependency

        requirement
            The name of the requirement
        """
        error_msg = f"`{callable_name}` requires {requirement} to be installed"
        super().__init__(error_msg)


class MissingColumnsError(KeyError):
    """
    Raised when a raw table does not have the columns we need
    """

    def __init__(
        self, table_name: str, missing: Collection[str], available: Collection[Any]
    ) -> None:
        """
        Initialise the error

        Parameters
        ----------
        table_name
            Name of the table that is missing columns

        missing
            The columns which are missing

        available
            The columns which are available
        """
        error_msg = (
            f"{table_name} is missing required columns. "
            f"{sorted(missing)=}. {list(available)=}"
        )
        super().__init__(error_msg)


class MissingIndexLevelsError(KeyError):
    """
    Raised when a [pd.DataFrame][pandas.DataFrame] is missing expected index levels
    """

    def __init__(
        self, missing_levels: Collection[str], available_levels: Collection[Any]
    ) -> None:
        """
        Initialise the error

        Parameters
        ----------
        missing_levels
            Levels which are missing

        available_levels
            Levels which are available
        """
        error_msg = (
            f"The DataFrame is missing the following index levels: "
            f"{sorted(missing_levels)}. "
            f"Available levels: {list(available_levels)}"
        )
        super().__init__(error_msg)


class UnparseableDateColumnError(ValueError):
    """
    Raised when a column header can't be parsed as a date
    """

    def __init__(self, column: Any, date_format: str) -> None:
        """
        Initialise the error

        Parameters
        ----------
        column
            Column header which could not be parsed

        date_format
            Format we expected the column header to be in
        """
        error_msg = (
            f"Could not parse column {column!r} as a date "
            f"with format {date_format!r}"
        )
        super().__init__(error_msg)
