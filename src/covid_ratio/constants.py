"""
Constants used throughout the pipeline

Throughout this module, we aim to follow the following conventions:

- "RAW" means that the values are in the naming convention of the JHU CSSE files
- "LEVEL" means the name of an index level once the data has been normalised
"""

from __future__ import annotations

import pandas as pd

JHU_CSSE_BASE_URL: str = (
    "https://raw.githubusercontent.com/CSSEGISandData/COVID-19/master/"
    "csse_covid_19_data/csse_covid_19_time_series/"
)
"""
Location from which the raw time series files are downloaded
"""

RAW_TABLE_FILENAMES: dict[str, str] = {
    "us_confirmed": "time_series_covid19_confirmed_US.csv",
    "us_deaths": "time_series_covid19_deaths_US.csv",
    "global_confirmed": "time_series_covid19_confirmed_global.csv",
    "global_deaths": "time_series_covid19_deaths_global.csv",
}
"""
Map from raw table name to its file name at the source
"""

RAW_DATE_FORMAT: str = "%m/%d/%y"
"""
Format of the date column headers in the raw files (e.g. `1/22/20`)
"""

EPOCH: pd.Timestamp = pd.Timestamp("2020-01-01")
"""
Date from which the month index is counted
"""

MIN_MONTHLY_CONFIRMED: int = 100
"""
Minimum number of new confirmed cases in a month for the month to be kept

Months with fewer cases than this give unstable ratios.
"""

RATIO_SCALE: int = 1000
"""
Scale of the ratio i.e. the ratio is deaths per `RATIO_SCALE` confirmed cases
"""

US_EXCLUDED_COUNTY: str = "Unassigned"
"""
County label used for cases that could not be assigned to a county
"""

US_COUNTRY: str = "US"
"""
Country label that all rows of the US tables should have
"""

GLOBAL_EXCLUDED_COUNTRIES: tuple[str, ...] = ("Korea, North", "Antarctica")
"""
Countries which are excluded because their reporting is unreliable or absent
"""

LEVEL_SEPARATOR: str = "|"
"""
Separator between country and province/state in global location keys
"""

US_DROP_COLUMNS_RAW: tuple[str, ...] = (
    "iso2",
    "iso3",
    "code3",
    "FIPS",
    "Lat",
    "Long_",
    "Combined_Key",
)
"""
Columns of the raw US tables that carry no information we use
"""

US_RENAME_MAP_RAW: dict[str, str] = {
    "UID": "location",
    "Admin2": "county",
    "Province_State": "province_state",
    "Country_Region": "country",
    "Population": "population",
}
"""
Map from raw US column names to index level names
"""

GLOBAL_DROP_COLUMNS_RAW: tuple[str, ...] = ("Lat", "Long")
"""
Columns of the raw global tables that carry no information we use
"""

GLOBAL_RENAME_MAP_RAW: dict[str, str] = {
    "Province/State": "province_state",
    "Country/Region": "country",
}
"""
Map from raw global column names to index level names
"""

LOCATION_LEVEL: str = "location"
"""
Level which identifies a single reporting unit
"""

TIME_LEVEL: str = "date"
"""
Level which holds the date of each observation in long data
"""

US_GROUP_LEVELS: tuple[str, ...] = ("county", "province_state")
"""
Levels used to group US data when aggregating to months
"""

GLOBAL_GROUP_LEVELS: tuple[str, ...] = ("country",)
"""
Levels used to group global data when aggregating to months
"""
