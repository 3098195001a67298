"""
Type hints that are used throughout
"""

from __future__ import annotations

from typing import Union

import numpy as np
import pandas as pd
from typing_extensions import TypeAlias

NUMERIC_DATA: TypeAlias = Union[float, int, np.floating, np.integer]
"""
Type alias for a value that can be used in the data of a count table
"""

WideCountDataFrame: TypeAlias = pd.DataFrame
"""
Type alias for the wide [pandas.DataFrame][pd.DataFrame] shape of the raw tables

For typing purposes, this is just a direct alias of [pandas.DataFrame][pd.DataFrame].
However, the point of defining this
is to provide greater clarity of the kind of data we expect.

We expect one row per location.
All metadata about the location is contained in the index.
The columns are dates and the data is the cumulative count as of each date.

```python
                                                         2020-03-01  2020-03-02
location  county   province_state country
84001001  Autauga  Alabama        US                              0           2
84001003  Baldwin  Alabama        US                              1           4
```
"""

LongCountDataFrame: TypeAlias = pd.DataFrame
"""
Type alias for the long [pandas.DataFrame][pd.DataFrame] shape used after reshaping

There is one row per location and date.
The index contains the location metadata with `date` as its last level.
The columns hold counts (cumulative counts and, once derived, their deltas).

```python
                                                    confirmed  new_confirmed
location county  province_state country date
84001001 Autauga Alabama        US      2020-03-01          0            NaN
                                        2020-03-02          2            2.0
```
"""
