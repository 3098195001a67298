# ---
# jupyter:
#   jupytext:
#     text_representation:
#       extension: .py
#       format_name: percent
#       format_version: '1.3'
#       jupytext_version: 1.16.6
#   kernelspec:
#     display_name: Python 3 (ipykernel)
#     language: python
#     name: python3
# ---

# %% [markdown]
# # How to run the monthly ratio workflow
#
# Here we demonstrate how to go from the raw JHU CSSE time series
# to monthly deaths per 1000 confirmed cases
# and how to check whether this ratio declines over time.

# %% [markdown]
# ## Imports

# %%
import logging
from pathlib import Path

import seaborn as sns

from covid_ratio.loading import download_raw_tables, load_raw_tables
from covid_ratio.pipeline import MonthlyRatioPipeline
from covid_ratio.regression import fit_ratio_trend

# %%
logging.basicConfig(level=logging.INFO)

# %% [markdown]
# ## Getting the data
#
# The raw data is four CSV files.
# We download them once, then work from the local snapshot
# (delete the directory or pass `force=True` to get a fresh snapshot).

# %%
raw_dir = Path("jhu-csse-snapshot")
download_raw_tables(raw_dir)
raw = load_raw_tables(raw_dir)
raw.us_confirmed.iloc[:5, :15]

# %% [markdown]
# ## Running the pipeline
#
# All configuration is explicit.
# The defaults match the original analysis:
# the month index counts from 2020-01-01,
# months with fewer than 100 new confirmed cases are dropped
# and the ratio is deaths per 1000 confirmed cases.

# %%
pipeline = MonthlyRatioPipeline()
res = pipeline(raw)

# %%
res.all_us

# %%
res.all_global

# %% [markdown]
# ## Plotting
#
# Plotting is not part of the package,
# but the output is easy to work with.

# %%
all_global_flat = res.all_global.reset_index()
top_countries = (
    all_global_flat.groupby("country")["new_confirmed"].sum().nlargest(6).index
)
sns.relplot(
    data=all_global_flat[all_global_flat["country"].isin(top_countries)],
    x="month_index",
    y="ratio",
    hue="country",
    kind="line",
    height=4,
    aspect=2,
)

# %% [markdown]
# ## Does the ratio decline over time?
#
# We fit a linear trend of the ratio against the month index
# for both the US and the global data.

# %%
for name, monthly in (("US", res.all_us), ("Global", res.all_global)):
    trend = fit_ratio_trend(monthly)
    print(
        f"{name}: slope={trend.slope:.3f} per month, "
        f"p={trend.p_value:.3g}, declining={trend.is_declining()}"
    )

# %%
fit_ratio_trend(res.all_us).results.summary()
