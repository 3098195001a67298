"""
Monthly deaths-per-case ratios from the JHU CSSE COVID-19 time series.
"""

import importlib.metadata

__version__ = importlib.metadata.version("covid-ratio")
