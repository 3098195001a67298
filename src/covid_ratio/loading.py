"""
Acquisition of the raw JHU CSSE time series tables
"""

from __future__ import annotations

import logging
from pathlib import Path

import pandas as pd
import requests
from attrs import define

from covid_ratio.constants import JHU_CSSE_BASE_URL, RAW_TABLE_FILENAMES
from covid_ratio.hashing import get_file_hash

logger = logging.getLogger(__name__)


@define
class RawTables:
    """
    The four raw tables, exactly as they were read from disk

    Each table has one row per location
    and one column per date holding the cumulative count.
    """

    us_confirmed: pd.DataFrame
    """
    Cumulative confirmed cases by US county
    """

    us_deaths: pd.DataFrame
    """
    Cumulative deaths by US county (this table also carries population)
    """

    global_confirmed: pd.DataFrame
    """
    Cumulative confirmed cases by country and province/state
    """

    global_deaths: pd.DataFrame
    """
    Cumulative deaths by country and province/state
    """


def download_raw_tables(
    out_dir: Path,
    base_url: str = JHU_CSSE_BASE_URL,
    force: bool = False,
    timeout: float = 60.0,
) -> dict[str, Path]:
    """
    Download the raw tables

    There is no retrying.
    If the source isn't available, the error is raised
    and the run should stop.

    Parameters
    ----------
    out_dir
        Directory in which to write the files

    base_url
        URL of the directory which holds the files

    force
        Download files even if they already exist in `out_dir`

    timeout
        Timeout (in seconds) to pass to [requests.get][]

    Returns
    -------
    :
        Map from table name to the path of the downloaded file

    Raises
    ------
    requests.HTTPError
        A file could not be downloaded
    """
    out_dir.mkdir(parents=True, exist_ok=True)

    res = {}
    for table_name, filename in RAW_TABLE_FILENAMES.items():
        out_file = out_dir / filename
        res[table_name] = out_file
        if out_file.exists() and not force:
            logger.info(
                "Not re-downloading %s, %s already exists", table_name, out_file
            )
            continue

        url = f"{base_url.rstrip('/')}/{filename}"
        logger.info("Downloading %s from %s", table_name, url)
        resp = requests.get(url, timeout=timeout)
        resp.raise_for_status()

        out_file.write_bytes(resp.content)
        logger.info("Wrote %s to %s", table_name, out_file)

    return res


def load_raw_table(fp: Path) -> pd.DataFrame:
    """
    Load a single raw table

    Parameters
    ----------
    fp
        File to load

    Returns
    -------
    :
        Loaded table
    """
    # Hash first so that the log tells us exactly which snapshot we processed
    logger.info("Loading %s (sha256: %s)", fp, get_file_hash(fp))
    res = pd.read_csv(fp)

    return res


def load_raw_tables(directory: Path) -> RawTables:
    """
    Load all the raw tables from a directory

    Parameters
    ----------
    directory
        Directory holding the files, named as in
        [RAW_TABLE_FILENAMES][covid_ratio.constants.RAW_TABLE_FILENAMES]

    Returns
    -------
    :
        Loaded tables

    Raises
    ------
    FileNotFoundError
        One of the files is not in `directory`
    """
    tables = {}
    for table_name, filename in RAW_TABLE_FILENAMES.items():
        fp = directory / filename
        if not fp.exists():
            msg = f"{table_name} file not found. {fp=}"
            raise FileNotFoundError(msg)

        tables[table_name] = load_raw_table(fp)

    return RawTables(**tables)
