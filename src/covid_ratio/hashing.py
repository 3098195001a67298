"""
Hashing of files, so we know which snapshot of the raw data we processed
"""

from __future__ import annotations

import hashlib
from pathlib import Path


def get_file_hash(
    file_path: Path | str, algorithm: str = "sha256", buffer_size: int = 2**16
) -> str:
    """
    Get the hash of a file

    Parameters
    ----------
    file_path
        File to hash

    algorithm
        Hashing algorithm to use (passed to [hashlib.new][])

    buffer_size
        Number of bytes to read at a time

    Returns
    -------
    :
        Hex digest of the file's contents
    """
    hasher = hashlib.new(algorithm)
    with open(file_path, "rb") as fh:
        while chunk := fh.read(buffer_size):
            hasher.update(chunk)

    return hasher.hexdigest()
