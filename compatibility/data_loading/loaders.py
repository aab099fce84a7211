"""
Data loading functions for the compatibility engine.

This module loads candidate pools exported by the persistence layer from
CSV or JSON files and turns each row into a Profile. No matching is done
here.
"""

import logging
from pathlib import Path
from typing import List

import pandas as pd

from ..profiles.schema import Profile

logger = logging.getLogger(__name__)


def read_profiles_frame(filepath: str, delimiter: str = ",") -> pd.DataFrame:
    """
    Read a profile export into a DataFrame.

    Files ending in .json are read as a JSON array of records; anything else
    is read as delimited text. Empty cells become None.

    Args:
        filepath: Path to the profile export
        delimiter: Field delimiter for delimited text (default: comma)

    Returns:
        DataFrame with one row per profile

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file is empty or has no valid rows
    """
    path = Path(filepath)
    if not path.exists():
        raise FileNotFoundError(f"Profile data file not found: {filepath}")

    logger.info(f"Loading profiles from {filepath}")
    if path.suffix.lower() == ".json":
        df = pd.read_json(filepath, orient="records", dtype=False)
    else:
        df = pd.read_csv(filepath, sep=delimiter, dtype=str, keep_default_na=False, na_values=[""])

    if df.empty:
        raise ValueError(f"Profile data file is empty: {filepath}")

    df = df.astype(object).where(pd.notna(df), None)
    logger.info(f"Loaded {len(df)} rows with {len(df.columns)} columns")
    return df


def load_profiles(filepath: str, delimiter: str = ",") -> List[Profile]:
    """
    Load a candidate pool.

    Args:
        filepath: Path to the CSV or JSON profile export
        delimiter: Field delimiter for CSV files

    Returns:
        List of Profile instances in file order

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file is empty or a row has no valid user id / gender
    """
    df = read_profiles_frame(filepath, delimiter=delimiter)

    profiles = []
    for row_number, record in enumerate(df.to_dict(orient="records"), start=1):
        try:
            profiles.append(Profile.from_dict(record))
        except ValueError as e:
            raise ValueError(f"Invalid profile at row {row_number} of {filepath}: {e}") from e

    logger.info(f"Built {len(profiles)} profiles")
    return profiles


def find_profile(profiles: List[Profile], user_id: str) -> Profile:
    """
    Look up a profile by user id.

    Raises:
        KeyError: If no profile has the given id
    """
    for profile in profiles:
        if profile.user_id == str(user_id):
            return profile
    raise KeyError(f"No profile with user id {user_id}")
