"""
Data loading functions for the animal catalog and adopter profiles.

This module handles loading raw catalog data from JSON or CSV files and
profiles from YAML/JSON. Records are validated on construction; no
scoring is done here.
"""

import json
import logging
from pathlib import Path
from typing import Dict, List, Any, Sequence

import pandas as pd
import yaml

from ..matching.labels import get_mbti_label, score_tier
from ..matching.schema import AnimalRecord, ScoredAnimal, UserProfile

logger = logging.getLogger(__name__)

BOOLEAN_FIELDS = ("special_needs", "hdb_approved", "specialNeeds", "hdbApproved")


def _read_catalog_frame(path: Path) -> pd.DataFrame:
    suffix = path.suffix.lower()
    if suffix == ".csv":
        return pd.read_csv(path)
    if suffix == ".json":
        with open(path, "r") as f:
            records = json.load(f)
        if isinstance(records, dict):
            records = records.get("animals", [])
        if not isinstance(records, list):
            raise ValueError(f"Catalog JSON must be a list of animals: {path}")
        return pd.DataFrame.from_records(records)
    raise ValueError(f"Unsupported catalog format '{suffix}' (expected .json or .csv): {path}")


def _clean_value(key: str, value: Any) -> Any:
    # numpy booleans from pandas; strings are parsed by AnimalRecord
    if key in BOOLEAN_FIELDS and value is not None and not isinstance(value, str):
        return bool(value)
    # CSV columns holding NaN are read as floats
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def frame_to_records(df: pd.DataFrame) -> List[Dict[str, Any]]:
    """
    Convert a catalog DataFrame to plain dictionaries.

    NaN cells become None and numpy scalars become Python values.

    Args:
        df: Raw catalog DataFrame

    Returns:
        List of row dictionaries
    """
    cleaned = df.astype(object).where(df.notna(), None)
    return [
        {key: _clean_value(key, value) for key, value in row.items()}
        for row in cleaned.to_dict(orient="records")
    ]


def load_catalog(filepath: str) -> List[AnimalRecord]:
    """
    Load the animal catalog from a JSON or CSV file.

    Column names may be camelCase or snake_case.

    Args:
        filepath: Path to the catalog file

    Returns:
        List of AnimalRecord in file order

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file is empty, a record is invalid, or ids repeat
    """
    path = Path(filepath)
    if not path.exists():
        raise FileNotFoundError(f"Catalog file not found: {filepath}")

    logger.info(f"Loading catalog from {filepath}")
    df = _read_catalog_frame(path)

    if df.empty:
        raise ValueError(f"Catalog file is empty: {filepath}")

    animals = []
    for index, record in enumerate(frame_to_records(df)):
        try:
            animals.append(AnimalRecord.from_dict(record))
        except ValueError as e:
            raise ValueError(f"Invalid catalog row {index} in {filepath}: {e}") from e

    ids = [animal.id for animal in animals]
    duplicates = sorted({i for i in ids if ids.count(i) > 1})
    if duplicates:
        raise ValueError(f"Duplicate animal ids in catalog: {duplicates}")

    logger.info(f"Loaded {len(animals)} animals")
    return animals


def load_user_profile(filepath: str) -> UserProfile:
    """
    Load an adopter profile from YAML or JSON.

    Args:
        filepath: Path to the profile file

    Returns:
        UserProfile

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file is empty or not a mapping
    """
    path = Path(filepath)
    if not path.exists():
        raise FileNotFoundError(f"Profile file not found: {filepath}")

    logger.info(f"Loading profile from {filepath}")
    with open(filepath, "r") as f:
        # YAML is a superset of JSON
        data = yaml.safe_load(f)

    if not isinstance(data, dict):
        raise ValueError(f"Profile file must contain a mapping: {filepath}")

    return UserProfile.from_dict(data)


def catalog_to_frame(scored: Sequence[ScoredAnimal]) -> pd.DataFrame:
    """
    Build a ranking table from scored animals.

    Args:
        scored: Scored animals, already in display order

    Returns:
        DataFrame with one row per animal, a 1-based rank, tier and MBTI label
    """
    rows = []
    for rank, item in enumerate(scored, start=1):
        row = item.to_dict()
        row["rank"] = rank
        row["tier"] = score_tier(item.score).value
        row["mbti_label"] = get_mbti_label(item.animal.mbti_type)
        rows.append(row)

    columns = ["rank", "id", "name", "species", "breed", "score", "tier",
               "mbti_type", "mbti_label", "energy_level", "experience_level_needed",
               "age", "special_needs", "days_in_shelter", "hdb_approved"]
    return pd.DataFrame(rows, columns=columns)
