"""
Configuration loading and validation.

This module handles loading of YAML configuration files and
validates that all required fields are present and consistent.
"""

import logging
from pathlib import Path
from typing import Dict, Any, List

import yaml

from ..matching.scoring import ScoringConfig

logger = logging.getLogger(__name__)

REQUIRED_SECTIONS = ["global", "data", "scoring", "report"]


def load_config(filepath: str) -> Dict[str, Any]:
    """
    Load configuration from YAML file.

    Args:
        filepath: Path to the YAML configuration file

    Returns:
        Configuration dictionary

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValueError: If the file is empty or not a mapping
        yaml.YAMLError: If YAML is invalid
    """
    path = Path(filepath)
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {filepath}")

    logger.info(f"Loading configuration from {filepath}")
    with open(filepath, "r") as f:
        config = yaml.safe_load(f)

    if config is None:
        raise ValueError(f"Configuration file is empty: {filepath}")
    if not isinstance(config, dict):
        raise ValueError(f"Configuration file must contain a mapping: {filepath}")

    return config


def validate_config(config: Dict[str, Any]) -> List[str]:
    """
    Validate configuration and return list of warnings/errors.

    Args:
        config: Configuration dictionary

    Returns:
        List of warning/error messages (empty if valid)
    """
    issues = []

    for section in REQUIRED_SECTIONS:
        if section not in config:
            issues.append(f"Missing required section: {section}")

    if "data" in config:
        data = config["data"] or {}
        if "catalog" not in data:
            issues.append("Missing data.catalog")

    # Stage budgets must add up to the score ceiling
    if "scoring" in config:
        scoring = config["scoring"] or {}
        settings = ScoringConfig(
            **{k: v for k, v in scoring.items() if k in ScoringConfig.__dataclass_fields__}
        )
        total = settings.stage_budget
        if abs(total - settings.max_score) > 0.01:
            issues.append(
                f"Scoring stages don't sum to max_score: {total} != {settings.max_score}"
            )

        if not 0 <= settings.bonus_threshold <= settings.max_score:
            issues.append(
                f"bonus_threshold must be in [0, {settings.max_score}], "
                f"got {settings.bonus_threshold}"
            )

        if settings.energy_penalty_per_step <= 0:
            issues.append(
                f"energy_penalty_per_step must be positive, got {settings.energy_penalty_per_step}"
            )

    if "report" in config:
        top_k = (config["report"] or {}).get("top_k", 5)
        if not isinstance(top_k, int) or top_k < 1:
            issues.append(f"report.top_k must be a positive integer, got {top_k}")

    return issues


def get_config_value(config: Dict[str, Any], path: str, default: Any = None) -> Any:
    """
    Get a nested configuration value using dot notation.

    Args:
        config: Configuration dictionary
        path: Dot-separated path (e.g., "scoring.bonus_threshold")
        default: Default value if path doesn't exist

    Returns:
        Configuration value or default
    """
    keys = path.split(".")
    value = config
    for key in keys:
        if isinstance(value, dict) and key in value:
            value = value[key]
        else:
            return default
    return value
