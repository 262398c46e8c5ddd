"""
Command line runner for the compatibility engine.

Ranks an animal catalog for one adopter profile and reports the result.

Usage:
    python -m pawmatch.run --config configs/config.yaml
    python -m pawmatch.run --profile data/sample_profile.yaml --catalog data/animals.json --top 3

The runner performs the following steps:
1. Load and validate configuration
2. Load the adopter profile and the catalog
3. Apply the housing filter
4. Score, rank and explain the catalog
5. Optionally write ranking.csv, report.json and scoring_config.json
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Dict, Any, Optional

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def setup_logging(log_level: str) -> None:
    """Configure logging level from config."""
    level = getattr(logging, log_level.upper(), logging.INFO)
    logging.getLogger().setLevel(level)


def run_matching(
    config_path: str,
    profile_path: Optional[str] = None,
    catalog_path: Optional[str] = None,
    top_k: Optional[int] = None,
    output_dir: Optional[str] = None
) -> Dict[str, Any]:
    """
    Rank a catalog for a profile.

    Args:
        config_path: Path to the configuration YAML file
        profile_path: Profile file, overriding data.profile from the config
        catalog_path: Catalog file, overriding data.catalog from the config
        top_k: Number of matches to explain, overriding report.top_k
        output_dir: If provided, write ranking.csv, report.json and scoring_config.json here

    Returns:
        Dictionary with the report and paths to written files
    """
    from .configs import load_config, validate_config, get_config_value
    from .data_loading import load_catalog, load_user_profile, catalog_to_frame
    from .evaluation import create_catalog_report, rank_catalog
    from .matching import ScoringConfig
    from .session import filter_for_living_space

    config = load_config(config_path)
    issues = validate_config(config)
    for issue in issues:
        logger.warning(f"Config issue: {issue}")

    setup_logging(get_config_value(config, "global.log_level", "INFO"))

    scoring_config = ScoringConfig.from_config(config)

    profile_path = profile_path or get_config_value(config, "data.profile")
    catalog_path = catalog_path or get_config_value(config, "data.catalog")
    if not profile_path or not catalog_path:
        raise ValueError("Both a profile and a catalog path are required")

    top_k = top_k if top_k is not None else get_config_value(config, "report.top_k", 5)
    if isinstance(top_k, bool) or not isinstance(top_k, int) or top_k < 1:
        raise ValueError(f"top_k must be a positive integer, got {top_k!r}")
    output_dir = output_dir or get_config_value(config, "report.output_dir")

    profile = load_user_profile(profile_path)
    catalog = load_catalog(catalog_path)
    eligible = filter_for_living_space(catalog, profile.living_space)
    logger.info(f"{len(eligible)}/{len(catalog)} animals eligible for "
                f"living space '{profile.living_space.value}'")

    report = create_catalog_report(profile, eligible, top_k=top_k, config=scoring_config)
    logger.info("\n" + report.summary())

    written = {}
    if output_dir:
        out = Path(output_dir)
        out.mkdir(parents=True, exist_ok=True)

        ranking = catalog_to_frame(rank_catalog(profile, eligible, scoring_config))
        ranking_path = out / "ranking.csv"
        ranking.to_csv(ranking_path, index=False)
        logger.info(f"Saved ranking to {ranking_path}")
        written["ranking"] = str(ranking_path)

        report_path = out / "report.json"
        report.save(str(report_path))
        written["report"] = str(report_path)

        scoring_path = out / "scoring_config.json"
        scoring_config.save(str(scoring_path))
        written["scoring_config"] = str(scoring_path)

    return {
        "report": report.to_dict(),
        "files": written,
    }


def main(argv=None):
    """Main entry point for the runner."""
    parser = argparse.ArgumentParser(
        description="Rank adoptable animals by compatibility with an adopter profile"
    )
    parser.add_argument(
        "--config",
        type=str,
        default="configs/config.yaml",
        help="Path to configuration file"
    )
    parser.add_argument(
        "--profile",
        type=str,
        default=None,
        help="Adopter profile YAML/JSON (overrides config)"
    )
    parser.add_argument(
        "--catalog",
        type=str,
        default=None,
        help="Animal catalog JSON/CSV (overrides config)"
    )
    parser.add_argument(
        "--top",
        type=int,
        default=None,
        help="Number of top matches to explain (overrides config)"
    )
    parser.add_argument(
        "--output-dir",
        type=str,
        default=None,
        help="Output directory for ranking.csv, report.json and scoring_config.json"
    )
    args = parser.parse_args(argv)

    try:
        run_matching(
            args.config,
            profile_path=args.profile,
            catalog_path=args.catalog,
            top_k=args.top,
            output_dir=args.output_dir,
        )
        logger.info("Ranking completed successfully!")
        return 0
    except Exception as e:
        logger.exception(f"Ranking failed with error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
