"""Evaluation module for catalog-level score reports."""

from .metrics import (
    compute_score_distribution_stats,
    create_catalog_report,
    rank_catalog,
    CatalogReport,
    ScoreDistributionStats,
)

__all__ = [
    "compute_score_distribution_stats",
    "create_catalog_report",
    "rank_catalog",
    "CatalogReport",
    "ScoreDistributionStats",
]
