"""
Catalog-level reports for one adopter profile.

Summarizes how a catalog scores against a profile:
1. Score distribution (mean, spread, quantiles)
2. How many animals fall into each display tier
3. The top matches with their explanations

Reports describe engine output only; they do not persist anything besides
an optional JSON dump.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Any, Optional, Sequence
import json

import numpy as np

from ..matching.labels import ScoreTier, get_mbti_label, score_tier
from ..matching.reasons import generate_match_reasons
from ..matching.schema import AnimalRecord, ScoredAnimal, UserProfile
from ..matching.scoring import ScoringConfig, compute_match_score, sort_animals_by_score

logger = logging.getLogger(__name__)


@dataclass
class ScoreDistributionStats:
    """Statistics about score distribution."""
    mean: float
    std: float
    min: float
    max: float
    quantiles: Dict[str, float]  # e.g., {"p10": 20.0, "p50": 55.0, "p90": 84.0}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "mean": float(self.mean),
            "std": float(self.std),
            "min": float(self.min),
            "max": float(self.max),
            "quantiles": {k: float(v) for k, v in self.quantiles.items()}
        }


@dataclass
class TopMatch:
    """A highly ranked animal with its explanation."""
    rank: int
    scored: ScoredAnimal
    bullets: List[str]
    waiting_note: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "rank": self.rank,
            "id": self.scored.id,
            "name": self.scored.animal.name,
            "score": self.scored.score,
            "tier": score_tier(self.scored.score).value,
            "bullets": list(self.bullets),
            "waiting_note": self.waiting_note,
        }


@dataclass
class CatalogReport:
    """
    Complete scoring report of a catalog for one adopter profile.

    Contains distribution statistics, tier counts and the top matches.
    """
    profile: UserProfile
    n_animals: int
    distribution_stats: Optional[ScoreDistributionStats]
    tier_counts: Dict[str, int] = field(default_factory=dict)
    top_matches: List[TopMatch] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        result = {
            "profile": self.profile.to_dict(),
            "profile_label": get_mbti_label(self.profile.mbti),
            "n_animals": self.n_animals,
            "tier_counts": dict(self.tier_counts),
            "top_matches": [m.to_dict() for m in self.top_matches],
        }
        if self.distribution_stats:
            result["distribution_stats"] = self.distribution_stats.to_dict()
        return result

    def save(self, filepath: str) -> None:
        """Save report to JSON file."""
        with open(filepath, "w") as f:
            json.dump(self.to_dict(), f, indent=2, ensure_ascii=False)
        logger.info(f"Saved catalog report to {filepath}")

    def summary(self) -> str:
        """Generate text summary of the report."""
        lines = [
            f"Catalog Report: {self.profile.mbti or 'no MBTI'} ({get_mbti_label(self.profile.mbti)})",
            "=" * 50,
            "",
            f"Animals scored: {self.n_animals}",
        ]

        if self.distribution_stats:
            lines.extend([
                "",
                "Score Distribution:",
                f"  Mean: {self.distribution_stats.mean:.2f}",
                f"  Std:  {self.distribution_stats.std:.2f}",
                f"  Min:  {self.distribution_stats.min:.0f}",
                f"  Max:  {self.distribution_stats.max:.0f}",
            ])
            for q_name, q_value in self.distribution_stats.quantiles.items():
                lines.append(f"  {q_name}: {q_value:.2f}")

        lines.extend(["", "Tiers:"])
        for tier in ScoreTier:
            lines.append(f"  {tier.value}: {self.tier_counts.get(tier.value, 0)}")

        if self.top_matches:
            lines.extend(["", "Top Matches:"])
            for match in self.top_matches:
                animal = match.scored.animal
                lines.append(f"  {match.rank}. {animal.name} ({animal.id}) - {match.scored.score}")
                for bullet in match.bullets:
                    lines.append(f"     * {bullet}")
                if match.waiting_note:
                    lines.append(f"     ! {match.waiting_note}")

        return "\n".join(lines)


def compute_score_distribution_stats(
    scores: np.ndarray,
    quantiles: Sequence[float] = (0.1, 0.25, 0.5, 0.75, 0.9)
) -> ScoreDistributionStats:
    """
    Compute distribution statistics for scores.

    Args:
        scores: Array of compatibility scores
        quantiles: Quantile values to compute (default: p10, p25, p50, p75, p90)

    Returns:
        ScoreDistributionStats instance

    Raises:
        ValueError: If scores is empty
    """
    scores = np.asarray(scores, dtype=float)
    if scores.size == 0:
        raise ValueError("Cannot compute distribution of an empty score array")

    quantile_dict = {
        f"p{int(round(q * 100))}": float(np.percentile(scores, q * 100))
        for q in quantiles
    }

    return ScoreDistributionStats(
        mean=float(np.mean(scores)),
        std=float(np.std(scores)),
        min=float(np.min(scores)),
        max=float(np.max(scores)),
        quantiles=quantile_dict
    )


def create_catalog_report(
    profile: UserProfile,
    animals: Sequence[AnimalRecord],
    top_k: int = 5,
    config: Optional[ScoringConfig] = None,
    quantiles: Sequence[float] = (0.1, 0.25, 0.5, 0.75, 0.9)
) -> CatalogReport:
    """
    Score a catalog against a profile and summarize the result.

    Args:
        profile: Adopter profile
        animals: Catalog entries to score
        top_k: Number of top matches to explain
        config: Scoring constants
        quantiles: Quantiles to compute

    Returns:
        CatalogReport instance
    """
    scored = rank_catalog(profile, animals, config)

    dist_stats = None
    if scored:
        dist_stats = compute_score_distribution_stats(
            np.array([s.score for s in scored]), quantiles
        )

    tier_counts = {tier.value: 0 for tier in ScoreTier}
    for item in scored:
        tier_counts[score_tier(item.score).value] += 1

    top_matches = []
    for rank, item in enumerate(scored[:top_k], start=1):
        explanation = generate_match_reasons(profile, item.animal, config)
        top_matches.append(TopMatch(
            rank=rank,
            scored=item,
            bullets=list(explanation.bullets),
            waiting_note=explanation.waiting_note,
        ))

    logger.info(f"Scored {len(scored)} animals; explained top {len(top_matches)}")

    return CatalogReport(
        profile=profile,
        n_animals=len(scored),
        distribution_stats=dist_stats,
        tier_counts=tier_counts,
        top_matches=top_matches,
    )


def rank_catalog(
    profile: UserProfile,
    animals: Sequence[AnimalRecord],
    config: Optional[ScoringConfig] = None
) -> List[ScoredAnimal]:
    """Scored animals in display order."""
    ranked = sort_animals_by_score(animals, profile, config)
    return [ScoredAnimal(animal=a, score=compute_match_score(profile, a, config)) for a in ranked]
