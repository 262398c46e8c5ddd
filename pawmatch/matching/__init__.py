"""
Compatibility engine.

Pure, stateless functions scoring an adopter profile against animal
records, ordering a catalog, and explaining a match.
"""

from .schema import (
    ActivityLevel,
    AnimalRecord,
    CareLevel,
    ExperienceLevel,
    LivingSpace,
    MatchExplanation,
    MBTIDimension,
    ScoredAnimal,
    Species,
    TimeAvailable,
    UserProfile,
    is_valid_mbti,
)
from .scoring import ScoringConfig, compute_match_score, score_breakdown, sort_animals_by_score
from .reasons import generate_match_reasons
from .labels import ScoreTier, get_mbti_label, score_tier

__all__ = [
    "ActivityLevel",
    "AnimalRecord",
    "CareLevel",
    "ExperienceLevel",
    "LivingSpace",
    "MatchExplanation",
    "MBTIDimension",
    "ScoredAnimal",
    "Species",
    "TimeAvailable",
    "UserProfile",
    "is_valid_mbti",
    "ScoringConfig",
    "compute_match_score",
    "score_breakdown",
    "sort_animals_by_score",
    "generate_match_reasons",
    "ScoreTier",
    "get_mbti_label",
    "score_tier",
]
