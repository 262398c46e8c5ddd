"""
Compatibility scoring between an adopter profile and an animal.

Additive point budget, each stage capped independently:

    MBTI dimensions   - 12.5 points per matching letter (50 max)
    Energy alignment  - max(0, 25 - 6.25 * |user_energy - animal_energy|)
    Experience        - fixed 3x3 lookup table (15 max)
    Special-case      - +10 when (age >= 7 or special needs) and score > 60

    score = min(100, round_half_up(sum of stages))

Stages accumulate as real numbers and are rounded once at the end.
All functions are pure; absent inputs score 0 instead of raising.
"""

import logging
import math
from dataclasses import dataclass, asdict
from typing import Dict, Any, List, Optional, Sequence
import json

from .schema import (
    ActivityLevel,
    AnimalRecord,
    CareLevel,
    ExperienceLevel,
    UserProfile,
    is_valid_mbti,
)

logger = logging.getLogger(__name__)

NEUTRAL_ENERGY = 3

ACTIVITY_TO_ENERGY: Dict[ActivityLevel, int] = {
    ActivityLevel.VERY_ACTIVE: 5,
    ActivityLevel.MODERATELY_ACTIVE: 3,
    ActivityLevel.HOMEBODY: 1,
    ActivityLevel.UNKNOWN: NEUTRAL_ENERGY,
}

# Rows: adopter experience. Columns: experience the animal needs.
EXPERIENCE_POINTS: Dict[ExperienceLevel, Dict[CareLevel, float]] = {
    ExperienceLevel.FIRST_TIMER: {
        CareLevel.BEGINNER: 15,
        CareLevel.INTERMEDIATE: 5,
        CareLevel.EXPERIENCED: 0,
    },
    ExperienceLevel.SOME_EXPERIENCE: {
        CareLevel.BEGINNER: 10,
        CareLevel.INTERMEDIATE: 15,
        CareLevel.EXPERIENCED: 5,
    },
    ExperienceLevel.VERY_EXPERIENCED: {
        CareLevel.BEGINNER: 8,
        CareLevel.INTERMEDIATE: 12,
        CareLevel.EXPERIENCED: 15,
    },
}


@dataclass
class ScoringConfig:
    """
    Numeric constants of the scoring and explanation rules.

    Attributes:
        mbti_points_per_dimension: Points per matching MBTI letter
        energy_max_points: Points for identical energy levels
        energy_penalty_per_step: Points lost per unit of energy difference
        bonus_points: Special-case boost
        bonus_threshold: Pre-bonus score that must be exceeded for the boost
        senior_age: Age (years) from which an animal counts as senior
        max_score: Ceiling of the final score
        long_stay_days: Shelter stay that must be exceeded for a waiting note
    """
    mbti_points_per_dimension: float = 12.5
    energy_max_points: float = 25.0
    energy_penalty_per_step: float = 6.25
    bonus_points: float = 10.0
    bonus_threshold: float = 60.0
    senior_age: int = 7
    max_score: int = 100
    long_stay_days: int = 90

    def validate(self) -> None:
        """Validate configuration values."""
        for name in ("mbti_points_per_dimension", "energy_max_points",
                     "energy_penalty_per_step", "bonus_points"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be non-negative, got {getattr(self, name)}")
        if not 0 < self.max_score:
            raise ValueError(f"max_score must be positive, got {self.max_score}")
        if not 0 <= self.bonus_threshold <= self.max_score:
            raise ValueError(
                f"bonus_threshold must be in [0, {self.max_score}], got {self.bonus_threshold}"
            )
        if self.senior_age < 0 or self.long_stay_days < 0:
            raise ValueError("senior_age and long_stay_days must be non-negative")

    @property
    def stage_budget(self) -> float:
        """Highest achievable sum of all stages, bonus included."""
        best_experience = max(max(row.values()) for row in EXPERIENCE_POINTS.values())
        return (
            4 * self.mbti_points_per_dimension
            + self.energy_max_points
            + best_experience
            + self.bonus_points
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> "ScoringConfig":
        """Create from main config dictionary (`scoring:` section)."""
        scoring = config.get("scoring", {}) or {}
        known = set(cls.__dataclass_fields__)
        ignored = sorted(k for k in scoring if k not in known)
        if ignored:
            logger.warning(f"Ignoring unknown scoring settings: {ignored}")
        result = cls(**{k: v for k, v in scoring.items() if k in known})
        result.validate()
        return result

    def save(self, filepath: str) -> None:
        """Save to JSON file."""
        with open(filepath, "w") as f:
            json.dump(self.to_dict(), f, indent=2)
        logger.info(f"Saved scoring config to {filepath}")


DEFAULT_CONFIG = ScoringConfig()


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives."""
    return int(math.floor(value + 0.5))


def user_energy(profile: UserProfile) -> int:
    """Synthetic 1-5 energy value for the adopter's activity level."""
    return ACTIVITY_TO_ENERGY.get(profile.activity_level, NEUTRAL_ENERGY)


def count_mbti_matches(user_mbti: Optional[str], animal_mbti: Optional[str]) -> Optional[int]:
    """
    Count positions where two MBTI codes share a letter.

    Returns None (not 0) when either code is absent or malformed, so callers
    can tell "not comparable" apart from "no letters match".
    """
    if not (is_valid_mbti(user_mbti) and is_valid_mbti(animal_mbti)):
        return None
    return sum(1 for u, a in zip(user_mbti, animal_mbti) if u == a)


def mbti_points(profile: UserProfile, animal: AnimalRecord,
                config: ScoringConfig = DEFAULT_CONFIG) -> float:
    matches = count_mbti_matches(profile.mbti, animal.mbti_type)
    if matches is None:
        return 0.0
    return matches * config.mbti_points_per_dimension


def energy_points(profile: UserProfile, animal: AnimalRecord,
                  config: ScoringConfig = DEFAULT_CONFIG) -> float:
    diff = abs(user_energy(profile) - animal.energy_level)
    return max(0.0, config.energy_max_points - config.energy_penalty_per_step * diff)


def experience_points(profile: UserProfile, animal: AnimalRecord) -> float:
    row = EXPERIENCE_POINTS.get(profile.experience, {})
    return float(row.get(animal.experience_level_needed, 0))


def qualifies_for_boost(animal: AnimalRecord, config: ScoringConfig = DEFAULT_CONFIG) -> bool:
    """Senior or special-needs animals are eligible for the special-case boost."""
    return animal.age >= config.senior_age or animal.special_needs


def score_breakdown(
    profile: Optional[UserProfile],
    animal: Optional[AnimalRecord],
    config: Optional[ScoringConfig] = None
) -> Dict[str, float]:
    """
    Compute the unrounded contribution of each scoring stage.

    Args:
        profile: Adopter profile, or None
        animal: Catalog entry, or None

    Returns:
        Dict with keys mbti, energy, experience, bonus and total. All zeros
        if either input is absent.
    """
    config = config or DEFAULT_CONFIG
    if profile is None or animal is None:
        return {"mbti": 0.0, "energy": 0.0, "experience": 0.0, "bonus": 0.0, "total": 0.0}

    mbti = mbti_points(profile, animal, config)
    energy = energy_points(profile, animal, config)
    experience = experience_points(profile, animal)
    running = mbti + energy + experience

    bonus = 0.0
    if qualifies_for_boost(animal, config) and running > config.bonus_threshold:
        bonus = config.bonus_points

    return {
        "mbti": mbti,
        "energy": energy,
        "experience": experience,
        "bonus": bonus,
        "total": running + bonus,
    }


def compute_match_score(
    profile: Optional[UserProfile],
    animal: Optional[AnimalRecord],
    config: Optional[ScoringConfig] = None
) -> int:
    """
    Compute a 0-100 compatibility score between an adopter and an animal.

    Args:
        profile: Adopter profile from the onboarding quiz (may be None)
        animal: Catalog entry (may be None)
        config: Scoring constants (defaults to the built-in ones)

    Returns:
        Integer score in [0, max_score]; 0 if either input is absent
    """
    config = config or DEFAULT_CONFIG
    if profile is None or animal is None:
        return 0
    total = score_breakdown(profile, animal, config)["total"]
    return min(config.max_score, round_half_up(total))


def sort_animals_by_score(
    animals: Sequence[AnimalRecord],
    profile: Optional[UserProfile],
    config: Optional[ScoringConfig] = None
) -> List[AnimalRecord]:
    """
    Order animals by compatibility, highest first.

    The sort is stable: animals with equal scores keep their catalog order.
    Neither the input sequence nor its elements are modified.

    Args:
        animals: Catalog entries
        profile: Adopter profile (may be None, in which case all score 0)

    Returns:
        New list containing the same elements
    """
    scores = {id(animal): compute_match_score(profile, animal, config) for animal in animals}
    ordered = sorted(animals, key=lambda animal: scores[id(animal)], reverse=True)
    logger.debug(f"Sorted {len(ordered)} animals by compatibility")
    return ordered
