"""
Natural-language explanations for a liked animal.

Bullets are gathered in strict priority order and cut to exactly three:

1. One bullet per matching MBTI letter, in position order (may yield 4)
2. Energy alignment, if fewer than 3 so far and |energy diff| <= 1
3. Experience alignment, if still fewer than 3 and the levels pair up
4. Generic fallbacks until there are 3

A separate waiting note is attached for long-stay or special-needs animals.
"""

import logging
from typing import Dict, List, Optional

from .schema import (
    AnimalRecord,
    CareLevel,
    ExperienceLevel,
    MatchExplanation,
    UserProfile,
    is_valid_mbti,
)
from .scoring import DEFAULT_CONFIG, ScoringConfig, user_energy

logger = logging.getLogger(__name__)

BULLET_COUNT = 3

# Keyed by the shared letter, not by the dimension
MBTI_PHRASES: Dict[str, str] = {
    "E": "You both recharge in similar ways — social energy and shared adventures",
    "I": "You both recharge in similar ways — quiet evenings and meaningful one-on-one time",
    "S": "You share the same approach to the world — grounded in routine and the present moment",
    "N": "You share the same approach to the world — curious, adaptable, and always exploring",
    "T": "Your bonding style aligns — built on trust and respect rather than constant reassurance",
    "F": "Your bonding style aligns — deep emotional attunement and loyalty",
    "J": "Your lifestyle fits — you both thrive with structure and predictability",
    "P": "Your lifestyle fits — you both love spontaneity and going wherever the day takes you",
}

ENERGY_LABELS: Dict[int, str] = {
    1: "relaxed",
    2: "gentle",
    3: "balanced",
    4: "active",
    5: "high-energy",
}
DEFAULT_ENERGY_LABEL = "balanced"

MATCHING_EXPERIENCE: Dict[ExperienceLevel, CareLevel] = {
    ExperienceLevel.FIRST_TIMER: CareLevel.BEGINNER,
    ExperienceLevel.SOME_EXPERIENCE: CareLevel.INTERMEDIATE,
    ExperienceLevel.VERY_EXPERIENCED: CareLevel.EXPERIENCED,
}

GENERIC_PHRASES = (
    "{name}'s personality complements yours in a meaningful way",
    "You have the lifestyle that {name} needs to truly thrive",
    "{name} has been waiting for someone just like you",
)


def _mbti_bullets(profile: UserProfile, animal: AnimalRecord) -> List[str]:
    if not (is_valid_mbti(profile.mbti) and is_valid_mbti(animal.mbti_type)):
        return []
    return [
        MBTI_PHRASES[u]
        for u, a in zip(profile.mbti, animal.mbti_type)
        if u == a
    ]


def _energy_bullet(profile: UserProfile, animal: AnimalRecord) -> Optional[str]:
    energy = user_energy(profile)
    if abs(energy - animal.energy_level) > 1:
        return None
    label = ENERGY_LABELS.get(energy, DEFAULT_ENERGY_LABEL)
    return f"Your {label} lifestyle is a perfect fit for {animal.name}'s energy level"


def _experience_bullet(profile: UserProfile, animal: AnimalRecord) -> Optional[str]:
    needed = MATCHING_EXPERIENCE.get(profile.experience)
    if needed is None or needed != animal.experience_level_needed:
        return None
    return f"{animal.name}'s care needs align perfectly with your experience level"


def waiting_note(animal: AnimalRecord, config: Optional[ScoringConfig] = None) -> Optional[str]:
    """Note for animals that have waited long or have special needs, else None."""
    config = config or DEFAULT_CONFIG
    if animal.days_in_shelter > config.long_stay_days or animal.special_needs:
        return (
            f"{animal.name} has been waiting {animal.days_in_shelter} days. "
            f"You might be exactly who they've been hoping for."
        )
    return None


def generate_match_reasons(
    profile: Optional[UserProfile],
    animal: Optional[AnimalRecord],
    config: Optional[ScoringConfig] = None
) -> MatchExplanation:
    """
    Explain why an adopter and an animal are compatible.

    Args:
        profile: Adopter profile (may be None, giving only generic bullets)
        animal: The liked animal (may be None, giving an empty explanation)
        config: Scoring constants (only the long-stay threshold is used)

    Returns:
        MatchExplanation with exactly three bullets when an animal is given
    """
    if animal is None:
        return MatchExplanation()

    candidates = []
    if profile is not None:
        candidates.extend(_mbti_bullets(profile, animal))

        if len(candidates) < BULLET_COUNT:
            bullet = _energy_bullet(profile, animal)
            if bullet:
                candidates.append(bullet)

        if len(candidates) < BULLET_COUNT:
            bullet = _experience_bullet(profile, animal)
            if bullet:
                candidates.append(bullet)

    for phrase in GENERIC_PHRASES:
        if len(candidates) >= BULLET_COUNT:
            break
        candidates.append(phrase.format(name=animal.name))

    logger.debug(f"Generated {len(candidates)} reason candidates for animal {animal.id}")

    return MatchExplanation(
        bullets=tuple(candidates[:BULLET_COUNT]),
        waiting_note=waiting_note(animal, config),
    )
