"""Display labels for MBTI codes and score bands."""

from enum import Enum
from typing import Any, Dict

MBTI_LABELS: Dict[str, str] = {
    "INTJ": "The Architect",
    "INTP": "The Logician",
    "ENTJ": "The Commander",
    "ENTP": "The Debater",
    "INFJ": "The Advocate",
    "INFP": "The Mediator",
    "ENFJ": "The Protagonist",
    "ENFP": "The Campaigner",
    "ISTJ": "The Logistician",
    "ISFJ": "The Defender",
    "ESTJ": "The Executive",
    "ESFJ": "The Consul",
    "ISTP": "The Virtuoso",
    "ISFP": "The Adventurer",
    "ESTP": "The Entrepreneur",
    "ESFP": "The Entertainer",
}

FALLBACK_LABEL = "The Unique One"


def get_mbti_label(code: Any) -> str:
    """Nickname for an MBTI code, or the fallback label for unknown codes."""
    if not isinstance(code, str):
        return FALLBACK_LABEL
    return MBTI_LABELS.get(code, FALLBACK_LABEL)


class ScoreTier(Enum):
    """Colour band a score is displayed in."""
    STRONG = "strong"
    GOOD = "good"
    FAIR = "fair"


def score_tier(score: int) -> ScoreTier:
    if score >= 80:
        return ScoreTier.STRONG
    if score >= 60:
        return ScoreTier.GOOD
    return ScoreTier.FAIR
