"""
Record types consumed and produced by the compatibility engine.

Defines the adopter profile produced by the onboarding quiz, the animal
catalog entry, and the two engine outputs (scored animal, match explanation).

Enumerated answers are closed enums with an UNKNOWN member. Unrecognized
strings are coerced to UNKNOWN; every engine lookup table has an arm
for UNKNOWN.
"""

import logging
import numbers
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Dict, Any, Tuple, Type, TypeVar

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=Enum)


class ActivityLevel(Enum):
    """How active the adopter's lifestyle is (quiz question 5)."""
    VERY_ACTIVE = "very_active"
    MODERATELY_ACTIVE = "moderately_active"
    HOMEBODY = "homebody"
    UNKNOWN = "unknown"


class LivingSpace(Enum):
    """Housing type (quiz question 6). Consumed by the HDB filter only."""
    HDB = "hdb"
    CONDO = "condo"
    LANDED = "landed"
    UNKNOWN = "unknown"


class TimeAvailable(Enum):
    """Daily time the adopter can dedicate (quiz question 7). Display only."""
    ONE_TO_TWO_HOURS = "1_2_hrs"
    THREE_TO_FOUR_HOURS = "3_4_hrs"
    FIVE_PLUS_HOURS = "5_plus_hrs"
    UNKNOWN = "unknown"


class ExperienceLevel(Enum):
    """Adopter's prior pet experience (quiz question 8)."""
    FIRST_TIMER = "first_timer"
    SOME_EXPERIENCE = "some_experience"
    VERY_EXPERIENCED = "very_experienced"
    UNKNOWN = "unknown"


class CareLevel(Enum):
    """Experience an animal's care requires."""
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    EXPERIENCED = "experienced"
    UNKNOWN = "unknown"


class Species(Enum):
    """Animal species in the catalog."""
    DOG = "dog"
    CAT = "cat"
    RABBIT = "rabbit"
    OTHER = "other"
    UNKNOWN = "unknown"


class MBTIDimension(Enum):
    """
    The four MBTI letter pairs, in code position order.

    Each value is the pair of letters allowed at that position of a
    4-letter code, e.g. position 0 is "E" or "I".
    """
    ENERGY = ("E", "I")
    INFORMATION = ("S", "N")
    DECISIONS = ("T", "F")
    LIFESTYLE = ("J", "P")

    @property
    def position(self) -> int:
        return list(MBTIDimension).index(self)


def is_valid_mbti(code: Any) -> bool:
    """Check that `code` is a 4-letter MBTI code such as "ENFP"."""
    if not isinstance(code, str) or len(code) != 4:
        return False
    return all(letter in dim.value for letter, dim in zip(code, MBTIDimension))


def normalize_mbti(code: Any, owner: str = "record") -> Optional[str]:
    """
    Upper-case an MBTI code, mapping malformed codes to None.

    Args:
        code: Raw MBTI value (string, None, or anything else)
        owner: Description used in the warning message

    Returns:
        The upper-cased code, or None if absent or malformed
    """
    if code is None:
        return None
    if isinstance(code, str):
        candidate = code.strip().upper()
        if is_valid_mbti(candidate):
            return candidate
    logger.warning(f"Ignoring malformed MBTI code {code!r} on {owner}")
    return None


def coerce_enum(enum_cls: Type[E], value: Any) -> E:
    """
    Convert a raw value to `enum_cls`, falling back to its UNKNOWN member.

    Args:
        enum_cls: Target enum class (must define UNKNOWN)
        value: Enum member, string value, or None

    Returns:
        Matching enum member, or enum_cls.UNKNOWN
    """
    if isinstance(value, enum_cls):
        return value
    if value is None:
        return enum_cls.UNKNOWN
    try:
        return enum_cls(str(value).strip().lower())
    except ValueError:
        logger.warning(f"Unrecognized {enum_cls.__name__} value {value!r}, using UNKNOWN")
        return enum_cls.UNKNOWN


def _require_int(name: str, value: Any, minimum: int, maximum: Optional[int] = None) -> int:
    # bool is an Integral subclass but never a valid count
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise ValueError(f"{name} must be an integer, got {value!r}")
    value = int(value)
    if value < minimum or (maximum is not None and value > maximum):
        bounds = f"between {minimum} and {maximum}" if maximum is not None else f">= {minimum}"
        raise ValueError(f"{name} must be {bounds}, got {value}")
    return value


TRUE_STRINGS = {"true", "yes", "y", "1"}
FALSE_STRINGS = {"false", "no", "n", "0", ""}


def _require_bool(name: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        text = value.strip().lower()
        if text in TRUE_STRINGS:
            return True
        if text in FALSE_STRINGS:
            return False
    elif isinstance(value, numbers.Integral) and value in (0, 1):
        return bool(value)
    raise ValueError(f"{name} must be a boolean, got {value!r}")


# camelCase keys used by catalog exports and the web client
_PROFILE_KEYS = {
    "activityLevel": "activity_level",
    "livingSpace": "living_space",
    "timeAvailable": "time_available",
}

_ANIMAL_KEYS = {
    "mbtiType": "mbti_type",
    "energyLevel": "energy_level",
    "experienceLevelNeeded": "experience_level_needed",
    "specialNeeds": "special_needs",
    "daysInShelter": "days_in_shelter",
    "hdbApproved": "hdb_approved",
    "personalityTag": "personality_tag",
}


def _rename_keys(data: Dict[str, Any], mapping: Dict[str, str]) -> Dict[str, Any]:
    return {mapping.get(k, k): v for k, v in data.items()}


@dataclass
class UserProfile:
    """
    Adopter profile produced once by the onboarding quiz.

    Attributes:
        mbti: 4-letter MBTI code, or None if not answered
        activity_level: Lifestyle activity, mapped to a synthetic energy value
        living_space: Housing type (used by the HDB filter, not by scoring)
        time_available: Daily time budget (display only)
        experience: Prior pet experience
    """
    mbti: Optional[str] = None
    activity_level: ActivityLevel = ActivityLevel.UNKNOWN
    living_space: LivingSpace = LivingSpace.UNKNOWN
    time_available: TimeAvailable = TimeAvailable.UNKNOWN
    experience: ExperienceLevel = ExperienceLevel.UNKNOWN

    def __post_init__(self):
        """Normalize MBTI code and coerce string answers to enums."""
        self.mbti = normalize_mbti(self.mbti, owner="user profile")
        self.activity_level = coerce_enum(ActivityLevel, self.activity_level)
        self.living_space = coerce_enum(LivingSpace, self.living_space)
        self.time_available = coerce_enum(TimeAvailable, self.time_available)
        self.experience = coerce_enum(ExperienceLevel, self.experience)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary with string values."""
        return {
            "mbti": self.mbti,
            "activity_level": self.activity_level.value,
            "living_space": self.living_space.value,
            "time_available": self.time_available.value,
            "experience": self.experience.value,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "UserProfile":
        """Create from a dictionary with camelCase or snake_case keys."""
        data = _rename_keys(data, _PROFILE_KEYS)
        return cls(
            mbti=data.get("mbti"),
            activity_level=data.get("activity_level"),
            living_space=data.get("living_space"),
            time_available=data.get("time_available"),
            experience=data.get("experience"),
        )


@dataclass
class AnimalRecord:
    """
    Static catalog entry. Read-only to the engine.

    Attributes:
        id: Unique identifier, stable across the catalog
        name: Display name, used in explanation phrasings
        energy_level: Integer 1-5
        mbti_type: 4-letter MBTI code, or None
        experience_level_needed: Care experience the animal requires
        special_needs: Whether the animal has special needs
        age: Age in whole years
        days_in_shelter: Days spent waiting for adoption
        hdb_approved: Whether HDB flats may keep this animal
        species, breed, bio, personality_tag: Descriptive, not scored
    """
    id: str
    name: str
    energy_level: int
    mbti_type: Optional[str] = None
    experience_level_needed: CareLevel = CareLevel.UNKNOWN
    special_needs: bool = False
    age: int = 0
    days_in_shelter: int = 0
    hdb_approved: bool = False
    species: Species = Species.UNKNOWN
    breed: str = ""
    bio: str = ""
    personality_tag: str = ""

    def __post_init__(self):
        """Validate numeric ranges and coerce enums."""
        if self.id is None or str(self.id).strip() == "":
            raise ValueError("Animal record requires a non-empty id")
        self.id = str(self.id)
        if not self.name:
            raise ValueError(f"Animal {self.id} requires a name")

        self.energy_level = _require_int("energy_level", self.energy_level, 1, 5)
        self.age = _require_int("age", self.age, 0)
        self.days_in_shelter = _require_int("days_in_shelter", self.days_in_shelter, 0)
        self.special_needs = _require_bool("special_needs", self.special_needs)
        self.hdb_approved = _require_bool("hdb_approved", self.hdb_approved)

        self.mbti_type = normalize_mbti(self.mbti_type, owner=f"animal {self.id}")
        self.experience_level_needed = coerce_enum(CareLevel, self.experience_level_needed)
        self.species = coerce_enum(Species, self.species)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary with string values."""
        return {
            "id": self.id,
            "name": self.name,
            "species": self.species.value,
            "breed": self.breed,
            "age": self.age,
            "bio": self.bio,
            "mbti_type": self.mbti_type,
            "energy_level": self.energy_level,
            "experience_level_needed": self.experience_level_needed.value,
            "special_needs": self.special_needs,
            "days_in_shelter": self.days_in_shelter,
            "hdb_approved": self.hdb_approved,
            "personality_tag": self.personality_tag,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AnimalRecord":
        """Create from a dictionary with camelCase or snake_case keys."""
        data = _rename_keys(data, _ANIMAL_KEYS)
        missing = [k for k in ("id", "name", "energy_level") if data.get(k) is None]
        if missing:
            raise ValueError(f"Animal record missing required fields: {missing}")
        known = set(cls.__dataclass_fields__)
        unknown = sorted(k for k in data if k not in known)
        if unknown:
            logger.debug(f"Ignoring unknown animal fields: {unknown}")
        return cls(**{k: v for k, v in data.items() if k in known and v is not None})


@dataclass
class ScoredAnimal:
    """
    An animal with the compatibility score attached at the moment of a like.

    The wrapped AnimalRecord is never mutated.
    """
    animal: AnimalRecord
    score: int

    @property
    def id(self) -> str:
        return self.animal.id

    def to_dict(self) -> Dict[str, Any]:
        result = self.animal.to_dict()
        result["score"] = self.score
        return result


@dataclass
class MatchExplanation:
    """
    Explanation shown after a like.

    Attributes:
        bullets: Exactly three explanation strings, in priority order
        waiting_note: Long-stay / special-needs note, or None
    """
    bullets: Tuple[str, ...] = field(default_factory=tuple)
    waiting_note: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {"bullets": list(self.bullets), "waiting_note": self.waiting_note}
