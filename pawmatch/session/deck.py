"""
Swipe deck over a scored catalog.

The compatibility engine is stateless; this class is the caller that owns
the cursor. It keeps the liked and passed ids for one adopter session and
re-derives the display order from the engine on every call.
"""

import logging
from typing import Dict, List, Optional, Sequence

from ..matching.reasons import generate_match_reasons
from ..matching.schema import AnimalRecord, MatchExplanation, ScoredAnimal, UserProfile
from ..matching.scoring import ScoringConfig, compute_match_score, sort_animals_by_score
from .filters import filter_for_living_space

logger = logging.getLogger(__name__)


class SwipeDeck:
    """
    One adopter's pass through the catalog.

    Attributes:
        profile: Adopter profile the deck is scored against
        config: Scoring constants passed through to the engine
        liked: Scored animals in the order they were liked
    """

    def __init__(
        self,
        catalog: Sequence[AnimalRecord],
        profile: UserProfile,
        config: Optional[ScoringConfig] = None
    ):
        self._catalog: Dict[str, AnimalRecord] = {}
        for animal in catalog:
            if animal.id in self._catalog:
                raise ValueError(f"Duplicate animal id in catalog: {animal.id}")
            self._catalog[animal.id] = animal
        self.config = config
        self.profile = profile
        self.liked: List[ScoredAnimal] = []
        self._passed: List[str] = []
        logger.info(f"Initialized SwipeDeck with {len(self._catalog)} animals")

    @property
    def swiped_ids(self) -> set:
        return {scored.id for scored in self.liked} | set(self._passed)

    @property
    def passed_ids(self) -> List[str]:
        return list(self._passed)

    def available(self) -> List[AnimalRecord]:
        """Unswiped animals the adopter may house, best match first."""
        swiped = self.swiped_ids
        eligible = filter_for_living_space(list(self._catalog.values()), self.profile.living_space)
        unswiped = [animal for animal in eligible if animal.id not in swiped]
        return sort_animals_by_score(unswiped, self.profile, self.config)

    @property
    def remaining(self) -> int:
        return len(self.available())

    def _unswiped(self, animal_id: str) -> AnimalRecord:
        animal_id = str(animal_id)
        if animal_id not in self._catalog:
            raise ValueError(f"Unknown animal id: {animal_id}")
        if animal_id in self.swiped_ids:
            raise ValueError(f"Animal {animal_id} has already been swiped")
        return self._catalog[animal_id]

    def like(self, animal_id: str) -> ScoredAnimal:
        """
        Record a like and attach the compatibility score.

        Raises:
            ValueError: If the id is unknown or already swiped
        """
        animal = self._unswiped(animal_id)
        scored = ScoredAnimal(animal=animal, score=compute_match_score(self.profile, animal, self.config))
        self.liked.append(scored)
        logger.info(f"Liked {animal.name} ({animal.id}) with score {scored.score}")
        return scored

    def pass_animal(self, animal_id: str) -> None:
        """
        Record a pass.

        Raises:
            ValueError: If the id is unknown or already swiped
        """
        animal = self._unswiped(animal_id)
        self._passed.append(animal.id)
        logger.info(f"Passed on {animal.name} ({animal.id})")

    def explain(self, animal_id: str) -> MatchExplanation:
        """Match explanation for a liked animal."""
        for scored in self.liked:
            if scored.id == str(animal_id):
                return generate_match_reasons(self.profile, scored.animal, self.config)
        raise ValueError(f"Animal {animal_id} has not been liked")

    def reset(self, profile: UserProfile) -> None:
        """Start over with a new profile (quiz retake)."""
        self.profile = profile
        self.liked = []
        self._passed = []
        logger.info(f"Reset SwipeDeck for profile {profile.mbti}")
