"""Housing filter applied to the catalog before scoring."""

import logging
from typing import List, Sequence

from ..matching.schema import AnimalRecord, LivingSpace, coerce_enum

logger = logging.getLogger(__name__)


def filter_for_living_space(animals: Sequence[AnimalRecord], living_space) -> List[AnimalRecord]:
    """
    Keep only animals the adopter may legally house.

    HDB flats only allow HDB-approved animals; every other housing type
    (including an unknown one) sees the full catalog.

    Args:
        animals: Catalog entries
        living_space: LivingSpace member or its string value

    Returns:
        New list, catalog order preserved
    """
    living_space = coerce_enum(LivingSpace, living_space)
    if living_space is not LivingSpace.HDB:
        return list(animals)

    allowed = [animal for animal in animals if animal.hdb_approved]
    logger.debug(f"HDB filter kept {len(allowed)}/{len(animals)} animals")
    return allowed
