"""Swipe session state kept by the caller of the engine."""

from .deck import SwipeDeck
from .filters import filter_for_living_space

__all__ = ["SwipeDeck", "filter_for_living_space"]
