"""
PawMatch - Pet Adoption Compatibility Engine

This package scores how well an adopter suits each adoptable animal, based
on a short personality and lifestyle quiz, and explains each match.

Key Design Decisions:
- Scoring is a pure function of (profile, animal); no state between calls
- Additive point budget: MBTI letters, energy, experience, senior/special boost
- Out-of-domain answers fall back to neutral values instead of raising
- Swipe progress (likes, passes) is owned by the caller, not the engine
"""

__version__ = "1.0.0"
