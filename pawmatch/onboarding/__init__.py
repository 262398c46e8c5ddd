"""Onboarding quiz producing adopter profiles."""

from .quiz import QUIZ_QUESTIONS, QuizQuestion, build_user_profile, compute_mbti

__all__ = ["QUIZ_QUESTIONS", "QuizQuestion", "build_user_profile", "compute_mbti"]
