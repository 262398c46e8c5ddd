"""
Onboarding quiz that produces a UserProfile.

Eight single-choice questions. Questions 1-4 each contribute one MBTI
letter; questions 5-8 map directly to profile fields:

    Q1 -> E/I    Q2 -> T/F    Q3 -> J/P    Q4 -> S/N
    Q5 -> activity_level      Q6 -> living_space
    Q7 -> time_available      Q8 -> experience

The MBTI code is assembled in dimension order (Q1, Q4, Q2, Q3), not in
question order.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Mapping, Tuple

from ..matching.schema import UserProfile

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class QuizQuestion:
    """
    A single quiz question.

    Attributes:
        id: Question number (1-8)
        question: Prompt shown to the adopter
        field: UserProfile field (or "mbti") the answer feeds
        options: Allowed answer values mapped to their display labels
    """
    id: int
    question: str
    field: str
    options: Tuple[Tuple[str, str], ...]

    @property
    def values(self) -> Tuple[str, ...]:
        return tuple(value for value, _ in self.options)


QUIZ_QUESTIONS: Tuple[QuizQuestion, ...] = (
    QuizQuestion(1, "How do you recharge?", "mbti",
                 (("I", "Alone time"), ("E", "With others"))),
    QuizQuestion(2, "How do you make decisions?", "mbti",
                 (("T", "Logic & facts"), ("F", "Feelings & values"))),
    QuizQuestion(3, "How do you prefer your day?", "mbti",
                 (("J", "Planned & structured"), ("P", "Go with the flow"))),
    QuizQuestion(4, "How do you take in information?", "mbti",
                 (("S", "Details & routine"), ("N", "Big picture & ideas"))),
    QuizQuestion(5, "How active is your lifestyle?", "activity_level",
                 (("very_active", "Very active"),
                  ("moderately_active", "Moderately active"),
                  ("homebody", "Homebody"))),
    QuizQuestion(6, "Where do you live?", "living_space",
                 (("hdb", "HDB Flat"), ("condo", "Private Condo"), ("landed", "Landed Property"))),
    QuizQuestion(7, "How much time can you dedicate daily?", "time_available",
                 (("1_2_hrs", "1–2 hours"), ("3_4_hrs", "3–4 hours"), ("5_plus_hrs", "5+ hours"))),
    QuizQuestion(8, "Any experience with pets?", "experience",
                 (("first_timer", "First timer"),
                  ("some_experience", "Some experience"),
                  ("very_experienced", "Very experienced"))),
)

QUESTIONS_BY_ID: Dict[int, QuizQuestion] = {q.id: q for q in QUIZ_QUESTIONS}

# Question ids supplying MBTI letters, in code position order
MBTI_QUESTION_ORDER = (1, 4, 2, 3)


def _validated_answers(answers: Mapping[int, str]) -> Dict[int, str]:
    cleaned = {}
    for question in QUIZ_QUESTIONS:
        if question.id not in answers or answers[question.id] is None:
            raise ValueError(f"Missing answer to question {question.id}: {question.question}")
        value = str(answers[question.id]).strip()
        if question.field == "mbti":
            value = value.upper()
        if value not in question.values:
            raise ValueError(
                f"Invalid answer {answers[question.id]!r} to question {question.id}; "
                f"expected one of {list(question.values)}"
            )
        cleaned[question.id] = value
    return cleaned


def compute_mbti(answers: Mapping[int, str]) -> str:
    """
    Assemble the 4-letter MBTI code from questions 1-4.

    Args:
        answers: Mapping of question id to chosen value

    Returns:
        MBTI code such as "ENFP"

    Raises:
        ValueError: If any of questions 1-4 is unanswered or invalid
    """
    letters = []
    for qid in MBTI_QUESTION_ORDER:
        question = QUESTIONS_BY_ID[qid]
        raw = answers.get(qid)
        value = raw.strip().upper() if isinstance(raw, str) else raw
        if value not in question.values:
            raise ValueError(
                f"Invalid answer {raw!r} to question {qid}; "
                f"expected one of {list(question.values)}"
            )
        letters.append(value)
    return "".join(letters)


def build_user_profile(answers: Mapping[int, str]) -> UserProfile:
    """
    Build an adopter profile from completed quiz answers.

    Args:
        answers: Mapping of question id (1-8) to chosen option value

    Returns:
        UserProfile

    Raises:
        ValueError: If an answer is missing or not one of the question's options
    """
    cleaned = _validated_answers(answers)
    profile = UserProfile(
        mbti=compute_mbti(cleaned),
        activity_level=cleaned[5],
        living_space=cleaned[6],
        time_available=cleaned[7],
        experience=cleaned[8],
    )
    logger.info(f"Built profile from quiz: mbti={profile.mbti}, "
                f"activity={profile.activity_level.value}, experience={profile.experience.value}")
    return profile
