"""
Unit tests for matching/scoring.py

Tests the additive point budget, absent-input fallbacks and catalog ordering.
"""

import pytest

from pawmatch.matching.schema import AnimalRecord, UserProfile
from pawmatch.matching.scoring import (
    ScoringConfig,
    compute_match_score,
    count_mbti_matches,
    round_half_up,
    score_breakdown,
    sort_animals_by_score,
    user_energy,
)


def make_animal(**overrides):
    fields = {
        "id": "a1",
        "name": "Biscuit",
        "mbti_type": "ENFP",
        "energy_level": 5,
        "experience_level_needed": "beginner",
        "age": 2,
        "special_needs": False,
        "days_in_shelter": 10,
    }
    fields.update(overrides)
    return AnimalRecord(**fields)


def make_profile(**overrides):
    fields = {
        "mbti": "ENFP",
        "activity_level": "very_active",
        "experience": "first_timer",
    }
    fields.update(overrides)
    return UserProfile(**fields)


def test_perfect_match_without_bonus():
    """MBTI 50 + energy 25 + experience 15, young animal gets no boost."""
    assert compute_match_score(make_profile(), make_animal()) == 90


def test_total_mismatch_scores_zero_even_for_special_needs():
    animal = make_animal(
        mbti_type="ISTJ", energy_level=1, experience_level_needed="experienced",
        age=8, special_needs=True, days_in_shelter=120,
    )
    assert compute_match_score(make_profile(), animal) == 0


def test_senior_boost_applies_above_threshold():
    """83.75 + 10 = 93.75, rounded once to 94."""
    profile = make_profile(mbti="ISTJ", activity_level="homebody", experience="very_experienced")
    animal = make_animal(
        mbti_type="ISTJ", energy_level=2, experience_level_needed="experienced",
        age=9, days_in_shelter=95,
    )
    breakdown = score_breakdown(profile, animal)
    assert breakdown["energy"] == 18.75
    assert breakdown["bonus"] == 10
    assert breakdown["total"] == 93.75
    assert compute_match_score(profile, animal) == 94


def test_absent_inputs_score_zero():
    assert compute_match_score(None, make_animal()) == 0
    assert compute_match_score(make_profile(), None) == 0
    assert compute_match_score(None, None) == 0


def test_absent_mbti_contributes_nothing():
    profile = make_profile(mbti=None)
    animal = make_animal()
    assert score_breakdown(profile, animal)["mbti"] == 0
    assert compute_match_score(profile, animal) == 40


def test_count_mbti_matches_distinguishes_absent_from_zero():
    assert count_mbti_matches("ENFP", "ISTJ") == 0
    assert count_mbti_matches("ENFP", None) is None
    assert count_mbti_matches("ENFP", "XXXX") is None
    assert count_mbti_matches("ENFP", "ENTJ") == 2


@pytest.mark.parametrize("animal_mbti,expected", [
    ("ISTJ", 0.0),
    ("ESTJ", 12.5),
    ("ENTJ", 25.0),
    ("ENFJ", 37.5),
    ("ENFP", 50.0),
])
def test_mbti_points_per_matching_letter(animal_mbti, expected):
    breakdown = score_breakdown(make_profile(), make_animal(mbti_type=animal_mbti))
    assert breakdown["mbti"] == expected


def test_each_extra_mbti_match_adds_exactly_12_5():
    totals = [
        score_breakdown(make_profile(), make_animal(mbti_type=code))["total"]
        for code in ("ISTJ", "ESTJ", "ENTJ", "ENFJ", "ENFP")
    ]
    assert [b - a for a, b in zip(totals, totals[1:])] == [12.5] * 4


@pytest.mark.parametrize("energy_level,expected", [
    (5, 25.0),
    (4, 18.75),
    (3, 12.5),
    (2, 6.25),
    (1, 0.0),
])
def test_energy_penalty_is_linear(energy_level, expected):
    breakdown = score_breakdown(make_profile(), make_animal(energy_level=energy_level))
    assert breakdown["energy"] == expected


def test_score_non_increasing_with_energy_gap():
    scores = [
        compute_match_score(make_profile(mbti=None), make_animal(energy_level=level))
        for level in (5, 4, 3, 2, 1)
    ]
    assert scores == sorted(scores, reverse=True)


def test_activity_level_energy_mapping():
    assert user_energy(make_profile(activity_level="very_active")) == 5
    assert user_energy(make_profile(activity_level="moderately_active")) == 3
    assert user_energy(make_profile(activity_level="homebody")) == 1


def test_unrecognized_activity_defaults_to_neutral_energy():
    profile = make_profile(activity_level="couch_potato")
    assert user_energy(profile) == 3
    assert score_breakdown(profile, make_animal(energy_level=3))["energy"] == 25


@pytest.mark.parametrize("experience,needed,expected", [
    ("first_timer", "beginner", 15),
    ("first_timer", "intermediate", 5),
    ("first_timer", "experienced", 0),
    ("some_experience", "beginner", 10),
    ("some_experience", "intermediate", 15),
    ("some_experience", "experienced", 5),
    ("very_experienced", "beginner", 8),
    ("very_experienced", "intermediate", 12),
    ("very_experienced", "experienced", 15),
])
def test_experience_table(experience, needed, expected):
    breakdown = score_breakdown(
        make_profile(experience=experience),
        make_animal(experience_level_needed=needed),
    )
    assert breakdown["experience"] == expected


def test_unrecognized_experience_contributes_zero():
    assert score_breakdown(make_profile(experience="expert"), make_animal())["experience"] == 0
    assert score_breakdown(make_profile(), make_animal(experience_level_needed="guru"))["experience"] == 0


def test_bonus_not_applied_at_or_below_threshold():
    # MBTI 25 + energy 25 + experience 10 = exactly 60
    profile = make_profile(experience="some_experience")
    animal = make_animal(mbti_type="ENTJ", age=12, special_needs=True)
    breakdown = score_breakdown(profile, animal)
    assert breakdown["total"] == 60
    assert breakdown["bonus"] == 0
    assert compute_match_score(profile, animal) == 60


def test_special_needs_bonus_for_young_animal():
    animal = make_animal(mbti_type="ENFJ", special_needs=True)
    # 37.5 + 25 + 15 = 77.5, +10
    assert compute_match_score(make_profile(), animal) == 88


def test_rounding_is_half_up():
    assert round_half_up(42.5) == 43
    assert round_half_up(12.5) == 13
    assert round_half_up(18.75) == 19
    assert round_half_up(46.25) == 46
    # MBTI 25 + energy 12.5 + experience 5 = 42.5
    animal = make_animal(mbti_type="ESFJ", energy_level=3, experience_level_needed="intermediate")
    assert compute_match_score(make_profile(), animal) == 43


def test_score_clamped_to_max_score():
    config = ScoringConfig(bonus_points=30.0)
    profile = make_profile()
    animal = make_animal(age=10)
    assert compute_match_score(profile, animal, config) == 100


def test_score_bounds_across_grid():
    codes = ["ENFP", "ISTJ", "INTP", "ESFJ"]
    for user_code in codes:
        for animal_code in codes:
            for energy in range(1, 6):
                for needed in ("beginner", "intermediate", "experienced"):
                    score = compute_match_score(
                        make_profile(mbti=user_code),
                        make_animal(mbti_type=animal_code, energy_level=energy,
                                    experience_level_needed=needed, age=8),
                    )
                    assert 0 <= score <= 100
                    assert isinstance(score, int)


def test_sort_orders_by_descending_score():
    animals = [
        make_animal(id="low", mbti_type="ISTJ", energy_level=1),
        make_animal(id="high"),
        make_animal(id="mid", mbti_type="ENTJ", energy_level=3),
    ]
    profile = make_profile()
    ordered = sort_animals_by_score(animals, profile)

    assert [a.id for a in ordered] == ["high", "mid", "low"]
    scores = [compute_match_score(profile, a) for a in ordered]
    assert all(x >= y for x, y in zip(scores, scores[1:]))


def test_sort_is_stable_for_ties_and_returns_new_list():
    animals = [make_animal(id=str(i), name=f"Twin {i}") for i in range(5)]
    original = list(animals)

    ordered = sort_animals_by_score(animals, make_profile())

    assert [a.id for a in ordered] == ["0", "1", "2", "3", "4"]
    assert ordered is not animals
    assert animals == original


def test_sort_with_absent_profile_keeps_catalog_order():
    animals = [make_animal(id="b"), make_animal(id="a")]
    assert [a.id for a in sort_animals_by_score(animals, None)] == ["b", "a"]


def test_sort_empty_catalog():
    assert sort_animals_by_score([], make_profile()) == []


def test_scoring_config_validation():
    with pytest.raises(ValueError, match="bonus_threshold"):
        ScoringConfig(bonus_threshold=150).validate()
    with pytest.raises(ValueError, match="non-negative"):
        ScoringConfig(energy_penalty_per_step=-1).validate()


def test_scoring_config_from_config_ignores_unknown_keys():
    config = ScoringConfig.from_config({"scoring": {"bonus_threshold": 70, "colour": "blue"}})
    assert config.bonus_threshold == 70
    assert config.mbti_points_per_dimension == 12.5


def test_default_stage_budget_matches_max_score():
    config = ScoringConfig()
    assert config.stage_budget == config.max_score


def test_scoring_does_not_mutate_inputs():
    profile = make_profile()
    animal = make_animal()
    before = (profile.to_dict(), animal.to_dict())
    compute_match_score(profile, animal)
    assert (profile.to_dict(), animal.to_dict()) == before
