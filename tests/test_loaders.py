"""
Unit tests for data_loading/loaders.py

Tests catalog/profile loading from JSON, CSV and YAML.
"""

import json
from pathlib import Path

import pytest

from pawmatch.data_loading import catalog_to_frame, load_catalog, load_user_profile
from pawmatch.matching.schema import CareLevel, LivingSpace, ScoredAnimal

DATA_DIR = Path(__file__).parent.parent / "data"


def test_load_shipped_catalog():
    animals = load_catalog(str(DATA_DIR / "animals.json"))

    assert len(animals) == 8
    assert animals[0].id == "a1"
    assert animals[0].mbti_type == "ENFP"
    assert animals[1].special_needs is True
    assert animals[2].hdb_approved is False


def test_load_shipped_profile():
    profile = load_user_profile(str(DATA_DIR / "sample_profile.yaml"))
    assert profile.mbti == "ENFP"
    assert profile.living_space is LivingSpace.HDB


def test_load_csv_catalog(tmp_path):
    csv_path = tmp_path / "animals.csv"
    csv_path.write_text(
        "id,name,species,age,mbtiType,energyLevel,experienceLevelNeeded,"
        "specialNeeds,daysInShelter,hdbApproved\n"
        "1,Biscuit,dog,2,ENFP,5,beginner,false,10,true\n"
        "2,Mochi,cat,9,,1,experienced,true,120,true\n"
    )

    animals = load_catalog(str(csv_path))

    assert [a.id for a in animals] == ["1", "2"]
    assert animals[1].mbti_type is None
    assert animals[1].special_needs is True
    assert animals[1].experience_level_needed is CareLevel.EXPERIENCED
    assert animals[0].energy_level == 5
    assert type(animals[0].age) is int


def test_load_csv_catalog_with_yes_no_flags(tmp_path):
    csv_path = tmp_path / "animals.csv"
    csv_path.write_text(
        "id,name,energyLevel,specialNeeds,hdbApproved\n"
        "1,Biscuit,5,no,yes\n"
        "2,Mochi,1,yes,no\n"
    )

    animals = load_catalog(str(csv_path))

    assert [a.special_needs for a in animals] == [False, True]
    assert [a.hdb_approved for a in animals] == [True, False]


def test_load_catalog_rejects_unparseable_flag(tmp_path):
    path = tmp_path / "catalog.json"
    path.write_text(json.dumps([{"id": "x", "name": "Rex", "energyLevel": 3, "hdbApproved": "maybe"}]))
    with pytest.raises(ValueError, match="Invalid catalog row 0"):
        load_catalog(str(path))


def test_load_json_object_with_animals_key(tmp_path):
    path = tmp_path / "catalog.json"
    path.write_text(json.dumps({"animals": [{"id": "x", "name": "Rex", "energyLevel": 3}]}))
    animals = load_catalog(str(path))
    assert animals[0].name == "Rex"


def test_missing_catalog_file():
    with pytest.raises(FileNotFoundError):
        load_catalog("does/not/exist.json")


def test_empty_catalog_file(tmp_path):
    path = tmp_path / "empty.csv"
    path.write_text("id,name,energyLevel\n")
    with pytest.raises(ValueError, match="empty"):
        load_catalog(str(path))


def test_invalid_row_reports_index(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text(json.dumps([
        {"id": "ok", "name": "Fine", "energyLevel": 3},
        {"id": "bad", "name": "Hyper", "energyLevel": 9},
    ]))
    with pytest.raises(ValueError, match="row 1"):
        load_catalog(str(path))


def test_duplicate_ids_rejected(tmp_path):
    path = tmp_path / "dupes.json"
    path.write_text(json.dumps([
        {"id": "a", "name": "One", "energyLevel": 3},
        {"id": "a", "name": "Two", "energyLevel": 2},
    ]))
    with pytest.raises(ValueError, match="Duplicate"):
        load_catalog(str(path))


def test_unsupported_extension(tmp_path):
    path = tmp_path / "animals.xml"
    path.write_text("<animals/>")
    with pytest.raises(ValueError, match="Unsupported"):
        load_catalog(str(path))


def test_profile_must_be_mapping(tmp_path):
    path = tmp_path / "profile.yaml"
    path.write_text("- ENFP\n")
    with pytest.raises(ValueError, match="mapping"):
        load_user_profile(str(path))


def test_profile_from_json(tmp_path):
    path = tmp_path / "profile.json"
    path.write_text(json.dumps({"mbti": "ISTJ", "activity_level": "homebody"}))
    profile = load_user_profile(str(path))
    assert profile.mbti == "ISTJ"


def test_catalog_to_frame_ranks_and_tiers():
    animals = load_catalog(str(DATA_DIR / "animals.json"))[:3]
    scored = [ScoredAnimal(animal=a, score=s) for a, s in zip(animals, [90, 61, 12])]

    frame = catalog_to_frame(scored)

    assert list(frame["rank"]) == [1, 2, 3]
    assert list(frame["tier"]) == ["strong", "good", "fair"]
    assert frame.loc[0, "mbti_label"] == "The Campaigner"
    assert frame.loc[0, "name"] == "Biscuit"
