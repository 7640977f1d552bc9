from __future__ import annotations

from datetime import date

import pytest

from devconnector.errors import ProfileNotFound
from devconnector.models.profile import Profile
from devconnector.schemas.profile import EducationCreate, ExperienceCreate, ProfileUpsert
from devconnector.services import profile_service


def _experience(title: str) -> ExperienceCreate:
    return ExperienceCreate(title=title, company="Acme", from_date=date(2020, 1, 1))


def _education(school: str) -> EducationCreate:
    return EducationCreate(school=school, degree="BSc", fieldofstudy="CS", from_date=date(2015, 9, 1))


def test_build_profile_fields_splits_skills_and_collects_social() -> None:
    payload = ProfileUpsert(
        status="Developer",
        skills=" js, ts ,go,, ",
        company="",
        bio="  Hello  ",
        twitter="https://twitter.com/jane",
        youtube="   ",
    )
    fields = profile_service.build_profile_fields(payload)
    assert fields == {
        "status": "Developer",
        "bio": "Hello",
        "skills": ["js", "ts", "go"],
        "social": {"twitter": "https://twitter.com/jane"},
    }


def test_upsert_twice_keeps_a_single_profile(db, make_user) -> None:
    user = make_user()
    fields = {"status": "Developer", "skills": ["js", "ts"], "social": {}}

    first = profile_service.upsert(db, user.id, fields)
    second = profile_service.upsert(db, user.id, fields)

    assert first.id == second.id
    assert db.query(Profile).filter(Profile.user_id == user.id).count() == 1
    assert second.status == "Developer"
    assert second.skills == ["js", "ts"]


def test_upsert_update_leaves_absent_fields_untouched(db, make_user) -> None:
    user = make_user()
    profile_service.upsert(db, user.id, {"status": "Developer", "company": "Acme", "skills": ["js"], "social": {}})

    updated = profile_service.upsert(db, user.id, {"status": "Senior Developer", "social": {"github": "x"}})

    assert updated.status == "Senior Developer"
    assert updated.company == "Acme"
    assert updated.skills == ["js"]
    assert updated.social == {"github": "x"}


def test_upsert_retries_as_update_when_insert_loses_race(db, make_user, monkeypatch) -> None:
    user = make_user()
    existing = profile_service.upsert(db, user.id, {"status": "Developer", "skills": ["js"], "social": {}})

    # Make the first lookup miss, as if another request inserted in between.
    real_find = profile_service._find_profile
    calls = {"n": 0}

    def racing_find(session, user_id):
        calls["n"] += 1
        if calls["n"] == 1:
            return None
        return real_find(session, user_id)

    monkeypatch.setattr(profile_service, "_find_profile", racing_find)

    result = profile_service.upsert(db, user.id, {"status": "Lead", "social": {}})

    assert result.id == existing.id
    assert result.status == "Lead"
    assert db.query(Profile).count() == 1


def test_get_own_without_profile_raises(db, make_user) -> None:
    user = make_user()
    with pytest.raises(ProfileNotFound) as excinfo:
        profile_service.get_own(db, user.id)
    assert excinfo.value.message == "There is no profile for this user"


@pytest.mark.parametrize("raw_id", ["abc", "", "1.5", "999", "99999999999999999999999", "-99999999999999999999999"])
def test_get_by_user_id_treats_malformed_and_unknown_alike(db, raw_id: str) -> None:
    with pytest.raises(ProfileNotFound) as excinfo:
        profile_service.get_by_user_id(db, raw_id)
    assert excinfo.value.message == "Profile not found"


def test_experience_is_prepended_with_fresh_ids(db, make_user) -> None:
    user = make_user()
    profile_service.upsert(db, user.id, {"status": "Developer", "social": {}})

    profile_service.add_experience(db, user.id, _experience("E1"))
    profile = profile_service.add_experience(db, user.id, _experience("E2"))

    titles = [entry["title"] for entry in profile.experience]
    assert titles == ["E2", "E1"]
    ids = [entry["id"] for entry in profile.experience]
    assert len(set(ids)) == 2
    assert profile.experience[0]["from"] == "2020-01-01"
    assert profile.experience[0]["current"] is False


def test_remove_experience_by_id_keeps_the_rest(db, make_user) -> None:
    user = make_user()
    profile_service.upsert(db, user.id, {"status": "Developer", "social": {}})
    profile_service.add_experience(db, user.id, _experience("E1"))
    profile_service.add_experience(db, user.id, _experience("E2"))
    profile = profile_service.add_experience(db, user.id, _experience("E3"))
    e3, e2, e1 = (entry["id"] for entry in profile.experience)

    profile = profile_service.remove_experience(db, user.id, e2)

    assert [entry["id"] for entry in profile.experience] == [e3, e1]


def test_remove_unknown_experience_id_removes_nothing(db, make_user) -> None:
    user = make_user()
    profile_service.upsert(db, user.id, {"status": "Developer", "social": {}})
    profile = profile_service.add_experience(db, user.id, _experience("E1"))
    e1 = profile.experience[0]["id"]

    profile = profile_service.remove_experience(db, user.id, "does-not-exist")

    assert [entry["id"] for entry in profile.experience] == [e1]


def test_education_add_and_remove(db, make_user) -> None:
    user = make_user()
    profile_service.upsert(db, user.id, {"status": "Developer", "social": {}})
    profile_service.add_education(db, user.id, _education("First"))
    profile = profile_service.add_education(db, user.id, _education("Second"))
    assert [entry["school"] for entry in profile.education] == ["Second", "First"]
    second_id = profile.education[0]["id"]

    profile = profile_service.remove_education(db, user.id, "missing")
    assert len(profile.education) == 2

    profile = profile_service.remove_education(db, user.id, second_id)
    assert [entry["school"] for entry in profile.education] == ["First"]


def test_nested_edits_require_a_profile(db, make_user) -> None:
    user = make_user()
    with pytest.raises(ProfileNotFound):
        profile_service.add_experience(db, user.id, _experience("E1"))
    with pytest.raises(ProfileNotFound):
        profile_service.remove_education(db, user.id, "anything")
