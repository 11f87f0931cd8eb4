"""Tests for listing intake."""

from datetime import timezone

import pytest

import listings
from errors import ValidationError
from tests.fakes import BASE_TIME


def _form(**overrides):
    form = {
        "title": "React Development",
        "category": "Frontend Development",
        "level": "intermediate",
        "type": "teach",
        "location": "remote",
        "duration": "2 hours",
        "description": "Hooks and state management.",
        "tags": [],
        "user": {"name": "Sarah Chen", "reputation": 4.8, "verified": True},
    }
    form.update(overrides)
    return form


def test_create_listing():
    listing = listings.create_listing(_form(), now=BASE_TIME)
    assert listing.title == "React Development"
    assert listing.created_at == BASE_TIME
    assert listing.user.verified is True
    assert len(listing.id) == 24


def test_missing_fields_are_listed():
    with pytest.raises(ValidationError) as exc:
        listings.create_listing(_form(title="  ", level="", description=None))
    assert exc.value.fields == ["title", "level", "description"]
    assert "Please fill in all required fields" in str(exc.value)


def test_duration_is_optional():
    assert listings.create_listing(_form(duration="")).duration == ""


def test_unknown_level_is_rejected():
    with pytest.raises(ValidationError) as exc:
        listings.create_listing(_form(level="expert"))
    assert exc.value.fields == ["level"]


def test_reputation_out_of_range_is_rejected():
    with pytest.raises(ValidationError):
        listings.create_listing(_form(user={"name": "X", "reputation": 7}))


def test_user_and_extra_tags_are_merged():
    listing = listings.create_listing(
        _form(tags=[" react ", "hooks", ""]), extra_tags=["react", "frontend"]
    )
    assert listing.tags == ["react", "hooks", "frontend"]


def test_naive_timestamps_are_utc():
    listing = listings.create_listing(_form(), now=BASE_TIME.replace(tzinfo=None))
    assert listing.created_at.tzinfo == timezone.utc


def test_normalize_tags():
    assert listings.normalize_tags(["a", " a", "b ", "", None]) == ["a", "b"]
    assert listings.normalize_tags(None) == []


def test_categories_end_with_other():
    assert listings.CATEGORIES[-1] == "Other"
    assert len(listings.CATEGORIES) == len(set(listings.CATEGORIES))
