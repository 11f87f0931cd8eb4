"""
Shared fixtures for SkillSwap tests.
"""

from datetime import timedelta

import pytest
from fastapi.testclient import TestClient

import main
from schemas import ExchangeSession, ParticipantSide, SkillListing, UserSummary
from store import CredentialLedger, ListingStore, SessionStore
from tests.fakes import BASE_TIME, WALLET_A, WALLET_B, FakeTagger


@pytest.fixture
def make_listing():
    """Build a SkillListing with sensible defaults.

    Usage:
        listing = make_listing(title="React", reputation=4.8, day=15)
    """
    counter = {"n": 0}

    def _make(
        title="React Development",
        category="Frontend",
        type="teach",
        location="remote",
        level="intermediate",
        reputation=4.0,
        verified=False,
        day=1,
        **overrides,
    ):
        counter["n"] += 1
        data = dict(
            id=f"{counter['n']:024x}",
            title=title,
            category=category,
            level=level,
            type=type,
            location=location,
            duration="2 hours",
            description=f"{title} session",
            user=UserSummary(name=f"user{counter['n']}", reputation=reputation, verified=verified),
            created_at=BASE_TIME + timedelta(days=day),
        )
        data.update(overrides)
        return SkillListing(**data)

    return _make


@pytest.fixture
def make_session():
    """Build an open ExchangeSession between WALLET_A and WALLET_B."""

    def _make(a_done=False, b_done=False, status=None, **overrides):
        if status is None:
            status = "completed" if a_done and b_done else "in-progress"
        data = dict(
            id="65a500000000000000000001",
            side_a=ParticipantSide(skill_title="React Development", owner=WALLET_A, completed=a_done),
            side_b=ParticipantSide(skill_title="UI/UX Design Feedback", owner=WALLET_B, completed=b_done),
            status=status,
            completed_at=BASE_TIME if status == "completed" else None,
        )
        data.update(overrides)
        return ExchangeSession(**data)

    return _make


@pytest.fixture
def fake_tagger():
    return FakeTagger()


@pytest.fixture
def stores():
    """Fresh, empty stores wired into the app for one test."""
    listing_store = ListingStore()
    session_store = SessionStore()
    ledger = CredentialLedger()
    return listing_store, session_store, ledger


@pytest.fixture
def client(stores, fake_tagger):
    """FastAPI test client with isolated stores and a fake tagger."""
    listing_store, session_store, ledger = stores
    main.app.dependency_overrides[main.get_listing_store] = lambda: listing_store
    main.app.dependency_overrides[main.get_session_store] = lambda: session_store
    main.app.dependency_overrides[main.get_credential_ledger] = lambda: ledger
    main.app.dependency_overrides[main.get_tagger] = lambda: fake_tagger
    yield TestClient(main.app)
    main.app.dependency_overrides.clear()
