"""
Domain Schemas for SkillSwap

Each Pydantic model below is a value the exchange core reads or produces.
Listings, sessions and credentials are frozen; sessions are replaced, never edited in
place, by the transition functions in exchange.py.
"""
from datetime import datetime, timezone
from enum import Enum
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

Level = Literal["beginner", "intermediate", "advanced"]
ListingType = Literal["teach", "learn"]
Location = Literal["remote", "in-person"]
SessionStatus = Literal["locked", "in-progress", "completed"]

OPEN_STATUSES = ("locked", "in-progress")


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class UserSummary(BaseModel):
    """
    Owner of a listing as shown next to it in discovery.
    """
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Display name")
    reputation: float = Field(0.0, ge=0, le=5, description="Average rating, 0-5")
    verified: bool = Field(False, description="Identity verified")


class SkillListing(BaseModel):
    """
    A posted skill offer (teach) or request (learn). Read-only once created.
    """
    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    category: str
    level: Level
    type: ListingType
    location: Location
    duration: str = ""
    description: str
    user: UserSummary
    created_at: datetime
    tags: List[str] = Field(default_factory=list, description="User and AI tags")
    availability: Optional[str] = None

    @field_validator("created_at")
    @classmethod
    def _created_at_utc(cls, value: datetime) -> datetime:
        return as_utc(value)


class SkillQuery(BaseModel):
    """
    Discovery query. Rebuilt by the caller on every parameter change.
    """
    model_config = ConfigDict(frozen=True)

    search_term: str = ""
    type_filter: Literal["all", "teach", "learn"] = "all"
    location_filter: Literal["all", "remote", "in-person"] = "all"
    sort_mode: Literal["recent", "reputation", "verified"] = "recent"


class SessionOutline(BaseModel):
    """
    Plan produced by the external matching service. Never edited here.
    """
    model_config = ConfigDict(frozen=True)

    objectives: List[str] = Field(default_factory=list)
    timeline: List[str] = Field(default_factory=list)
    deliverables: List[str] = Field(default_factory=list)


class ParticipantSide(BaseModel):
    """
    One participant's half of an exchange session.
    """
    model_config = ConfigDict(frozen=True)

    skill_title: str
    owner: str = Field(..., min_length=1, description="Wallet address of the side's owner")
    owner_name: Optional[str] = None
    completed: bool = False


class ExchangeSession(BaseModel):
    """
    A matched pair of listings under bilateral completion tracking.
    """
    model_config = ConfigDict(frozen=True)

    id: str
    side_a: ParticipantSide
    side_b: ParticipantSide
    status: SessionStatus = "in-progress"
    outline: SessionOutline = Field(default_factory=SessionOutline)
    contract_address: Optional[str] = None
    created_at: datetime = Field(default_factory=utcnow)
    completed_at: Optional[datetime] = None

    @field_validator("created_at", "completed_at")
    @classmethod
    def _timestamps_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return as_utc(value)

    @model_validator(mode="after")
    def _check_invariants(self) -> "ExchangeSession":
        if self.side_a.owner == self.side_b.owner:
            raise ValueError("both sides of a session cannot belong to the same wallet")
        both_done = self.side_a.completed and self.side_b.completed
        if both_done != (self.status == "completed"):
            raise ValueError("status must be 'completed' exactly when both sides have confirmed")
        if (self.completed_at is not None) != (self.status == "completed"):
            raise ValueError("completed_at is set only on completed sessions")
        return self


class ConfirmationOutcome(str, Enum):
    CONFIRMED = "confirmed"
    ALREADY_CONFIRMED = "already_confirmed"
    SESSION_COMPLETED = "session_completed"


class ReputationCredential(BaseModel):
    """
    Issued to each participant once their session completes.
    """
    model_config = ConfigDict(frozen=True)

    id: str
    session_id: str
    holder: str
    skill_title: str
    counterparty: str
    issued_at: datetime = Field(default_factory=utcnow)
