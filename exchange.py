"""
Bilateral completion for exchange sessions.

A session has two sides, each owned by one wallet. Each owner confirms
their own side; the session completes when the second side confirms.
Sessions are never edited in place: confirm_completion returns a new
session value and an outcome tag, and the caller decides what to store.
"""
from datetime import datetime
from typing import Optional, Tuple

from bson import ObjectId

from errors import NotAParticipant, ValidationError
from schemas import (
    OPEN_STATUSES,
    ConfirmationOutcome,
    ExchangeSession,
    ParticipantSide,
    SessionOutline,
    as_utc,
    utcnow,
)


def side_for(session: ExchangeSession, identity: Optional[str]) -> Optional[str]:
    """Return "side_a"/"side_b" for the side ``identity`` owns, or None."""
    if not identity:
        return None
    owned = [name for name in ("side_a", "side_b") if getattr(session, name).owner == identity]
    # Owners are distinct per session, so at most one side can match.
    return owned[0] if len(owned) == 1 else None


def is_participant(session: ExchangeSession, identity: Optional[str]) -> bool:
    return side_for(session, identity) is not None


def has_confirmed(session: ExchangeSession, identity: Optional[str]) -> bool:
    name = side_for(session, identity)
    if name is None:
        return False
    return getattr(session, name).completed


def is_complete(session: ExchangeSession) -> bool:
    return session.side_a.completed and session.side_b.completed


def progress_percentage(session: ExchangeSession) -> int:
    """Share of sides that have confirmed: 0, 50 or 100."""
    done = int(session.side_a.completed) + int(session.side_b.completed)
    return done * 100 // 2


def confirm_completion(
    session: ExchangeSession,
    identity: str,
    now: Optional[datetime] = None,
) -> Tuple[ExchangeSession, ConfirmationOutcome]:
    """Record ``identity``'s completion attestation on its own side.

    Raises NotAParticipant if ``identity`` owns neither side. Re-confirming
    an already confirmed side (including any confirmation on a completed
    session) returns the session unchanged with ALREADY_CONFIRMED.
    SESSION_COMPLETED is returned only by the confirmation that completes
    the second side, so callers can hang one-shot side effects on it.
    """
    name = side_for(session, identity)
    if name is None:
        raise NotAParticipant(session.id, identity)

    side = getattr(session, name)
    if side.completed:
        return session, ConfirmationOutcome.ALREADY_CONFIRMED

    other = session.side_b if name == "side_a" else session.side_a
    update = {name: side.model_copy(update={"completed": True})}
    if other.completed:
        update["status"] = "completed"
        update["completed_at"] = as_utc(now) if now else utcnow()
        outcome = ConfirmationOutcome.SESSION_COMPLETED
    else:
        outcome = ConfirmationOutcome.CONFIRMED
    return session.model_copy(update=update), outcome


def open_session(
    side_a: ParticipantSide,
    side_b: ParticipantSide,
    outline: Optional[SessionOutline] = None,
    contract_address: Optional[str] = None,
    status: str = "in-progress",
    session_id: Optional[str] = None,
) -> ExchangeSession:
    """Create a fresh session as the matching process would: both sides unconfirmed."""
    if status not in OPEN_STATUSES:
        raise ValidationError(f"New sessions must be locked or in-progress, not '{status}'", fields=["status"])
    if side_a.owner == side_b.owner:
        raise ValidationError("Both sides of a session cannot belong to the same wallet", fields=["side_b.owner"])
    return ExchangeSession(
        id=session_id or str(ObjectId()),
        side_a=side_a.model_copy(update={"completed": False}),
        side_b=side_b.model_copy(update={"completed": False}),
        status=status,
        outline=outline or SessionOutline(),
        contract_address=contract_address,
    )
