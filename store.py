"""
In-memory registries for listings, sessions and issued credentials.

These stand where a document store would sit. SessionStore is the single
mutation point for sessions: every write to one session id happens under
that id's lock, so concurrent confirmations apply one at a time.
"""
import threading
from typing import Callable, Dict, Iterable, List, Tuple

import structlog

import exchange
from errors import ListingNotFound, SessionNotFound
from schemas import ConfirmationOutcome, ExchangeSession, ReputationCredential, SkillListing

logger = structlog.get_logger()


class ListingStore:
    def __init__(self, listings: Iterable[SkillListing] = ()):
        self._lock = threading.Lock()
        self._listings: Dict[str, SkillListing] = {}
        for listing in listings:
            self.add(listing)

    def add(self, listing: SkillListing) -> SkillListing:
        with self._lock:
            self._listings[listing.id] = listing
        return listing

    def get(self, listing_id: str) -> SkillListing:
        try:
            return self._listings[listing_id]
        except KeyError:
            raise ListingNotFound(listing_id)

    def all(self) -> List[SkillListing]:
        """Snapshot in insertion order."""
        with self._lock:
            return list(self._listings.values())


class SessionStore:
    def __init__(self):
        self._sessions: Dict[str, ExchangeSession] = {}
        self._registry_lock = threading.Lock()
        self._locks: Dict[str, threading.Lock] = {}

    def _lock_for(self, session_id: str) -> threading.Lock:
        # Locks exist only for stored sessions; unknown ids never allocate one.
        with self._registry_lock:
            try:
                return self._locks[session_id]
            except KeyError:
                raise SessionNotFound(session_id)

    def add(self, session: ExchangeSession) -> ExchangeSession:
        with self._registry_lock:
            lock = self._locks.setdefault(session.id, threading.Lock())
        with lock:
            self._sessions[session.id] = session
        return session

    def get(self, session_id: str) -> ExchangeSession:
        try:
            return self._sessions[session_id]
        except KeyError:
            raise SessionNotFound(session_id)

    def mutate(
        self,
        session_id: str,
        transition: Callable[[ExchangeSession], Tuple[ExchangeSession, ConfirmationOutcome]],
    ) -> Tuple[ExchangeSession, ConfirmationOutcome]:
        """Apply ``transition`` to the stored session under its lock and store the result."""
        with self._lock_for(session_id):
            current = self.get(session_id)
            updated, outcome = transition(current)
            if updated is not current:
                self._sessions[session_id] = updated
            return updated, outcome

    def confirm(self, session_id: str, identity: str) -> Tuple[ExchangeSession, ConfirmationOutcome]:
        session, outcome = self.mutate(
            session_id, lambda s: exchange.confirm_completion(s, identity)
        )
        logger.info(
            "completion confirmed",
            session_id=session_id,
            wallet=identity,
            outcome=outcome.value,
            progress=exchange.progress_percentage(session),
        )
        return session, outcome


class CredentialLedger:
    """Append-only record of issued reputation credentials."""

    def __init__(self):
        self._lock = threading.Lock()
        self._credentials: List[ReputationCredential] = []

    def record(self, credential: ReputationCredential) -> ReputationCredential:
        with self._lock:
            self._credentials.append(credential)
        return credential

    def for_holder(self, wallet: str) -> List[ReputationCredential]:
        with self._lock:
            return [c for c in self._credentials if c.holder == wallet]

    def for_session(self, session_id: str) -> List[ReputationCredential]:
        with self._lock:
            return [c for c in self._credentials if c.session_id == session_id]
