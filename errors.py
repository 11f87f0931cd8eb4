"""
Error taxonomy for SkillSwap.

None of these are fatal: each one is local to a request and is either
corrected by the user or skipped by the caller.
"""


class SkillSwapError(Exception):
    """Base class for all SkillSwap domain errors."""


class ValidationError(SkillSwapError):
    """Required listing/query fields missing or invalid."""

    def __init__(self, message: str, fields=None):
        super().__init__(message)
        self.fields = list(fields or [])


class NotAParticipant(SkillSwapError):
    """The acting wallet does not own a side of the session."""

    def __init__(self, session_id: str, identity: str):
        super().__init__(f"{identity or '<anonymous>'} is not a participant of session {session_id}")
        self.session_id = session_id
        self.identity = identity


class SessionNotFound(SkillSwapError):
    pass


class ListingNotFound(SkillSwapError):
    pass


class ExternalServiceUnavailable(SkillSwapError):
    """AI tagging or another network collaborator failed."""

    def __init__(self, service: str, reason: str = ""):
        super().__init__(f"{service} unavailable" + (f": {reason}" if reason else ""))
        self.service = service
        self.reason = reason
