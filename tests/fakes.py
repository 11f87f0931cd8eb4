"""Test doubles and shared constants."""

from datetime import datetime, timezone

from errors import ExternalServiceUnavailable

WALLET_A = "0xA"
WALLET_B = "0xB"
OUTSIDER = "0xC"

BASE_TIME = datetime(2024, 1, 1, tzinfo=timezone.utc)


class FakeTagger:
    """Stand-in for TaggingClient that returns canned tags or fails."""

    def __init__(self, tags=None, fail=False):
        self.tags = tags if tags is not None else ["react", "frontend", "javascript"]
        self.fail = fail
        self.calls = []

    def tag_skill(self, title, description, category):
        self.calls.append((title, description, category))
        if self.fail:
            raise ExternalServiceUnavailable("ai-tagging", "connection refused")
        return list(self.tags)
