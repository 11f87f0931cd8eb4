"""
Listing intake: turn a posted skill form into a SkillListing.
"""
from datetime import datetime
from typing import Iterable, List, Mapping, Optional

from bson import ObjectId
from pydantic import ValidationError as PydanticValidationError

from errors import ValidationError
from schemas import SkillListing, UserSummary, utcnow

CATEGORIES = [
    "Frontend Development",
    "Backend Development",
    "UI/UX Design",
    "Mobile Development",
    "Data Science",
    "DevOps",
    "Machine Learning",
    "Cybersecurity",
    "Product Management",
    "Marketing",
    "Other",
]

REQUIRED_FIELDS = ("title", "category", "level", "type", "location", "description")


def normalize_tags(tags: Optional[Iterable[str]]) -> List[str]:
    """Trim tags, dropping blanks and repeats while keeping first-seen order."""
    out: List[str] = []
    for tag in tags or []:
        tag = (tag or "").strip()
        if tag and tag not in out:
            out.append(tag)
    return out


def missing_fields(form: Mapping[str, object]) -> List[str]:
    return [f for f in REQUIRED_FIELDS if not str(form.get(f) or "").strip()]


def require_fields(form: Mapping[str, object]) -> None:
    missing = missing_fields(form)
    if missing:
        raise ValidationError(
            f"Please fill in all required fields: {', '.join(missing)}",
            fields=missing,
        )


def create_listing(
    form: Mapping[str, object],
    extra_tags: Optional[Iterable[str]] = None,
    now: Optional[datetime] = None,
) -> SkillListing:
    """Validate a posted skill form and build the listing.

    ``form`` carries the SkillListing fields except id/created_at, with
    ``user`` as a mapping or UserSummary. ``extra_tags`` (e.g. AI tags) are
    merged after the user's own tags.
    """
    require_fields(form)

    user = form.get("user") or {}
    if not isinstance(user, UserSummary):
        user = dict(user)
        user.setdefault("name", "Anonymous")

    try:
        return SkillListing(
            id=str(ObjectId()),
            title=str(form["title"]).strip(),
            category=str(form["category"]).strip(),
            level=form["level"],
            type=form["type"],
            location=form["location"],
            duration=str(form.get("duration") or "").strip(),
            description=str(form["description"]).strip(),
            user=user,
            created_at=now or utcnow(),
            tags=normalize_tags(list(form.get("tags") or []) + list(extra_tags or [])),
            availability=str(form.get("availability") or "").strip() or None,
        )
    except PydanticValidationError as e:
        bad = [".".join(str(p) for p in err["loc"]) for err in e.errors()]
        raise ValidationError(f"Invalid listing fields: {', '.join(bad)}", fields=bad)
