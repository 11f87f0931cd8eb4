"""
Skill discovery: filter and sort a set of listings for one query.

Everything here is a pure function of (listings, query). Nothing is cached
and the input sequence is never reordered or mutated.
"""
from typing import Callable, Dict, List, Mapping, Sequence

from pydantic import ValidationError as PydanticValidationError

from errors import ValidationError
from schemas import SkillListing, SkillQuery

# Query-string names used by the HTTP layer -> SkillQuery fields
QUERY_PARAMS = {
    "search": "search_term",
    "type": "type_filter",
    "location": "location_filter",
    "sort": "sort_mode",
}


def matches_search(listing: SkillListing, term: str) -> bool:
    if not term:
        return True
    needle = term.lower()
    return needle in listing.title.lower() or needle in listing.category.lower()


def matches_type(listing: SkillListing, type_filter: str) -> bool:
    return type_filter == "all" or listing.type == type_filter


def matches_location(listing: SkillListing, location_filter: str) -> bool:
    return location_filter == "all" or listing.location == location_filter


def matches(listing: SkillListing, query: SkillQuery) -> bool:
    """True when the listing passes every active predicate of the query."""
    return (
        matches_search(listing, query.search_term)
        and matches_type(listing, query.type_filter)
        and matches_location(listing, query.location_filter)
    )


# All keys sort descending; sorted() keeps input order for ties even with reverse=True.
SORT_KEYS: Dict[str, Callable[[SkillListing], object]] = {
    "recent": lambda listing: listing.created_at,
    "reputation": lambda listing: listing.user.reputation,
    "verified": lambda listing: listing.user.verified,
}


def sort_listings(listings: Sequence[SkillListing], sort_mode: str) -> List[SkillListing]:
    try:
        key = SORT_KEYS[sort_mode]
    except KeyError:
        raise ValidationError(f"Unknown sort mode '{sort_mode}'", fields=["sort_mode"])
    return sorted(listings, key=key, reverse=True)


def apply(listings: Sequence[SkillListing], query: SkillQuery) -> List[SkillListing]:
    """Return the listings that match ``query``, ordered by its sort mode."""
    filtered = [listing for listing in listings if matches(listing, query)]
    return sort_listings(filtered, query.sort_mode)


def parse_query(params: Mapping[str, object]) -> SkillQuery:
    """Build a SkillQuery from raw parameters.

    Accepts either the query-string names (search, type, location, sort) or
    the SkillQuery field names. Missing or empty values fall back to the
    defaults; unknown filter values raise ValidationError.
    """
    values = {}
    for key, value in params.items():
        field = QUERY_PARAMS.get(key, key)
        if field not in SkillQuery.model_fields:
            continue
        if value is None or (value == "" and field != "search_term"):
            continue
        values[field] = value
    try:
        return SkillQuery(**values)
    except PydanticValidationError as e:
        bad = [".".join(str(p) for p in err["loc"]) for err in e.errors()]
        raise ValidationError(f"Invalid query parameters: {', '.join(bad)}", fields=bad)
