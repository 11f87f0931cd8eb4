"""Demo listings used to seed the in-memory listing store."""

from typing import List

from schemas import SkillListing

DEMO_LISTINGS = [
    {
        "id": "65a4f0000000000000000001",
        "title": "React Development",
        "category": "Frontend",
        "level": "intermediate",
        "type": "teach",
        "location": "remote",
        "duration": "2 hours",
        "description": "I can help you build modern React applications with hooks, state management, and best practices.",
        "user": {"name": "Sarah Chen", "reputation": 4.8, "verified": True},
        "created_at": "2024-01-15T00:00:00Z",
    },
    {
        "id": "65a4f0000000000000000002",
        "title": "UI/UX Design Feedback",
        "category": "Design",
        "level": "advanced",
        "type": "teach",
        "location": "remote",
        "duration": "1.5 hours",
        "description": "Get professional feedback on your designs and learn about user-centered design principles.",
        "user": {"name": "Alex Rodriguez", "reputation": 4.9, "verified": True},
        "created_at": "2024-01-14T00:00:00Z",
    },
    {
        "id": "65a4f0000000000000000003",
        "title": "Spring Boot Basics",
        "category": "Backend",
        "level": "beginner",
        "type": "learn",
        "location": "remote",
        "duration": "3 hours",
        "description": "Looking to learn Spring Boot fundamentals and build REST APIs.",
        "user": {"name": "Mike Johnson", "reputation": 4.2, "verified": False},
        "created_at": "2024-01-13T00:00:00Z",
    },
    {
        "id": "65a4f0000000000000000004",
        "title": "Figma Prototyping",
        "category": "Design",
        "level": "intermediate",
        "type": "teach",
        "location": "in-person",
        "duration": "2 hours",
        "description": "Learn advanced Figma techniques for creating interactive prototypes.",
        "user": {"name": "Emma Wilson", "reputation": 4.7, "verified": True},
        "created_at": "2024-01-12T00:00:00Z",
    },
]


def demo_listings() -> List[SkillListing]:
    return [SkillListing.model_validate(d) for d in DEMO_LISTINGS]
