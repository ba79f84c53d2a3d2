"""Hobby taxonomy and suggestion catalog.

The taxonomy is plain data: an ordered tuple of CategoryInfo records,
scanned in declaration order by the classifier. Earlier entries win when
a tag matches keywords from more than one category.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class Category(StrEnum):
    """Display buckets for hobby tags."""

    SPORTS = "sports"
    ARTS = "arts"
    MUSIC = "music"
    OUTDOOR = "outdoor"
    TECHNOLOGY = "technology"
    READING = "reading"
    CULINARY = "culinary"
    COLLECTING = "collecting"
    ENTERTAINMENT = "entertainment"
    WELLNESS = "wellness"
    TRAVEL = "travel"
    OTHER = "other"


@dataclass(frozen=True, slots=True)
class CategoryInfo:
    """One row of the taxonomy table.

    Attributes:
        category: The bucket this row describes.
        accent: Tailwind background class used for the tag chip.
        colour: Hex equivalent of ``accent`` for components without Tailwind.
        keywords: Lowercase substrings that place a tag in this bucket.
    """

    category: Category
    accent: str
    colour: str
    keywords: tuple[str, ...] = ()


HOBBY_CATEGORIES: tuple[CategoryInfo, ...] = (
    CategoryInfo(
        Category.SPORTS,
        "bg-orange-500",
        "#f97316",
        (
            "sport",
            "ball",
            "running",
            "run",
            "swim",
            "tennis",
            "soccer",
            "basketball",
            "football",
            "volleyball",
            "baseball",
            "golf",
            "cycling",
            "gym",
            "fitness",
            "workout",
            "boxing",
            "martial",
        ),
    ),
    CategoryInfo(
        Category.ARTS,
        "bg-purple-500",
        "#a855f7",
        (
            "art",
            "paint",
            "draw",
            "craft",
            "sketch",
            "photography",
            "design",
            "pottery",
            "sculpture",
            "creative",
            "writing",
            "knitting",
        ),
    ),
    CategoryInfo(
        Category.MUSIC,
        "bg-amber-700",
        "#b45309",
        (
            "music",
            "guitar",
            "piano",
            "sing",
            "drum",
            "bass",
            "violin",
            "instrument",
            "band",
            "concert",
            "compose",
            "dj",
        ),
    ),
    CategoryInfo(
        Category.OUTDOOR,
        "bg-green-600",
        "#16a34a",
        (
            "hike",
            "hiking",
            "camp",
            "nature",
            "fish",
            "hunt",
            "garden",
            "outdoor",
            "climbing",
            "mountain",
            "beach",
            "surf",
        ),
    ),
    CategoryInfo(
        Category.TECHNOLOGY,
        "bg-blue-600",
        "#2563eb",
        (
            "tech",
            "code",
            "program",
            "computer",
            "game",
            "gaming",
            "robot",
            "software",
            "hardware",
            "develop",
        ),
    ),
    CategoryInfo(
        Category.READING,
        "bg-indigo-600",
        "#4f46e5",
        ("read", "book", "literature", "novel", "poetry", "writing", "blog"),
    ),
    CategoryInfo(
        Category.CULINARY,
        "bg-red-500",
        "#ef4444",
        (
            "cook",
            "bake",
            "baking",
            "food",
            "culinary",
            "recipe",
            "wine",
            "coffee",
            "beer",
            "taste",
            "kitchen",
        ),
    ),
    CategoryInfo(
        Category.COLLECTING,
        "bg-yellow-600",
        "#ca8a04",
        ("collect", "stamp", "coin", "figure", "model", "antique", "vintage"),
    ),
    CategoryInfo(
        Category.ENTERTAINMENT,
        "bg-pink-500",
        "#ec4899",
        (
            "movie",
            "film",
            "tv",
            "show",
            "theater",
            "cinema",
            "series",
            "streaming",
            "actor",
            "actress",
        ),
    ),
    CategoryInfo(
        Category.WELLNESS,
        "bg-teal-500",
        "#14b8a6",
        (
            "yoga",
            "meditate",
            "meditation",
            "wellness",
            "mindful",
            "health",
            "spiritual",
            "relax",
        ),
    ),
    CategoryInfo(
        Category.TRAVEL,
        "bg-cyan-600",
        "#0891b2",
        (
            "travel",
            "adventure",
            "explore",
            "trip",
            "journey",
            "backpack",
            "tourist",
            "vacation",
        ),
    ),
    # Fallback: no keywords, never matched directly
    CategoryInfo(Category.OTHER, "bg-gray-500", "#6b7280"),
)

CATEGORY_INFO: dict[Category, CategoryInfo] = {
    info.category: info for info in HOBBY_CATEGORIES
}

# Suggestion catalog, in the order suggestions are offered
COMMON_HOBBIES: tuple[str, ...] = (
    "Reading",
    "Running",
    "Swimming",
    "Cooking",
    "Baking",
    "Painting",
    "Photography",
    "Hiking",
    "Gardening",
    "Yoga",
    "Meditation",
    "Cycling",
    "Playing Guitar",
    "Piano",
    "Singing",
    "Dancing",
    "Writing",
    "Traveling",
    "Fishing",
    "Camping",
    "Basketball",
    "Soccer",
    "Tennis",
    "Golf",
    "Video Games",
    "Programming",
    "Chess",
    "Puzzles",
    "Watching Movies",
    "Collecting Stamps",
    "Knitting",
    "Sewing",
    "Woodworking",
)
