"""Static data models for the alumni directory."""

from alumnidir.models.hobbies import (
    CATEGORY_INFO,
    COMMON_HOBBIES,
    HOBBY_CATEGORIES,
    Category,
    CategoryInfo,
)

__all__ = [
    "CATEGORY_INFO",
    "COMMON_HOBBIES",
    "HOBBY_CATEGORIES",
    "Category",
    "CategoryInfo",
]
