from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Iterable, List, Optional

from .errors import ValidationError

CUISINES = (
    "Italian",
    "Indian",
    "American",
    "Japanese",
    "Mexican",
    "Chinese",
    "Thai",
    "French",
    "Other",
)

SYSTEM_OWNER = "system"


def parse_lines(value: Iterable[str] | str | None) -> List[str]:
    """Return the non-blank, stripped lines of ``value``.

    Accepts either a block of text or an already split sequence.
    """

    if value is None:
        return []
    if isinstance(value, str):
        value = value.splitlines()
    elif not isinstance(value, (list, tuple)) or not all(isinstance(line, str) for line in value):
        raise ValidationError("Ingredients and instructions must be text or a list of text lines.")
    return [line.strip() for line in value if line and line.strip()]


def normalize_cuisine(value: str | None) -> Optional[str]:
    """Map free text onto one of :data:`CUISINES`, ignoring case."""

    text = (value or "").strip().lower()
    for cuisine in CUISINES:
        if cuisine.lower() == text:
            return cuisine
    return None


@dataclass
class Recipe:
    """Domain object representing a stored recipe."""

    id: str
    title: str
    cuisine: str
    ingredients: List[str]
    instructions: List[str]
    owner_id: str
    created_at: str
    image_url: str = ""
    image_path: str = ""
    image_hint: str = ""

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class RecipeDraft:
    """Recipe fields as submitted by a user, before persistence.

    ``image`` is empty, an inline ``data:`` URI, or an already hosted URL.
    """

    title: str
    cuisine: str
    ingredients: List[str] = field(default_factory=list)
    instructions: List[str] = field(default_factory=list)
    image: str = ""
    image_hint: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> "RecipeDraft":
        return cls(
            title=str(data.get("title") or ""),
            cuisine=str(data.get("cuisine") or ""),
            ingredients=parse_lines(data.get("ingredients")),
            instructions=parse_lines(data.get("instructions")),
            image=str(data.get("image") or ""),
            image_hint=str(data.get("image_hint") or ""),
        )

    def cleaned(self) -> "RecipeDraft":
        """Return a trimmed copy, raising :class:`ValidationError` if incomplete."""

        title = self.title.strip()
        if not title:
            raise ValidationError("Please provide a recipe title.")

        if not self.cuisine.strip():
            raise ValidationError("Please select a cuisine.")
        cuisine = normalize_cuisine(self.cuisine)
        if cuisine is None:
            raise ValidationError(f"Unknown cuisine '{self.cuisine.strip()}'.")

        ingredients = parse_lines(self.ingredients)
        if not ingredients:
            raise ValidationError("Please provide at least one ingredient.")

        instructions = parse_lines(self.instructions)
        if not instructions:
            raise ValidationError("Please provide at least one instruction.")

        return RecipeDraft(
            title=title,
            cuisine=cuisine,
            ingredients=ingredients,
            instructions=instructions,
            image=(self.image or "").strip(),
            image_hint=(self.image_hint or "").strip(),
        )


__all__ = [
    "CUISINES",
    "SYSTEM_OWNER",
    "Recipe",
    "RecipeDraft",
    "normalize_cuisine",
    "parse_lines",
]
