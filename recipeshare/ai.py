"""Gemini backed helpers for ingredient substitutions and photo recipes.

Both calls request JSON output constrained by a pydantic schema and validate
the answer before returning it. Any backend or validation problem surfaces as
:class:`~recipeshare.errors.GenerationFailure` so the caller can offer a retry.
"""

from __future__ import annotations

import logging
import os
from typing import List, Optional, Type, TypeVar

import httpx
from google import genai
from google.genai import errors as genai_errors
from google.genai import types
from pydantic import BaseModel, Field
from pydantic import ValidationError as SchemaError

from .errors import GenerationFailure, ValidationError
from .images import InlineImage
from .models import RecipeDraft, normalize_cuisine, parse_lines

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gemini-2.5-flash"

SUBSTITUTION_PROMPT = (
    'Suggest some common substitutions for the ingredient "{ingredient}" in the recipe '
    '"{recipe_name}". Return a list of possible substitutions. If there are no good '
    "substitutions, return an empty array."
)

RECIPE_FROM_IMAGE_PROMPT = """
You are a culinary expert who can identify dishes from photos and create recipes for them.

Analyze the provided image and generate a plausible recipe. Your response must be in the format requested.

- Give the dish a creative and fitting title.
- Identify the cuisine type.
- Provide a list of ingredients.
- Provide a list of step-by-step instructions.
""".strip()

SchemaT = TypeVar("SchemaT", bound=BaseModel)


class SubstitutionSchema(BaseModel):
    substitutions: List[str] = Field(
        default_factory=list,
        description="An array of suggested substitutions for the ingredient.",
    )


class GeneratedRecipeSchema(BaseModel):
    title: str = Field(description="A creative and fitting title for the recipe.")
    cuisine: str = Field(description="The cuisine type of the dish (e.g., Italian, Mexican, etc.).")
    ingredients: List[str] = Field(description="A list of ingredients required for the recipe.")
    instructions: List[str] = Field(description="A list of step-by-step instructions to prepare the dish.")


class RecipeAssistant:
    def __init__(self, client: Optional[genai.Client] = None, *, model: str = DEFAULT_MODEL) -> None:
        self._client = client
        self._model = model

    @classmethod
    def from_env(cls) -> "RecipeAssistant":
        api_key = os.environ.get("GEMINI_API_KEY")
        model = os.environ.get("GEMINI_MODEL", DEFAULT_MODEL)
        if not api_key:
            logger.warning("GEMINI_API_KEY not set; AI features are disabled")
            return cls(None, model=model)
        return cls(genai.Client(api_key=api_key), model=model)

    def suggest_substitutes(self, recipe_name: str, ingredient: str) -> List[str]:
        if not ingredient.strip():
            raise ValidationError("Please name the ingredient to substitute.")

        prompt = SUBSTITUTION_PROMPT.format(ingredient=ingredient.strip(), recipe_name=recipe_name.strip())
        result = self._generate([prompt], SubstitutionSchema, "get ingredient substitutions")
        return parse_lines(result.substitutions)

    def extract_recipe_from_image(self, photo_data_uri: str) -> RecipeDraft:
        """Return a draft recipe describing the dish in the photo.

        The draft keeps the photo as its image so saving it uploads the picture.
        """

        image = InlineImage.parse(photo_data_uri)
        contents = [
            types.Part.from_bytes(data=image.data, mime_type=image.content_type),
            RECIPE_FROM_IMAGE_PROMPT,
        ]
        result = self._generate(contents, GeneratedRecipeSchema, "generate recipe from image")

        return RecipeDraft(
            title=result.title.strip(),
            cuisine=normalize_cuisine(result.cuisine) or "Other",
            ingredients=parse_lines(result.ingredients),
            instructions=parse_lines(result.instructions),
            image=photo_data_uri,
        )

    def _generate(self, contents: list, schema: Type[SchemaT], action: str) -> SchemaT:
        if self._client is None:
            raise GenerationFailure(f"Failed to {action}: the AI service is not configured.")

        try:
            response = self._client.models.generate_content(
                model=self._model,
                contents=contents,
                config=types.GenerateContentConfig(
                    response_mime_type="application/json",
                    response_schema=schema,
                ),
            )
            return schema.model_validate_json(response.text or "")
        except (genai_errors.APIError, httpx.HTTPError) as exc:
            logger.exception("AI request to %s failed", action)
            raise GenerationFailure(f"Failed to {action}.") from exc
        except SchemaError as exc:
            logger.warning("AI response for %s failed schema validation: %s", action, exc)
            raise GenerationFailure(f"Failed to {action}.") from exc


__all__ = [
    "DEFAULT_MODEL",
    "GeneratedRecipeSchema",
    "RecipeAssistant",
    "SubstitutionSchema",
]
