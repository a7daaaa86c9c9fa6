from __future__ import annotations

from pathlib import Path
import sys

import httpx
import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from fakes import INLINE_PNG, FakeGenaiClient
from recipeshare.ai import GeneratedRecipeSchema, RecipeAssistant, SubstitutionSchema
from recipeshare.errors import GenerationFailure, ValidationError


def test_suggest_substitutes_returns_cleaned_list():
    client = FakeGenaiClient({"substitutions": ["Pancetta", " Bacon ", ""]})
    assistant = RecipeAssistant(client, model="test-model")

    assert assistant.suggest_substitutes("Carbonara", "Guanciale") == ["Pancetta", "Bacon"]

    request = client.models.requests[0]
    assert request["model"] == "test-model"
    assert '"Guanciale"' in request["contents"][0]
    assert '"Carbonara"' in request["contents"][0]
    assert request["config"].response_schema is SubstitutionSchema


def test_suggest_substitutes_allows_empty_answer():
    assistant = RecipeAssistant(FakeGenaiClient({"substitutions": []}))

    assert assistant.suggest_substitutes("Toast", "Bread") == []


def test_suggest_substitutes_requires_ingredient():
    assistant = RecipeAssistant(FakeGenaiClient())

    with pytest.raises(ValidationError):
        assistant.suggest_substitutes("Toast", "  ")


def test_extract_recipe_from_image_builds_draft_with_photo():
    client = FakeGenaiClient(
        {
            "title": "Sunny Shakshuka",
            "cuisine": "middle eastern",
            "ingredients": ["Eggs", "Tomatoes", ""],
            "instructions": ["Simmer sauce", "Poach eggs"],
        }
    )
    assistant = RecipeAssistant(client)

    draft = assistant.extract_recipe_from_image(INLINE_PNG)

    assert draft.title == "Sunny Shakshuka"
    assert draft.cuisine == "Other"
    assert draft.ingredients == ["Eggs", "Tomatoes"]
    assert draft.instructions == ["Simmer sauce", "Poach eggs"]
    assert draft.image == INLINE_PNG
    assert client.models.requests[0]["config"].response_schema is GeneratedRecipeSchema


def test_extract_recipe_keeps_known_cuisine():
    client = FakeGenaiClient(
        {"title": "Ramen", "cuisine": "japanese", "ingredients": ["Noodles"], "instructions": ["Cook"]}
    )

    assert RecipeAssistant(client).extract_recipe_from_image(INLINE_PNG).cuisine == "Japanese"


def test_extract_recipe_rejects_non_image_input():
    assistant = RecipeAssistant(FakeGenaiClient())

    with pytest.raises(ValidationError):
        assistant.extract_recipe_from_image("https://example.test/dish.jpg")


def test_malformed_answer_raises_generation_failure():
    assistant = RecipeAssistant(FakeGenaiClient("not json at all"))

    with pytest.raises(GenerationFailure):
        assistant.extract_recipe_from_image(INLINE_PNG)


def test_backend_error_raises_generation_failure():
    assistant = RecipeAssistant(FakeGenaiClient(httpx.ConnectError("connection refused")))

    with pytest.raises(GenerationFailure):
        assistant.suggest_substitutes("Carbonara", "Eggs")


def test_unconfigured_assistant_raises_generation_failure(monkeypatch):
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    assistant = RecipeAssistant.from_env()

    with pytest.raises(GenerationFailure):
        assistant.suggest_substitutes("Carbonara", "Eggs")
