from __future__ import annotations

from pathlib import Path
import sys

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from fakes import INLINE_PNG, FakeGenaiClient, InMemoryAssetStore, InMemoryDocumentStore
from recipeshare import create_app
from recipeshare.ai import RecipeAssistant
from recipeshare.models import RecipeDraft
from recipeshare.repository import RecipeRepository

TEA = {
    "title": "Tea",
    "cuisine": "Other",
    "ingredients": ["Water", "Tea leaves"],
    "instructions": ["Boil water", "Steep leaves"],
}


def create_test_client(*ai_responses):
    documents = InMemoryDocumentStore()
    assets = InMemoryAssetStore()
    repository = RecipeRepository(documents, assets)
    assistant = RecipeAssistant(FakeGenaiClient(*ai_responses))
    app = create_app(repository=repository, assistant=assistant)
    app.config.update(TESTING=True)
    return app.test_client(), repository, assets


def as_user(user_id):
    return {"X-User-Id": user_id}


def test_index_lists_existing_recipes():
    client, repository, _ = create_test_client()
    repository.create(RecipeDraft(**TEA), "u1")

    response = client.get("/api/recipes")

    assert response.status_code == 200
    recipes = response.get_json()["recipes"]
    assert [recipe["title"] for recipe in recipes] == ["Tea"]
    assert recipes[0]["display_image_url"] == "https://placehold.co/600x400"


def test_index_filters_by_search_term_and_cuisine():
    client, repository, _ = create_test_client()
    repository.create(RecipeDraft(**TEA), "u1")
    repository.create(RecipeDraft(**dict(TEA, title="Miso Soup", cuisine="Japanese", ingredients=["Miso"])), "u1")

    by_term = client.get("/api/recipes", query_string={"q": "miso"}).get_json()["recipes"]
    by_cuisine = client.get("/api/recipes", query_string={"cuisine": "Other"}).get_json()["recipes"]

    assert [recipe["title"] for recipe in by_term] == ["Miso Soup"]
    assert [recipe["title"] for recipe in by_cuisine] == ["Tea"]


def test_can_add_recipe_via_api():
    client, repository, _ = create_test_client()

    response = client.post("/api/recipes", json=TEA, headers=as_user("u1"))

    assert response.status_code == 201
    recipe = repository.get_by_id(response.get_json()["id"])
    assert recipe.title == "Tea"
    assert recipe.owner_id == "u1"


def test_add_recipe_requires_sign_in():
    client, repository, _ = create_test_client()

    response = client.post("/api/recipes", json=TEA)

    assert response.status_code == 401
    assert repository.list_ordered() == []


def test_cannot_add_recipe_without_title():
    client, repository, _ = create_test_client()

    response = client.post("/api/recipes", json=dict(TEA, title=""), headers=as_user("u1"))

    assert response.status_code == 400
    assert response.get_json()["error"] == "Please provide a recipe title."
    assert repository.list_ordered() == []


def test_add_recipe_rejects_malformed_fields():
    client, repository, _ = create_test_client()

    for ingredients in (5, [1, 2], {"flour": "1 cup"}):
        response = client.post("/api/recipes", json=dict(TEA, ingredients=ingredients), headers=as_user("u1"))

        assert response.status_code == 400
        assert "list of text lines" in response.get_json()["error"]

    assert repository.list_ordered() == []


def test_add_recipe_rejects_non_object_body():
    client, repository, _ = create_test_client()

    response = client.post("/api/recipes", json=[TEA], headers=as_user("u1"))

    assert response.status_code == 400
    assert response.get_json()["error"] == "Request body must be a JSON object."
    assert repository.list_ordered() == []


def test_update_rejects_non_object_body():
    client, repository, _ = create_test_client()
    recipe_id = repository.create(RecipeDraft(**TEA), "u1")

    response = client.put(f"/api/recipes/{recipe_id}", json=["Coffee"], headers=as_user("u1"))

    assert response.status_code == 400
    assert repository.get_by_id(recipe_id).title == "Tea"


def test_add_recipe_rejects_unsupported_image():
    client, repository, _ = create_test_client()

    response = client.post("/api/recipes", json=dict(TEA, image="javascript:alert(1)"), headers=as_user("u1"))

    assert response.status_code == 400
    assert repository.list_ordered() == []


def test_get_recipe_returns_404_when_missing():
    client, _, _ = create_test_client()

    response = client.get("/api/recipes/missing")

    assert response.status_code == 404
    assert "does not exist" in response.get_json()["error"]


def test_can_update_recipe_with_new_image():
    client, repository, assets = create_test_client()
    recipe_id = repository.create(RecipeDraft(**TEA), "u1")

    response = client.put(
        f"/api/recipes/{recipe_id}",
        json=dict(TEA, title="Black Tea", image=INLINE_PNG),
        headers=as_user("u1"),
    )

    assert response.status_code == 200
    body = response.get_json()
    assert body["title"] == "Black Tea"
    assert body["image_path"] in assets.objects
    assert body["display_image_url"] == body["image_url"]


def test_update_by_other_user_is_forbidden():
    client, repository, _ = create_test_client()
    recipe_id = repository.create(RecipeDraft(**TEA), "u1")

    response = client.put(f"/api/recipes/{recipe_id}", json=dict(TEA, title="Coffee"), headers=as_user("u2"))

    assert response.status_code == 403
    assert repository.get_by_id(recipe_id).title == "Tea"


def test_delete_recipe_removes_item():
    client, repository, _ = create_test_client()
    recipe_id = repository.create(RecipeDraft(**TEA), "u1")

    response = client.delete(f"/api/recipes/{recipe_id}", headers=as_user("u1"))

    assert response.status_code == 204
    assert repository.list_ordered() == []


def test_delete_by_other_user_is_forbidden():
    client, repository, _ = create_test_client()
    recipe_id = repository.create(RecipeDraft(**TEA), "u1")

    response = client.delete(f"/api/recipes/{recipe_id}", headers=as_user("u2"))

    assert response.status_code == 403
    assert repository.get_by_id(recipe_id).title == "Tea"


def test_seed_populates_only_an_empty_catalog():
    client, repository, _ = create_test_client()

    first = client.post("/api/recipes/seed").get_json()
    second = client.post("/api/recipes/seed").get_json()

    assert first["inserted"] == len(repository.list_ordered())
    assert second["inserted"] == 0


def test_substitutions_endpoint_returns_suggestions():
    client, _, _ = create_test_client({"substitutions": ["Honey", "Maple syrup"]})

    response = client.post("/api/substitutions", json={"recipe_name": "Tea", "ingredient": "Sugar"})

    assert response.status_code == 200
    assert response.get_json() == {"substitutions": ["Honey", "Maple syrup"]}


def test_substitutions_endpoint_reports_generation_failure():
    client, _, _ = create_test_client("{broken")

    response = client.post("/api/substitutions", json={"recipe_name": "Tea", "ingredient": "Sugar"})

    assert response.status_code == 502
    assert response.get_json()["error"] == "Failed to get ingredient substitutions."


def test_recipe_from_image_returns_draft():
    client, _, _ = create_test_client(
        {"title": "Iced Tea", "cuisine": "American", "ingredients": ["Tea", "Ice"], "instructions": ["Chill"]}
    )

    response = client.post(
        "/api/recipes/from-image",
        json={"photo_data_uri": INLINE_PNG},
        headers=as_user("u1"),
    )

    assert response.status_code == 200
    body = response.get_json()
    assert body["title"] == "Iced Tea"
    assert body["cuisine"] == "American"
    assert body["image"] == INLINE_PNG


def test_cuisines_endpoint_lists_tags():
    client, _, _ = create_test_client()

    cuisines = client.get("/api/cuisines").get_json()["cuisines"]

    assert "Italian" in cuisines
    assert "Other" in cuisines
