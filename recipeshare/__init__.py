import logging
import os
from typing import Optional

from flask import Flask, jsonify, request
from flask.typing import ResponseReturnValue

from .ai import RecipeAssistant
from .auth import Authenticator, HeaderAuthenticator
from .errors import (
    GenerationFailure,
    NotFound,
    RecipeError,
    StorageUnavailable,
    Unauthorized,
    ValidationError,
)
from .models import CUISINES, Recipe, RecipeDraft
from .repository import RecipeRepository
from .samples import PLACEHOLDER_IMAGE_URL

try:
    from .gcp_storage import CloudStorageAssetStore, FirestoreDocumentStore
except ImportError:  # pragma: no cover - allows running tests without optional deps
    CloudStorageAssetStore = FirestoreDocumentStore = None  # type: ignore[assignment,misc]

logger = logging.getLogger(__name__)

ERROR_STATUS = {
    ValidationError: 400,
    Unauthorized: 403,
    NotFound: 404,
    GenerationFailure: 502,
    StorageUnavailable: 503,
}


def create_app(
    repository: Optional[RecipeRepository] = None,
    assistant: Optional[RecipeAssistant] = None,
    authenticator: Optional[Authenticator] = None,
) -> Flask:
    """Create and configure the Flask application.

    Parameters
    ----------
    repository:
        Optional recipe repository. When ``None`` the application uses
        Firestore and Cloud Storage configured through environment variables.
    assistant:
        Optional AI helper. Defaults to :meth:`RecipeAssistant.from_env`.
    authenticator:
        Resolves the requesting user. Defaults to :class:`HeaderAuthenticator`.
    """

    app = Flask(__name__)
    app.config.setdefault("MAX_CONTENT_LENGTH", 16 * 1024 * 1024)
    app.config["PLACEHOLDER_IMAGE_URL"] = os.environ.get("PLACEHOLDER_IMAGE_URL", PLACEHOLDER_IMAGE_URL)
    app.secret_key = os.environ.get("FLASK_SECRET_KEY", "development-secret-change-me")

    if repository is None:
        if FirestoreDocumentStore is None:
            raise RuntimeError(
                "google-cloud-firestore is not installed. Install the GCP dependencies "
                "or pass an explicit repository to create_app."
            )
        repository = RecipeRepository(
            FirestoreDocumentStore.from_env(),
            CloudStorageAssetStore.from_env(),
            collection_name=os.environ.get("RECIPES_COLLECTION", "recipes"),
        )
    app.config["RECIPE_REPOSITORY"] = repository
    app.config["RECIPE_ASSISTANT"] = assistant or RecipeAssistant.from_env()
    app.config["AUTHENTICATOR"] = authenticator or HeaderAuthenticator()

    def repo() -> RecipeRepository:
        return app.config["RECIPE_REPOSITORY"]

    def current_user() -> Optional[str]:
        return app.config["AUTHENTICATOR"].current_user(request)

    def serialize(recipe: Recipe) -> dict:
        data = recipe.to_dict()
        data["display_image_url"] = recipe.image_url or app.config["PLACEHOLDER_IMAGE_URL"]
        return data

    @app.errorhandler(RecipeError)
    def handle_recipe_error(exc: RecipeError) -> ResponseReturnValue:
        status = next(
            (code for error_type, code in ERROR_STATUS.items() if isinstance(exc, error_type)),
            500,
        )
        if status >= 500:
            logger.error("Request failed: %s", exc)
        return jsonify(error=str(exc)), status

    @app.get("/api/cuisines")
    def list_cuisines() -> ResponseReturnValue:
        return jsonify(cuisines=list(CUISINES))

    @app.get("/api/recipes")
    def list_recipes() -> ResponseReturnValue:
        recipes = repo().search(request.args.get("q", ""), request.args.get("cuisine", ""))
        return jsonify(recipes=[serialize(recipe) for recipe in recipes])

    @app.get("/api/recipes/<recipe_id>")
    def get_recipe(recipe_id: str) -> ResponseReturnValue:
        return jsonify(serialize(repo().get_by_id(recipe_id)))

    @app.post("/api/recipes")
    def create_recipe() -> ResponseReturnValue:
        user_id = current_user()
        if user_id is None:
            return _unauthenticated()

        draft = RecipeDraft.from_dict(_json_object())
        recipe_id = repo().create(draft, user_id)
        return jsonify(id=recipe_id), 201

    @app.put("/api/recipes/<recipe_id>")
    def update_recipe(recipe_id: str) -> ResponseReturnValue:
        user_id = current_user()
        if user_id is None:
            return _unauthenticated()

        draft = RecipeDraft.from_dict(_json_object())
        repo().update(recipe_id, draft, user_id)
        return jsonify(serialize(repo().get_by_id(recipe_id)))

    @app.delete("/api/recipes/<recipe_id>")
    def delete_recipe(recipe_id: str) -> ResponseReturnValue:
        user_id = current_user()
        if user_id is None:
            return _unauthenticated()

        repo().delete(recipe_id, user_id)
        return "", 204

    @app.post("/api/recipes/seed")
    def seed_recipes() -> ResponseReturnValue:
        inserted = repo().seed_if_empty()
        return jsonify(inserted=inserted)

    @app.post("/api/recipes/from-image")
    def recipe_from_image() -> ResponseReturnValue:
        if current_user() is None:
            return _unauthenticated()

        payload = _json_object()
        draft = app.config["RECIPE_ASSISTANT"].extract_recipe_from_image(str(payload.get("photo_data_uri") or ""))
        return jsonify(
            title=draft.title,
            cuisine=draft.cuisine,
            ingredients=draft.ingredients,
            instructions=draft.instructions,
            image=draft.image,
        )

    @app.post("/api/substitutions")
    def substitutions() -> ResponseReturnValue:
        payload = _json_object()
        suggestions = app.config["RECIPE_ASSISTANT"].suggest_substitutes(
            str(payload.get("recipe_name") or ""),
            str(payload.get("ingredient") or ""),
        )
        return jsonify(substitutions=suggestions)

    return app


def _unauthenticated() -> ResponseReturnValue:
    return jsonify(error="Please sign in to continue."), 401


def _json_object() -> dict:
    payload = request.get_json(silent=True)
    if payload is None:
        return {}
    if not isinstance(payload, dict):
        raise ValidationError("Request body must be a JSON object.")
    return payload


__all__ = ["create_app", "Recipe", "RecipeDraft", "RecipeRepository"]
