from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timezone
from typing import Callable, List, Optional, Sequence

from .errors import NotFound, Unauthorized, ValidationError
from .images import InlineImage, build_asset_path, is_hosted_url, is_inline_image
from .models import SYSTEM_OWNER, Recipe, RecipeDraft, normalize_cuisine, parse_lines
from .storage import DESCENDING, SERVER_TIMESTAMP, AssetStore, Document, DocumentStore, Unsubscribe

logger = logging.getLogger(__name__)

SEED_WORKERS = 8


class RecipeRepository:
    """Ownership checked persistence of recipes and their uploaded images."""

    def __init__(
        self,
        documents: DocumentStore,
        assets: AssetStore,
        *,
        collection_name: str = "recipes",
    ) -> None:
        self._documents = documents
        self._assets = assets
        self._collection = collection_name

    def create(self, draft: RecipeDraft, owner_id: str) -> str:
        draft = draft.cleaned()

        image_url = ""
        image_path = ""
        if is_inline_image(draft.image):
            image_url, image_path = self._upload_image(InlineImage.parse(draft.image), owner_id, draft.title)
        elif is_hosted_url(draft.image):
            image_url = draft.image
        elif draft.image:
            raise ValidationError("Image must be an inline image or an http(s) URL.")

        doc = {
            "title": draft.title,
            "cuisine": draft.cuisine,
            "ingredients": draft.ingredients,
            "instructions": draft.instructions,
            "image_url": image_url,
            "image_path": image_path,
            "image_hint": draft.image_hint,
            "owner_id": owner_id,
            "created_at": SERVER_TIMESTAMP,
        }
        recipe_id = self._documents.insert(self._collection, doc)
        logger.info("Created recipe %s for owner %s", recipe_id, owner_id)
        return recipe_id

    def get_by_id(self, recipe_id: str) -> Recipe:
        data = self._documents.get(self._collection, recipe_id)
        if data is None:
            raise NotFound(f"Recipe '{recipe_id}' does not exist.")
        return self._doc_to_recipe(recipe_id, data)

    def list_ordered(self) -> List[Recipe]:
        docs = self._documents.query(self._collection, "created_at", DESCENDING)
        return [self._doc_to_recipe(doc_id, data) for doc_id, data in docs]

    def search(self, term: str = "", cuisine: str = "") -> List[Recipe]:
        """Filter the ordered catalog by a substring and a cuisine tag."""

        needle = term.strip().lower()
        wanted = normalize_cuisine(cuisine) if cuisine and cuisine != "All" else None

        def matches(recipe: Recipe) -> bool:
            if wanted and recipe.cuisine != wanted:
                return False
            if not needle:
                return True
            return needle in recipe.title.lower() or any(
                needle in ingredient.lower() for ingredient in recipe.ingredients
            )

        return [recipe for recipe in self.list_ordered() if matches(recipe)]

    def subscribe(self, callback: Callable[[List[Recipe]], None]) -> Unsubscribe:
        """Deliver the full ordered catalog to ``callback`` on every change."""

        def on_change(docs):
            callback([self._doc_to_recipe(doc_id, data) for doc_id, data in docs])

        return self._documents.subscribe(self._collection, "created_at", DESCENDING, on_change)

    def update(self, recipe_id: str, draft: RecipeDraft, requester_id: str) -> None:
        existing = self._load_owned(recipe_id, requester_id)
        draft = draft.cleaned()

        fields = {
            "title": draft.title,
            "cuisine": draft.cuisine,
            "ingredients": draft.ingredients,
            "instructions": draft.instructions,
            "image_hint": draft.image_hint,
        }

        if is_inline_image(draft.image):
            image = InlineImage.parse(draft.image)
            self._delete_asset_if_exists(existing.get("image_path"))
            image_url, image_path = self._upload_image(image, requester_id, draft.title)
            fields["image_url"] = image_url
            fields["image_path"] = image_path

        self._documents.update(self._collection, recipe_id, fields)
        logger.info("Updated recipe %s", recipe_id)

    def delete(self, recipe_id: str, requester_id: str) -> None:
        existing = self._load_owned(recipe_id, requester_id)
        self._delete_asset_if_exists(existing.get("image_path"))
        self._documents.delete(self._collection, recipe_id)
        logger.info("Deleted recipe %s", recipe_id)

    def seed_if_empty(self, samples: Optional[Sequence[RecipeDraft]] = None) -> int:
        """Populate an empty catalog with sample recipes.

        Returns the number of inserted recipes, which is zero whenever the
        collection already holds at least one record.
        """

        if self._documents.exists_any(self._collection):
            logger.info("Catalog already populated; skipping seed")
            return 0

        if samples is None:
            from .samples import SAMPLE_RECIPES

            samples = SAMPLE_RECIPES

        docs = [self._seed_doc(sample.cleaned()) for sample in samples]
        if not docs:
            return 0

        with ThreadPoolExecutor(max_workers=min(SEED_WORKERS, len(docs))) as pool:
            ids = list(pool.map(lambda doc: self._documents.insert(self._collection, doc), docs))

        logger.info("Seeded %d sample recipes", len(ids))
        return len(ids)

    def _load_owned(self, recipe_id: str, requester_id: str) -> Document:
        data = self._documents.get(self._collection, recipe_id)
        if data is None:
            raise NotFound(f"Recipe '{recipe_id}' does not exist.")
        if data.get("owner_id") != requester_id:
            raise Unauthorized("User not authorized to modify this recipe.")
        return data

    def _upload_image(self, image: InlineImage, owner_id: str, title: str) -> tuple[str, str]:
        path = build_asset_path(owner_id, title, image.extension)
        url = self._assets.upload(path, image.data, image.content_type)
        return url, path

    def _delete_asset_if_exists(self, path: Optional[str]) -> None:
        if not path:
            return
        try:
            self._assets.delete(path)
        except NotFound:
            logger.warning("Could not delete image %s, it may not exist", path)

    def _seed_doc(self, sample: RecipeDraft) -> Document:
        return {
            "title": sample.title,
            "cuisine": sample.cuisine,
            "ingredients": sample.ingredients,
            "instructions": sample.instructions,
            "image_url": sample.image if is_hosted_url(sample.image) else "",
            "image_path": "",
            "image_hint": sample.image_hint,
            "owner_id": SYSTEM_OWNER,
            "created_at": SERVER_TIMESTAMP,
        }

    def _doc_to_recipe(self, doc_id: str, data: Document) -> Recipe:
        image_path = data.get("image_path") or ""
        image_url = data.get("image_url") or ""

        if image_path:
            image_url = self._assets.resolve_url(image_path) or image_url

        return Recipe(
            id=doc_id,
            title=data.get("title", ""),
            cuisine=data.get("cuisine", ""),
            ingredients=_as_lines(data.get("ingredients")),
            instructions=_as_lines(data.get("instructions")),
            owner_id=data.get("owner_id", ""),
            created_at=_timestamp(doc_id, data.get("created_at")),
            image_url=image_url,
            image_path=image_path,
            image_hint=data.get("image_hint") or "",
        )


def _as_lines(value) -> List[str]:
    if isinstance(value, str):
        return parse_lines(value)
    if isinstance(value, (list, tuple)):
        return parse_lines([line for line in value if isinstance(line, str)])
    return []


def _timestamp(doc_id: str, value) -> str:
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.isoformat()
    if isinstance(value, str) and value:
        return value
    # Pending server timestamps read back as missing until the write settles.
    logger.debug("Recipe %s has no creation timestamp; using current time", doc_id)
    return datetime.now(timezone.utc).isoformat()


__all__ = ["RecipeRepository", "SEED_WORKERS"]
