from __future__ import annotations

import contextlib
import logging
import os
from datetime import timedelta
from typing import Callable, Iterator, List, Optional, Tuple

from google.api_core import exceptions as gcloud_exceptions
from google.auth import exceptions as auth_exceptions
from google.cloud import firestore, storage

from .errors import NotFound, StorageUnavailable
from .storage import ASCENDING, SERVER_TIMESTAMP, Document, Unsubscribe

logger = logging.getLogger(__name__)

SIGNED_URL_EXPIRATION = timedelta(days=7)

_UNAVAILABLE = (
    gcloud_exceptions.ServiceUnavailable,
    gcloud_exceptions.DeadlineExceeded,
    gcloud_exceptions.RetryError,
    gcloud_exceptions.Unauthenticated,
    gcloud_exceptions.PermissionDenied,
    auth_exceptions.GoogleAuthError,
)


@contextlib.contextmanager
def _backend_errors(action: str) -> Iterator[None]:
    try:
        yield
    except _UNAVAILABLE as exc:
        logger.error("Backend unavailable while trying to %s: %s", action, exc)
        raise StorageUnavailable(f"Could not {action}: storage backend is unavailable.") from exc


def _direction(direction: str) -> str:
    if direction == ASCENDING:
        return firestore.Query.ASCENDING
    return firestore.Query.DESCENDING


class FirestoreDocumentStore:
    """Document store backed by a Cloud Firestore database."""

    def __init__(self, *, project: Optional[str] = None) -> None:
        with _backend_errors("connect to Firestore"):
            self._client = firestore.Client(project=project)

    @classmethod
    def from_env(cls) -> "FirestoreDocumentStore":
        return cls(project=os.environ.get("GCP_PROJECT"))

    def insert(self, collection: str, doc: Document) -> str:
        payload = {
            key: firestore.SERVER_TIMESTAMP if value is SERVER_TIMESTAMP else value
            for key, value in doc.items()
        }
        doc_ref = self._client.collection(collection).document()
        with _backend_errors("save the recipe"):
            doc_ref.set(payload)
        return doc_ref.id

    def get(self, collection: str, doc_id: str) -> Optional[Document]:
        with _backend_errors("load the recipe"):
            snapshot = self._client.collection(collection).document(doc_id).get()
        if not snapshot.exists:
            return None
        return snapshot.to_dict() or {}

    def query(self, collection: str, order_by: str, direction: str) -> List[Tuple[str, Document]]:
        query = self._client.collection(collection).order_by(order_by, direction=_direction(direction))
        with _backend_errors("list recipes"):
            return [(doc.id, doc.to_dict() or {}) for doc in query.stream()]

    def subscribe(
        self,
        collection: str,
        order_by: str,
        direction: str,
        on_change: Callable[[List[Tuple[str, Document]]], None],
    ) -> Unsubscribe:
        query = self._client.collection(collection).order_by(order_by, direction=_direction(direction))

        def on_snapshot(docs, changes, read_time):
            on_change([(doc.id, doc.to_dict() or {}) for doc in docs])

        with _backend_errors("watch recipes"):
            watch = query.on_snapshot(on_snapshot)
        return watch.unsubscribe

    def update(self, collection: str, doc_id: str, fields: Document) -> None:
        with _backend_errors("update the recipe"):
            try:
                self._client.collection(collection).document(doc_id).update(fields)
            except gcloud_exceptions.NotFound as exc:
                raise NotFound(f"Recipe '{doc_id}' does not exist.") from exc

    def delete(self, collection: str, doc_id: str) -> None:
        with _backend_errors("delete the recipe"):
            self._client.collection(collection).document(doc_id).delete()

    def exists_any(self, collection: str) -> bool:
        with _backend_errors("inspect the catalog"):
            return any(True for _ in self._client.collection(collection).limit(1).stream())


class CloudStorageAssetStore:
    """Asset store backed by a Cloud Storage bucket.

    Without a bucket name every upload or delete raises
    :class:`StorageUnavailable`, while stored URLs are still served as-is.
    """

    def __init__(self, *, project: Optional[str] = None, bucket_name: Optional[str] = None) -> None:
        self._bucket_name = bucket_name

        if bucket_name:
            with _backend_errors("connect to Cloud Storage"):
                self._storage_client = storage.Client(project=project)
            self._bucket = self._storage_client.bucket(bucket_name)
        else:
            self._storage_client = None
            self._bucket = None

    @classmethod
    def from_env(cls) -> "CloudStorageAssetStore":
        return cls(project=os.environ.get("GCP_PROJECT"), bucket_name=os.environ.get("GCS_BUCKET"))

    def upload(self, path: str, data: bytes, content_type: str) -> str:
        bucket = self._require_bucket()
        blob = bucket.blob(path)
        with _backend_errors("upload the image"):
            blob.upload_from_string(data, content_type=content_type)
        return self._get_image_url(blob)

    def resolve_url(self, path: str) -> Optional[str]:
        if not self._bucket:
            return None
        return self._get_image_url(self._bucket.blob(path))

    def delete(self, path: str) -> None:
        bucket = self._require_bucket()
        with _backend_errors("delete the image"):
            try:
                bucket.blob(path).delete()
            except gcloud_exceptions.NotFound as exc:
                raise NotFound(f"Image '{path}' does not exist.") from exc

    def _require_bucket(self) -> storage.Bucket:
        if not self._bucket:
            raise StorageUnavailable("A Cloud Storage bucket must be configured to store images.")
        return self._bucket

    def _get_image_url(self, blob: storage.Blob) -> str:
        try:
            return blob.generate_signed_url(
                version="v4", method="GET", expiration=SIGNED_URL_EXPIRATION
            )
        except (ValueError, TypeError, AttributeError, auth_exceptions.GoogleAuthError):
            # Signing needs a service account key; fall back to the public URL.
            return blob.public_url


__all__ = ["CloudStorageAssetStore", "FirestoreDocumentStore", "SIGNED_URL_EXPIRATION"]
