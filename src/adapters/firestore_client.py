"""Firestore database client."""

from typing import Any

from google.cloud import firestore  # type: ignore[attr-defined]


class FirestoreClient:
    """Client for Firestore document operations.

    Automatically connects to emulator when FIRESTORE_EMULATOR_HOST is set.
    Each call is a single atomic read or write; callers compose them without locking.
    """

    def __init__(self, project_id: str) -> None:
        """Initialize Firestore client.

        Args:
            project_id: GCP project ID.
        """
        self._db = firestore.Client(project=project_id)

    def get(self, collection: str, doc_id: str) -> dict[str, Any] | None:
        """Get a document by ID.

        Args:
            collection: Collection name.
            doc_id: Document ID.

        Returns:
            Document data or None if not found.
        """
        doc = self._db.collection(collection).document(doc_id).get()
        if doc.exists:
            return doc.to_dict()
        return None

    def set(self, collection: str, doc_id: str, data: dict[str, Any]) -> None:
        """Create or replace a document.

        Args:
            collection: Collection name.
            doc_id: Document ID.
            data: Document data.
        """
        self._db.collection(collection).document(doc_id).set(data)

    def list_ids(self, collection: str) -> list[str]:
        """List the IDs of every document in a collection.

        Documents are not fetched, so this stays cheap for large collections.

        Args:
            collection: Collection name.

        Returns:
            Document IDs.
        """
        return [ref.id for ref in self._db.collection(collection).list_documents()]
