"""
In-memory storage backend (for local development and testing).
"""
import copy
import logging
import threading
import uuid
from typing import Dict, Any
from store.base import BaseDocumentStorage

logger = logging.getLogger(__name__)


class MemoryDocumentStorage(BaseDocumentStorage):
    """In-memory storage backend for document collections."""

    def __init__(self):
        """Initialize in-memory storage."""
        # Store structure: {collection: {key: document}}
        self._collections: Dict[str, Dict[str, Dict[str, Any]]] = {}
        self._lock = threading.Lock()

    def push(self, collection: str, document: Dict[str, Any]) -> str:
        """Write a document under a new unique key."""
        with self._lock:
            documents = self._collections.setdefault(collection, {})
            key = str(uuid.uuid4())
            while key in documents:
                key = str(uuid.uuid4())
            documents[key] = copy.deepcopy(document)
        logger.debug("Pushed %s/%s", collection, key)
        return key

    def get_all(self, collection: str) -> Dict[str, Dict[str, Any]]:
        """Return a snapshot of every document in the collection."""
        with self._lock:
            return copy.deepcopy(self._collections.get(collection, {}))

    def update(self, collection: str, key: str, fields: Dict[str, Any]) -> bool:
        """Merge fields into an existing document."""
        with self._lock:
            document = self._collections.get(collection, {}).get(key)
            if document is None:
                return False
            document.update(copy.deepcopy(fields))
        logger.debug("Updated %s/%s fields=%s", collection, key, sorted(fields))
        return True

    def delete(self, collection: str, key: str) -> bool:
        """Delete a document."""
        with self._lock:
            documents = self._collections.get(collection)
            if documents is None or key not in documents:
                return False
            del documents[key]
        logger.debug("Deleted %s/%s", collection, key)
        return True
