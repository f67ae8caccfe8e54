"""
Base storage interface for document storage backends.
"""
from abc import ABC, abstractmethod
from typing import Dict, Any


class BaseDocumentStorage(ABC):
    """Keyed collections of schemaless documents.

    Implementations must be safe for concurrent use by in-flight requests.
    Every primitive addresses a single key and is atomic at the store.
    Backend failures are raised as ``core.exceptions.StoreError``.
    """

    @abstractmethod
    def push(self, collection: str, document: Dict[str, Any]) -> str:
        """Write a document under a freshly generated unique key and return the key."""
        pass

    @abstractmethod
    def get_all(self, collection: str) -> Dict[str, Dict[str, Any]]:
        """Return every document of the collection, keyed by store key."""
        pass

    @abstractmethod
    def update(self, collection: str, key: str, fields: Dict[str, Any]) -> bool:
        """Merge fields into the document at key.

        Returns False, writing nothing, when the key does not exist.
        """
        pass

    @abstractmethod
    def delete(self, collection: str, key: str) -> bool:
        """Delete the document at key. Returns whether a document was removed."""
        pass
