"""
Business logic for item management.
"""
import logging
from typing import Any, Dict, List, Optional

from pydantic import ValidationError as PydanticValidationError

from api.items.models import (
    Item,
    ItemCreateRequest,
    ItemUpdateRequest,
    ItemPatchRequest,
)
from core.exceptions import NotFoundError, ValidationError
from store.base import BaseDocumentStorage

logger = logging.getLogger(__name__)


def require_item_id(item_id: Optional[str]) -> str:
    """Reject a missing or blank item id before any store call."""
    if not item_id or not item_id.strip():
        raise ValidationError("Item ID is missing")
    return item_id


def create_item(storage: BaseDocumentStorage, collection: str, payload: ItemCreateRequest) -> Item:
    """Create a new item; the store assigns its id."""
    document = payload.model_dump(by_alias=True)
    item_id = storage.push(collection, document)
    logger.info("Created item %s", item_id)
    return Item(id=item_id, **document)


def list_items(storage: BaseDocumentStorage, collection: str) -> List[Item]:
    """List every item. Order is not guaranteed."""
    documents = storage.get_all(collection)

    items = []
    for item_id, document in documents.items():
        try:
            # The store key is authoritative for the id
            items.append(Item.model_validate({**document, "id": item_id}))
        except PydanticValidationError as e:
            logger.warning("Skipping undecodable item %s: %s", item_id, e.errors())
    return items


def _merge_item(storage: BaseDocumentStorage, collection: str, item_id: str, fields: Dict[str, Any]) -> None:
    if not storage.update(collection, item_id, fields):
        raise NotFoundError("Item", item_id)
    logger.info("Updated item %s fields=%s", item_id, sorted(fields))


def update_item(
    storage: BaseDocumentStorage,
    collection: str,
    item_id: Optional[str],
    payload: ItemUpdateRequest
) -> str:
    """Rewrite the three mutable fields of an existing item."""
    item_id = require_item_id(item_id)
    _merge_item(storage, collection, item_id, payload.model_dump(by_alias=True))
    return item_id


def patch_item(
    storage: BaseDocumentStorage,
    collection: str,
    item_id: Optional[str],
    payload: ItemPatchRequest
) -> str:
    """Merge only the fields present in the request into an existing item."""
    item_id = require_item_id(item_id)

    fields = payload.model_dump(by_alias=True, exclude_unset=True)
    if not fields:
        raise ValidationError("No fields to update")
    null_fields = sorted(name for name, value in fields.items() if value is None)
    if null_fields:
        raise ValidationError(f"Fields cannot be null: {', '.join(null_fields)}")

    _merge_item(storage, collection, item_id, fields)
    return item_id


def delete_item(storage: BaseDocumentStorage, collection: str, item_id: Optional[str]) -> str:
    """Delete an item. Deleting an unknown id succeeds."""
    item_id = require_item_id(item_id)
    if storage.delete(collection, item_id):
        logger.info("Deleted item %s", item_id)
    else:
        logger.info("Delete of item %s removed nothing", item_id)
    return item_id
