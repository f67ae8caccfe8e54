"""
FastAPI routes for item management.
"""
from typing import List, Optional
from fastapi import APIRouter, Depends, Query, Request, status
from fastapi.responses import PlainTextResponse
from api.items.models import (
    Item,
    ItemCreateRequest,
    ItemUpdateRequest,
    ItemPatchRequest,
)
from api.items.service import (
    create_item,
    list_items,
    update_item,
    patch_item,
    delete_item,
)
from store.base import BaseDocumentStorage

router = APIRouter()


def get_document_storage(request: Request) -> BaseDocumentStorage:
    """Storage backend the application was created with."""
    return request.app.state.document_storage


def get_items_collection(request: Request) -> str:
    return request.app.state.items_collection


@router.post("/create", response_model=Item, status_code=status.HTTP_201_CREATED)
def create_item_endpoint(
    payload: ItemCreateRequest,
    storage: BaseDocumentStorage = Depends(get_document_storage),
    collection: str = Depends(get_items_collection),
):
    """Create a new item."""
    return create_item(storage, collection, payload)


@router.get("/read", response_model=List[Item])
def read_items_endpoint(
    storage: BaseDocumentStorage = Depends(get_document_storage),
    collection: str = Depends(get_items_collection),
):
    """List all items."""
    return list_items(storage, collection)


@router.put("/update", response_class=PlainTextResponse)
def update_item_put_endpoint(
    payload: ItemUpdateRequest,
    item_id: Optional[str] = Query(default=None, alias="itemID"),
    storage: BaseDocumentStorage = Depends(get_document_storage),
    collection: str = Depends(get_items_collection),
):
    """Update an item (PUT method); all fields are rewritten."""
    item_id = update_item(storage, collection, item_id, payload)
    return f"Item with ID {item_id} updated successfully"


@router.patch("/update", response_class=PlainTextResponse)
def update_item_patch_endpoint(
    payload: ItemPatchRequest,
    item_id: Optional[str] = Query(default=None, alias="itemID"),
    storage: BaseDocumentStorage = Depends(get_document_storage),
    collection: str = Depends(get_items_collection),
):
    """Update an item (PATCH method); only the given fields are merged."""
    item_id = patch_item(storage, collection, item_id, payload)
    return f"Item with ID {item_id} updated successfully"


@router.delete("/delete", response_class=PlainTextResponse)
def delete_item_endpoint(
    item_id: Optional[str] = Query(default=None, alias="itemID"),
    storage: BaseDocumentStorage = Depends(get_document_storage),
    collection: str = Depends(get_items_collection),
):
    """Delete an item."""
    item_id = delete_item(storage, collection, item_id)
    return f"Item with ID {item_id} deleted successfully"
