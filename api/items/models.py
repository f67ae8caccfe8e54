"""
Request/Response models for item API.

Wire names follow the deployed frontend (nome, telefone, endereco); the
Python attribute names are accepted on input as well.
"""
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional


class ItemFields(BaseModel):
    """The mutable fields of an item."""
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(alias="nome", strict=True)
    phone: int = Field(alias="telefone", strict=True)
    address: str = Field(alias="endereco", strict=True)


class ItemCreateRequest(ItemFields):
    """Request model for item creation. A client supplied id is ignored."""


class ItemUpdateRequest(ItemFields):
    """Request model for item update (PUT); every field is rewritten."""


class ItemPatchRequest(BaseModel):
    """Request model for partial item update (PATCH); absent fields are left unchanged."""
    model_config = ConfigDict(populate_by_name=True)

    name: Optional[str] = Field(default=None, alias="nome", strict=True)
    phone: Optional[int] = Field(default=None, alias="telefone", strict=True)
    address: Optional[str] = Field(default=None, alias="endereco", strict=True)


class Item(ItemFields):
    """An item as stored, with its store key."""
    id: str
