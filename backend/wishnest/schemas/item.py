from typing import Any, Optional
from pydantic import BaseModel, ConfigDict, Field


class ItemPayload(BaseModel):
    """
    Item create/update body.

    Fields are loosely typed: per-field rules (required, trimmed, length
    limits, alternate shape) live in the item service so that an update
    can tell an absent field from an explicit null.
    """
    model_config = ConfigDict(populate_by_name=True)

    title: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    icon_key: Optional[str] = Field(None, alias="iconKey")
    url: Optional[str] = None
    price: Optional[float] = None
    alternate: Optional[Any] = None
