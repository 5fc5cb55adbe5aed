from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class InventoryItem(CamelModel):
    id: str
    name: str
    category: str = "Uncategorized"
    price: float = 0.0
    cost: Optional[float] = None
    quantity: int = 0

    @field_validator("category", mode="before")
    @classmethod
    def _default_category(cls, v: Optional[str]) -> str:
        if isinstance(v, str):
            v = v.strip()
        return v or "Uncategorized"

    @field_validator("quantity")
    @classmethod
    def _quantity_non_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError("quantity must be >= 0")
        return v


class InventoryItemUpdate(CamelModel):
    """Partial update; an omitted field is left alone, only cost and category accept null."""
    name: Optional[str] = None
    category: Optional[str] = None
    price: Optional[float] = Field(default=None, allow_inf_nan=False)
    cost: Optional[float] = Field(default=None, allow_inf_nan=False)
    quantity: Optional[int] = None

    @field_validator("name", "price", "quantity", mode="before")
    @classmethod
    def _not_null(cls, v):
        if v is None:
            raise ValueError("cannot be null")
        return v

    @field_validator("name", "category")
    @classmethod
    def _strip_optional(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        v = v.strip()
        if not v:
            raise ValueError("cannot be empty")
        return v

    @field_validator("quantity")
    @classmethod
    def _quantity_non_negative(cls, v: Optional[int]) -> Optional[int]:
        if v is not None and v < 0:
            raise ValueError("quantity must be >= 0")
        return v


class UploadResult(CamelModel):
    uploaded: int
    message: str


class QrLabel(CamelModel):
    id: str
    name: str
    price: float
    price_label: str
    payload: str
