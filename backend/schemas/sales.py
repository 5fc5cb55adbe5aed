from enum import Enum
from typing import Optional

from pydantic import ConfigDict, Field, field_validator

from .inventory import CamelModel


class SaleIn(CamelModel):
    """Body of POST /api/record-sale; the mirror keeps these fields verbatim."""
    model_config = ConfigDict(extra="ignore")

    item_id: str
    name: str
    price: float = Field(allow_inf_nan=False)
    cost: Optional[float] = Field(default=None, allow_inf_nan=False)
    timestamp: str

    @field_validator("item_id", "timestamp")
    @classmethod
    def _strip_required(cls, v: str) -> str:
        v = (v or "").strip()
        if not v:
            raise ValueError("field is required")
        return v


class SaleRecord(SaleIn):
    sale_id: int


class ScanRequest(CamelModel):
    # raw text decoded from a QR label, e.g. '{"id":"abc","name":"Bear"}'
    decoded_text: Optional[str] = None
    item_id: Optional[str] = None


class ScanOutcome(str, Enum):
    RECORDED = "recorded"
    NOT_FOUND = "not_found"
    OUT_OF_STOCK = "out_of_stock"
    INVALID = "invalid"


class ScanResult(CamelModel):
    outcome: ScanOutcome
    item_id: Optional[str] = None
    sale: Optional[SaleRecord] = None
