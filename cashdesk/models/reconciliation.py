from __future__ import annotations
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class Classification(str, Enum):
    MATCH = "Match"
    SURPLUS = "Surplus"
    DEFICIT = "Deficit"


class DenominationCount(BaseModel):
    model_config = ConfigDict(frozen=True)

    face_value: float = Field(..., gt=0, allow_inf_nan=False)
    # Counts <= 0 are treated as zero by the reconciliation engine.
    quantity: int = 0


class BreakdownLine(BaseModel):
    model_config = ConfigDict(frozen=True)

    face_value: float
    quantity: int
    subtotal: float
    text: str


class ReconciliationResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    currency: str
    counted_total: float
    recorded_balance: float
    difference: float
    precision: int
    classification: Classification
    breakdown: List[BreakdownLine] = []
    breakdown_text: str = ""


class ReconciliationIn(BaseModel):
    counts: List[DenominationCount]
    recorded_balance: Optional[float] = Field(None, allow_inf_nan=False)
