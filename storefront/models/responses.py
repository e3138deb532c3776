from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, Field


class OrderAccepted(BaseModel):
    """Body returned once an order has been written to the orders document."""
    success: Literal[True] = True
    ok: Literal[True] = True
    id: str = Field(description="Assigned order id")


class OrderError(BaseModel):
    """Body returned for every rejected request."""
    error: str = Field(description="Human-readable reason")
    success: Literal[False] = False
    detail: Optional[str] = Field(default=None, description="Proximate cause, when known")

    def to_body(self) -> dict:
        return self.model_dump(exclude_none=True)
