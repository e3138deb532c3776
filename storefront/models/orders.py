from __future__ import annotations

from datetime import datetime, timezone
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .cart import CartItem


def iso_timestamp(now: Optional[datetime] = None) -> str:
    """UTC ISO-8601 timestamp with millisecond precision and a `Z` suffix."""
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return now.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class OrderForm(BaseModel):
    """Raw values typed into the checkout form."""
    full_name: str = Field(default="", description="Customer full name")
    phone: str = Field(default="", description="Contact phone number")
    city: str = Field(default="", description="Delivery city")
    notes: str = Field(default="", description="Free-form delivery notes")


class OrderDraft(BaseModel):
    """Order assembled on the client at submission time.

    Serialized with camelCase keys, which is the wire format the orders API expects.
    """
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    full_name: str = Field(alias="fullName", description="Customer full name")
    phone: str = Field(description="Contact phone number")
    city: str = Field(description="Delivery city")
    notes: str = Field(default="", description="Free-form delivery notes")
    items: List[CartItem] = Field(default_factory=list, description="Cart snapshot, in cart order")
    total: Union[int, float] = Field(default=0, description="Cart total")
    date: str = Field(default_factory=iso_timestamp, description="Submission time, ISO-8601")

    @field_validator("total")
    @classmethod
    def _non_negative_total(cls, value):
        if value < 0:
            raise ValueError("total must be non-negative")
        return value

    @classmethod
    def build(
        cls,
        form: OrderForm,
        items: List[CartItem],
        total: Union[int, float, None],
        now: Optional[datetime] = None,
    ) -> "OrderDraft":
        return cls(
            full_name=form.full_name.strip(),
            phone=form.phone.strip(),
            city=form.city.strip(),
            notes=(form.notes or "").strip(),
            items=list(items),
            total=total or 0,
            date=iso_timestamp(now),
        )

    def to_payload(self) -> dict:
        """Wire representation: a plain dict with camelCase keys."""
        return self.model_dump(by_alias=True)
