from __future__ import annotations

from typing import Union

from pydantic import BaseModel, Field, field_validator


class CartItem(BaseModel):
    """One line of the shopping cart as captured at checkout."""
    name: str = Field(description="Product name")
    size: str = Field(default="", description="Selected size")
    color: str = Field(default="", description="Selected color")
    quantity: int = Field(gt=0, description="Number of units")
    price: Union[int, float] = Field(description="Unit price")

    @field_validator("price")
    @classmethod
    def _non_negative_price(cls, value):
        if value < 0:
            raise ValueError("price must be non-negative")
        return value

    @property
    def line_total(self) -> Union[int, float]:
        return self.price * self.quantity
